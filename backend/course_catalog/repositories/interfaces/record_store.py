# repositories/interfaces/record_store.py
"""
Record store interface
"""
from abc import ABC, abstractmethod
from typing import Optional, List, Dict, Any
from ...models.query import RecordQuery


class RecordStoreInterface(ABC):
    """
    Abstract interface over a single collection of documents.

    Documents are plain dicts; the store-assigned identifier is exposed
    under ``_id`` as a string regardless of the backend representation.
    """

    @abstractmethod
    async def insert_one(self, document: Dict[str, Any]) -> str:
        """Insert a document and return its new identifier"""
        pass

    @abstractmethod
    async def insert_many(self, documents: List[Dict[str, Any]]) -> List[str]:
        """Insert several documents, returning identifiers in input order"""
        pass

    @abstractmethod
    async def find(self, query: Optional[RecordQuery] = None) -> List[Dict[str, Any]]:
        """Find documents matching a query (all documents when omitted)"""
        pass

    @abstractmethod
    async def find_one(self, record_id: str) -> Optional[Dict[str, Any]]:
        """Get a document by identifier; malformed identifiers yield None"""
        pass

    @abstractmethod
    async def update_one(
        self, record_id: str, fields: Dict[str, Any]
    ) -> Optional[Dict[str, Any]]:
        """Set fields on a document and return it as it is after the update"""
        pass

    @abstractmethod
    async def delete_one(self, record_id: str) -> bool:
        """Delete a document; False when nothing matched"""
        pass

    @abstractmethod
    async def count(self) -> int:
        """Number of documents in the collection"""
        pass

    @abstractmethod
    async def ping(self) -> bool:
        """Check that the backend is reachable"""
        pass

    @abstractmethod
    async def close(self) -> None:
        """Release any resources held by the store"""
        pass
