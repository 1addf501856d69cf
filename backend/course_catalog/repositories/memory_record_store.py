"""
In-memory record store implementation for development/testing
"""
import copy
from typing import Optional, List, Dict, Any
from uuid import uuid4
import threading

from .interfaces.record_store import RecordStoreInterface
from ..models.query import RecordQuery


class MemoryRecordStore(RecordStoreInterface):
    """In-memory implementation of the record store"""

    def __init__(self):
        # Insertion order doubles as the store-native order
        self.documents: Dict[str, Dict[str, Any]] = {}
        self.lock = threading.RLock()

    @staticmethod
    def _new_id() -> str:
        return uuid4().hex

    def _insert(self, document: Dict[str, Any]) -> str:
        record_id = self._new_id()
        stored = copy.deepcopy(document)
        stored["_id"] = record_id
        self.documents[record_id] = stored
        return record_id

    async def insert_one(self, document: Dict[str, Any]) -> str:
        """Insert a document and return its new identifier"""
        with self.lock:
            return self._insert(document)

    async def insert_many(self, documents: List[Dict[str, Any]]) -> List[str]:
        """Insert several documents in one locked step"""
        with self.lock:
            return [self._insert(document) for document in documents]

    async def find(self, query: Optional[RecordQuery] = None) -> List[Dict[str, Any]]:
        """Find documents matching a query"""
        with self.lock:
            documents = [copy.deepcopy(doc) for doc in self.documents.values()]

        if query:
            documents = query.apply(documents)

        return documents

    async def find_one(self, record_id: str) -> Optional[Dict[str, Any]]:
        """Get a document by identifier"""
        with self.lock:
            document = self.documents.get(record_id)
            return copy.deepcopy(document) if document else None

    async def update_one(
        self, record_id: str, fields: Dict[str, Any]
    ) -> Optional[Dict[str, Any]]:
        """Set fields on a document"""
        with self.lock:
            if record_id not in self.documents:
                return None

            document = self.documents[record_id]

            for field, value in fields.items():
                if field != "_id":
                    document[field] = copy.deepcopy(value)

            return copy.deepcopy(document)

    async def delete_one(self, record_id: str) -> bool:
        """Delete a document"""
        with self.lock:
            if record_id in self.documents:
                del self.documents[record_id]
                return True
            return False

    async def count(self) -> int:
        with self.lock:
            return len(self.documents)

    async def ping(self) -> bool:
        return True

    async def close(self) -> None:
        """Nothing to release for the in-memory store"""
        pass
