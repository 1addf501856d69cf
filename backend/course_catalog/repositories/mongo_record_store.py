"""
MongoDB record store implementation
"""
import re
from typing import Optional, List, Dict, Any

from bson import ObjectId
from pymongo import ReturnDocument

from .interfaces.record_store import RecordStoreInterface
from ..core.database import DatabaseHandle
from ..models.query import RecordQuery


def to_mongo_filter(query: Optional[RecordQuery]) -> Dict[str, Any]:
    """Translate a record query into a MongoDB filter document"""
    if query is None:
        return {}

    mongo_filter: Dict[str, Any] = {}

    for field, value in query.equals.items():
        mongo_filter[field] = getattr(value, "value", value)

    for field, term in query.contains.items():
        mongo_filter[field] = {"$regex": re.escape(term), "$options": "i"}

    for field, bound in query.at_most.items():
        mongo_filter[field] = {"$lte": bound}

    return mongo_filter


def _parse_id(record_id: str) -> Optional[ObjectId]:
    if not ObjectId.is_valid(record_id):
        return None
    return ObjectId(record_id)


def _normalize(document: Dict[str, Any]) -> Dict[str, Any]:
    document["_id"] = str(document["_id"])
    return document


class MongoRecordStore(RecordStoreInterface):
    """Record store backed by a MongoDB collection"""

    def __init__(self, handle: DatabaseHandle):
        self.handle = handle
        self._collection = None

    async def _get_collection(self):
        if self._collection is None:
            collection = await self.handle.acquire()
            if self._collection is None:
                self._collection = collection
            else:
                # Another request acquired while we were waiting
                await self.handle.release()
        return self._collection

    async def insert_one(self, document: Dict[str, Any]) -> str:
        collection = await self._get_collection()
        # insert_one mutates its argument by adding _id
        result = await collection.insert_one(dict(document))
        return str(result.inserted_id)

    async def insert_many(self, documents: List[Dict[str, Any]]) -> List[str]:
        collection = await self._get_collection()
        result = await collection.insert_many([dict(doc) for doc in documents])
        return [str(inserted_id) for inserted_id in result.inserted_ids]

    async def find(self, query: Optional[RecordQuery] = None) -> List[Dict[str, Any]]:
        collection = await self._get_collection()
        cursor = collection.find(to_mongo_filter(query))

        if query and query.sort:
            cursor = cursor.sort([(field, int(direction)) for field, direction in query.sort])
        if query and query.limit is not None:
            cursor = cursor.limit(query.limit)

        return [_normalize(doc) async for doc in cursor]

    async def find_one(self, record_id: str) -> Optional[Dict[str, Any]]:
        object_id = _parse_id(record_id)
        if object_id is None:
            return None

        collection = await self._get_collection()
        document = await collection.find_one({"_id": object_id})
        return _normalize(document) if document else None

    async def update_one(
        self, record_id: str, fields: Dict[str, Any]
    ) -> Optional[Dict[str, Any]]:
        object_id = _parse_id(record_id)
        if object_id is None:
            return None

        updates = {field: value for field, value in fields.items() if field != "_id"}
        collection = await self._get_collection()
        document = await collection.find_one_and_update(
            {"_id": object_id},
            {"$set": updates},
            return_document=ReturnDocument.AFTER,
        )
        return _normalize(document) if document else None

    async def delete_one(self, record_id: str) -> bool:
        object_id = _parse_id(record_id)
        if object_id is None:
            return False

        collection = await self._get_collection()
        result = await collection.delete_one({"_id": object_id})
        return result.deleted_count > 0

    async def count(self) -> int:
        collection = await self._get_collection()
        return await collection.count_documents({})

    async def ping(self) -> bool:
        collection = await self._get_collection()
        await collection.database.command("ping")
        return True

    async def close(self) -> None:
        if self._collection is not None:
            self._collection = None
            await self.handle.release()
