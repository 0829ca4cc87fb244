# repositories/employee_repository.py
import logging
from typing import Any, Dict, List, Optional

from pymongo import ReturnDocument

from database import get_employee_collection, parse_object_id
from utils.timestamps import utcnow

logger = logging.getLogger(__name__)

# Newest first; _id breaks ties between records created in the same millisecond
NEWEST_FIRST = [("created_at", -1), ("_id", -1)]


async def find(filters: Optional[Dict[str, Any]] = None) -> List[Dict[str, Any]]:
    cursor = get_employee_collection().find(filters or {}).sort(NEWEST_FIRST)
    return await cursor.to_list(length=None)


async def find_by_id(eid) -> Optional[Dict[str, Any]]:
    oid = parse_object_id(eid)
    if oid is None:
        return None
    return await get_employee_collection().find_one({"_id": oid})


async def find_by_email(email: str, exclude_id=None) -> Optional[Dict[str, Any]]:
    query: Dict[str, Any] = {"email": email}
    if exclude_id is not None:
        query["_id"] = {"$ne": exclude_id}
    return await get_employee_collection().find_one(query)


async def create(employee_doc: Dict[str, Any]) -> Dict[str, Any]:
    now = utcnow()
    doc = {**employee_doc, "created_at": now, "updated_at": now}
    result = await get_employee_collection().insert_one(doc)
    doc["_id"] = result.inserted_id
    logger.info(f"Employee created: {result.inserted_id}")
    return doc


async def update(eid, changes: Dict[str, Any]) -> Optional[Dict[str, Any]]:
    """Apply ``changes``, refresh updated_at and return the new document (None if gone)."""
    oid = parse_object_id(eid)
    if oid is None:
        return None
    updated = await get_employee_collection().find_one_and_update(
        {"_id": oid},
        {"$set": {**changes, "updated_at": utcnow()}},
        return_document=ReturnDocument.AFTER,
    )
    if updated:
        logger.info(f"Employee updated: {oid}")
    return updated


async def delete(eid) -> bool:
    oid = parse_object_id(eid)
    if oid is None:
        return False
    result = await get_employee_collection().delete_one({"_id": oid})
    if result.deleted_count:
        logger.info(f"Employee deleted: {oid}")
    return result.deleted_count > 0
