# database.py
import logging
from datetime import timezone
from typing import Optional

from motor.motor_asyncio import AsyncIOMotorClient
from bson.objectid import ObjectId

from config import settings

logger = logging.getLogger(__name__)

client = AsyncIOMotorClient(settings.MONGODB_URI, tz_aware=True, tzinfo=timezone.utc)
db = client[settings.MONGODB_DB]

def get_user_collection():
    return db["users"]

def get_employee_collection():
    return db["employees"]

def parse_object_id(value) -> Optional[ObjectId]:
    """Return an ObjectId for a valid id string, or None if it can't be one."""
    if isinstance(value, ObjectId):
        return value
    if isinstance(value, str) and ObjectId.is_valid(value):
        return ObjectId(value)
    return None

async def ensure_indexes():
    """
    Create the unique indexes that back the username/email uniqueness checks.

    The application checks for duplicates before every insert, but two requests
    can pass that check at the same time; these indexes reject the second write.
    """
    await get_user_collection().create_index("username", unique=True)
    await get_user_collection().create_index("email", unique=True)
    await get_employee_collection().create_index("email", unique=True)
    await get_employee_collection().create_index([("created_at", -1)])
    logger.info(f"Indexes ensured on database '{settings.MONGODB_DB}'")
