# repositories/account_repository.py
import logging
from typing import Any, Dict, Optional

from database import get_user_collection, parse_object_id
from services.credential_service import hash_password
from utils.timestamps import utcnow

logger = logging.getLogger(__name__)


async def find_one(filters: Dict[str, Any]) -> Optional[Dict[str, Any]]:
    return await get_user_collection().find_one(filters)


async def find_by_username_or_email(username: str, email: str) -> Optional[Dict[str, Any]]:
    return await find_one({"$or": [{"username": username}, {"email": email}]})


async def find_by_identifier(identifier: str) -> Optional[Dict[str, Any]]:
    """Exact, case-sensitive match on either username or email."""
    return await find_by_username_or_email(identifier, identifier)


async def find_by_id(user_id) -> Optional[Dict[str, Any]]:
    oid = parse_object_id(user_id)
    if oid is None:
        return None
    return await find_one({"_id": oid})


async def create_account(username: str, email: str, password: str) -> Dict[str, Any]:
    """Insert a new account. The password is hashed here, before it is stored."""
    now = utcnow()
    user_doc = {
        "username": username,
        "email": email,
        "password": await hash_password(password),
        "created_at": now,
        "updated_at": now,
    }
    result = await get_user_collection().insert_one(user_doc)
    user_doc["_id"] = result.inserted_id
    logger.info(f"Account created: {username} ({result.inserted_id})")
    return user_doc
