# services/credential_service.py
import logging
from datetime import datetime, timedelta, timezone
from typing import Optional

from fastapi.concurrency import run_in_threadpool
from jose import JWTError, jwt
from passlib.context import CryptContext

from config import settings
from models.user import TokenIdentity

logger = logging.getLogger(__name__)

pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__rounds=settings.BCRYPT_ROUNDS,
)


async def hash_password(password: str) -> str:
    # bcrypt is CPU bound; keep it off the event loop
    return await run_in_threadpool(pwd_context.hash, password)


async def verify_password(plain_password, hashed_password) -> bool:
    if not plain_password or not hashed_password:
        return False
    return await run_in_threadpool(pwd_context.verify, plain_password, hashed_password)


def issue_token(user_id, username: str) -> str:
    now = datetime.now(timezone.utc)
    payload = {
        "sub": str(user_id),
        "username": username,
        "iat": int(now.timestamp()),
        "exp": int((now + timedelta(days=settings.TOKEN_EXPIRE_DAYS)).timestamp()),
    }
    return jwt.encode(payload, settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM)


def verify_token(token: str) -> Optional[TokenIdentity]:
    """Decode a session token; None for anything malformed, expired or forged."""
    if not token:
        return None
    try:
        payload = jwt.decode(
            token,
            settings.JWT_SECRET,
            algorithms=[settings.JWT_ALGORITHM],
        )
    except JWTError as e:
        logger.debug(f"Rejected token: {e}")
        return None

    user_id = payload.get("sub")
    username = payload.get("username")
    if not user_id or not username:
        return None
    return TokenIdentity(user_id=user_id, username=username)
