# models/user.py
from pydantic import BaseModel
from typing import Any, Dict, Optional
from datetime import datetime

from utils.timestamps import as_utc

class SignupInput(BaseModel):
    username: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None

class LoginInput(BaseModel):
    username_or_email: Optional[str] = None
    password: Optional[str] = None

class UserView(BaseModel):
    # Account as exposed to callers; the password hash never leaves the repository
    id: str
    username: str
    email: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def from_document(cls, doc: Dict[str, Any]) -> "UserView":
        return cls(
            id=str(doc["_id"]),
            username=doc["username"],
            email=doc["email"],
            created_at=as_utc(doc.get("created_at")),
            updated_at=as_utc(doc.get("updated_at")),
        )

class TokenIdentity(BaseModel):
    user_id: str
    username: str
