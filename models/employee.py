# models/employee.py
from pydantic import BaseModel
from typing import Any, Dict, Optional
from datetime import date, datetime

from utils.timestamps import as_utc

GENDERS = ("Male", "Female", "Other")

# Fields an employee record is built from, in validation order
EMPLOYEE_FIELDS = (
    "first_name",
    "last_name",
    "email",
    "gender",
    "designation",
    "salary",
    "date_of_joining",
    "department",
)

class EmployeeInput(BaseModel):
    # Used for both create and partial update; unset fields stay None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    email: Optional[str] = None
    gender: Optional[str] = None
    designation: Optional[str] = None
    salary: Optional[float] = None
    date_of_joining: Optional[str] = None
    department: Optional[str] = None
    employee_photo_base64: Optional[str] = None  # data:<mime>;base64,<payload>

    def record(self) -> Dict[str, Any]:
        """Employee fields the caller actually supplied."""
        data = self.model_dump(include=set(EMPLOYEE_FIELDS), exclude_none=True)
        return {field: data[field] for field in EMPLOYEE_FIELDS if field in data}

class EmployeeView(BaseModel):
    id: str
    first_name: str
    last_name: str
    email: str
    gender: str
    designation: str
    # Older or hand-edited records may lack these
    salary: Optional[float] = None
    date_of_joining: Optional[date] = None
    department: str
    employee_photo: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def from_document(cls, doc: Dict[str, Any]) -> "EmployeeView":
        joined = doc.get("date_of_joining")
        if isinstance(joined, datetime):
            joined = joined.date()
        return cls(
            id=str(doc["_id"]),
            first_name=doc["first_name"],
            last_name=doc["last_name"],
            email=doc["email"],
            gender=doc["gender"],
            designation=doc["designation"],
            salary=doc.get("salary"),
            date_of_joining=joined,
            department=doc["department"],
            employee_photo=doc.get("employee_photo"),
            created_at=as_utc(doc.get("created_at")),
            updated_at=as_utc(doc.get("updated_at")),
        )
