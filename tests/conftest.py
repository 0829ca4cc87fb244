# tests/conftest.py
import os

# Settings are read at import time, so these must be set before any app import
os.environ.setdefault("JWT_SECRET", "test-signing-key")
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["S3_BUCKET"] = ""

import pytest
from mongomock_motor import AsyncMongoMockClient

import database
from models.employee import EmployeeInput


@pytest.fixture
async def mongo_db(monkeypatch):
    """A fresh in-memory database swapped in for the motor one."""
    db = AsyncMongoMockClient()["employee_management_test"]
    monkeypatch.setattr(database, "db", db)
    await database.ensure_indexes()
    return db


@pytest.fixture
def employee_data():
    """Factory for a valid employee input; keyword arguments override fields."""
    def build(**overrides) -> EmployeeInput:
        data = {
            "first_name": "Ada",
            "last_name": "Lovelace",
            "email": "ada@acme.com",
            "gender": "Female",
            "designation": "Engineer",
            "salary": 5000,
            "date_of_joining": "2023-04-01",
            "department": "Research",
        }
        data.update(overrides)
        return EmployeeInput(**data)
    return build
