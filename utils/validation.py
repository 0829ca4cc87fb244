# utils/validation.py
"""
Declarative field validation for operation inputs.

Each rule set is an ordered table of ``Rule(field, check, message)`` entries.
``validate`` evaluates every rule against a plain record and collects all
failures, so a caller sees every bad field in one response rather than just
the first one.
"""

import math
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any, Callable, Dict, List, Optional

from email_validator import EmailNotValidError, validate_email

from models.employee import GENDERS
from models.envelope import FieldError

MIN_SALARY = 1000
MIN_PASSWORD_LENGTH = 6


@dataclass(frozen=True)
class Rule:
    field: str
    check: Callable[[Any], bool]
    message: str
    trim: bool = False


@dataclass
class ValidationResult:
    valid: bool
    errors: List[FieldError] = field(default_factory=list)
    data: Dict[str, Any] = field(default_factory=dict)


def is_non_empty(value: Any) -> bool:
    return value is not None and str(value) != ""


def is_email(value: Any) -> bool:
    if not isinstance(value, str):
        return False
    try:
        # Bare addresses only; "Name <addr@host>" display-name forms are rejected
        validate_email(value, check_deliverability=False)
    except EmailNotValidError:
        return False
    return True


def is_gender(value: Any) -> bool:
    return value in GENDERS


def is_salary(value: Any) -> bool:
    if isinstance(value, bool):
        return False
    try:
        amount = float(value)
    except (TypeError, ValueError):
        return False
    return math.isfinite(amount) and amount >= MIN_SALARY


def min_length(length: int) -> Callable[[Any], bool]:
    def check(value: Any) -> bool:
        return isinstance(value, str) and len(value) >= length
    return check


def parse_calendar_date(value: Any) -> Optional[date]:
    """Parse an ISO-8601 date or datetime into a calendar date, or None."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str) or not value:
        return None
    try:
        return date.fromisoformat(value)
    except ValueError:
        pass
    try:
        return datetime.fromisoformat(value.replace("Z", "+00:00")).date()
    except ValueError:
        return None


def is_calendar_date(value: Any) -> bool:
    return parse_calendar_date(value) is not None


SIGNUP_RULES = (
    Rule("username", is_non_empty, "Username is required", trim=True),
    Rule("email", is_email, "Valid email is required", trim=True),
    Rule("password", min_length(MIN_PASSWORD_LENGTH), "Password must be at least 6 characters"),
)

LOGIN_RULES = (
    Rule("usernameOrEmail", is_non_empty, "Username or email is required", trim=True),
    Rule("password", is_non_empty, "Password is required"),
)

EMPLOYEE_RULES = (
    Rule("first_name", is_non_empty, "First name is required", trim=True),
    Rule("last_name", is_non_empty, "Last name is required", trim=True),
    Rule("email", is_email, "Valid email is required", trim=True),
    Rule("gender", is_gender, "Gender must be Male, Female, or Other"),
    Rule("designation", is_non_empty, "Designation is required", trim=True),
    Rule("salary", is_salary, "Salary must be at least 1000"),
    Rule("date_of_joining", is_calendar_date, "Valid date_of_joining is required"),
    Rule("department", is_non_empty, "Department is required", trim=True),
)

# name -> (rules, fields are optional)
RULE_SETS = {
    "signup": (SIGNUP_RULES, False),
    "login": (LOGIN_RULES, False),
    "employeeCreate": (EMPLOYEE_RULES, False),
    "employeeUpdate": (EMPLOYEE_RULES, True),
}


def validate(rule_set: str, record: Dict[str, Any]) -> ValidationResult:
    """
    Run the named rule set against ``record``.

    The record is not modified. ``ValidationResult.data`` is a copy of it with
    the trimmed fields replaced by their trimmed values.

    Raises:
        KeyError: if ``rule_set`` is not a known rule set name.
    """
    rules, optional = RULE_SETS[rule_set]
    data = dict(record)
    errors = []

    for rule in rules:
        present = data.get(rule.field) is not None
        if optional and not present:
            continue
        value = data.get(rule.field)
        if rule.trim and isinstance(value, str):
            value = value.strip()
            data[rule.field] = value
        if not rule.check(value):
            errors.append(FieldError(field=rule.field, message=rule.message))

    return ValidationResult(valid=not errors, errors=errors, data=data)
