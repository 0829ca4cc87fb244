# services/auth_service.py
import logging
from typing import Optional

from pymongo.errors import DuplicateKeyError, PyMongoError

from models.envelope import OperationResult
from models.user import LoginInput, SignupInput, UserView
from repositories import account_repository
from services.credential_service import issue_token, verify_password, verify_token
from utils.validation import validate

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid username/email or password"
ACCOUNT_CONFLICT = "Username or email already in use"


async def login(credentials: LoginInput) -> OperationResult:
    validation = validate("login", {
        "usernameOrEmail": credentials.username_or_email,
        "password": credentials.password,
    })
    if not validation.valid:
        return OperationResult.fail("Validation failed", errors=validation.errors)

    try:
        user = await account_repository.find_by_identifier(validation.data["usernameOrEmail"])
    except PyMongoError as e:
        logger.exception("Account lookup failed during login")
        return OperationResult.fail(str(e) or "Login failed")

    # Same message whether the account is missing or the password is wrong
    if not user or not await verify_password(credentials.password, user.get("password")):
        return OperationResult.fail(INVALID_CREDENTIALS)

    token = issue_token(user["_id"], user["username"])
    logger.info(f"Login: {user['username']}")
    return OperationResult.ok(
        "Login successful",
        token=token,
        user=UserView.from_document(user),
    )


async def signup(account: SignupInput) -> OperationResult:
    validation = validate("signup", account.model_dump())
    if not validation.valid:
        return OperationResult.fail("Validation failed", errors=validation.errors)

    username = validation.data["username"]
    email = validation.data["email"]

    try:
        existing = await account_repository.find_by_username_or_email(username, email)
        if existing:
            return OperationResult.fail(ACCOUNT_CONFLICT)
        user = await account_repository.create_account(username, email, validation.data["password"])
    except DuplicateKeyError:
        # Lost a race with a concurrent signup for the same username/email
        return OperationResult.fail(ACCOUNT_CONFLICT)
    except PyMongoError as e:
        logger.exception("Signup failed")
        return OperationResult.fail(str(e) or "Signup failed")

    token = issue_token(user["_id"], user["username"])
    return OperationResult.ok(
        "Account created successfully",
        token=token,
        user=UserView.from_document(user),
    )


async def get_context_user(authorization: Optional[str]) -> Optional[UserView]:
    """Resolve an ``Authorization: Bearer <token>`` header to the account it names."""
    if not authorization or not authorization.startswith("Bearer "):
        return None
    identity = verify_token(authorization[len("Bearer "):].strip())
    if identity is None:
        return None
    user = await account_repository.find_by_id(identity.user_id)
    if not user:
        return None
    return UserView.from_document(user)
