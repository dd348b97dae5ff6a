import logging
from typing import List, Optional, Union

from pydantic import ValidationError

from userapi.core.domain.errors import (
    DeleteError,
    DuplicateUserError,
    FetchError,
    InvalidDataError,
    InvalidEmailError,
    MarshalError,
    UnmarshalError,
    UserNotFoundError,
    UserRepositoryError,
    WriteError,
)
from userapi.core.domain.user import User
from userapi.core.ports.record_store import Record, RecordStore, StoreError
from userapi.core.validators import is_email_valid
from userapi.interfaces.api.schemas import UserPayload

logger = logging.getLogger("users")

Body = Union[str, bytes, bytearray]


def _decode_body(body: Optional[Body]) -> User:
    if body is None:
        raise InvalidDataError()
    try:
        return UserPayload.model_validate_json(body).to_user()
    except ValidationError as exc:
        raise InvalidDataError() from exc


def _validated_user(body: Optional[Body]) -> User:
    user = _decode_body(body)
    if not is_email_valid(user.email):
        raise InvalidEmailError()
    return user


def _marshal(user: User) -> Record:
    try:
        return user.to_record()
    except (TypeError, ValueError) as exc:
        raise MarshalError() from exc


def _write(store: RecordStore, user: User, table: str) -> User:
    record = _marshal(user)
    try:
        store.put(table, record)
    except StoreError as exc:
        logger.error(
            "User write failed", extra={"email": user.email, "table": table}
        )
        raise WriteError() from exc
    return user


def fetch_user(store: RecordStore, email: str, table: str) -> User:
    """
    Look up one user by exact email.

    A missing key is not an error: the result is a zero-valued `User` whose
    `email` is empty, so existence checks must look at `user.exists`.
    """
    try:
        record = store.get(table, email)
    except StoreError as exc:
        raise FetchError() from exc
    if record is None:
        return User()
    try:
        return User.from_record(record)
    except (TypeError, AttributeError) as exc:
        raise FetchError() from exc


def fetch_users(store: RecordStore, table: str) -> List[User]:
    # Full scan, no pagination.
    try:
        records = store.scan(table)
    except StoreError as exc:
        raise FetchError() from exc
    try:
        return [User.from_record(record) for record in records]
    except (TypeError, AttributeError) as exc:
        raise UnmarshalError() from exc


def create_user(store: RecordStore, body: Optional[Body], table: str) -> User:
    """
    Insert a new user after validating the body and checking for a duplicate.

    The duplicate check and the write are not atomic: two concurrent creates for
    the same email can both pass the check, and the later write wins. A failed
    lookup during the check is treated as "no existing user".
    """
    user = _validated_user(body)

    try:
        current = fetch_user(store, user.email, table)
    except UserRepositoryError as exc:
        logger.warning(
            "Duplicate check failed; continuing with create",
            extra={"email": user.email, "table": table, "error": exc.message},
        )
        current = None
    if current is not None and current.exists:
        raise DuplicateUserError()

    _write(store, user, table)
    logger.info("User created", extra={"email": user.email, "table": table})
    return user


def update_user(store: RecordStore, body: Optional[Body], table: str) -> User:
    """
    Replace an existing user wholesale; fields missing from the body are
    written as empty strings rather than merged with the stored record.
    """
    user = _validated_user(body)

    # Lookup errors propagate unchanged.
    current = fetch_user(store, user.email, table)
    if not current.exists:
        raise UserNotFoundError()

    _write(store, user, table)
    logger.info("User updated", extra={"email": user.email, "table": table})
    return user


def delete_user(store: RecordStore, email: str, table: str) -> None:
    try:
        store.delete(table, email)
    except StoreError as exc:
        logger.error("User delete failed", extra={"email": email, "table": table})
        raise DeleteError() from exc
    logger.info("User deleted", extra={"email": email, "table": table})
