from enum import Enum


class UserErrorKind(str, Enum):
    INVALID_DATA = "invalid user data"
    INVALID_EMAIL = "invalid email"
    FETCH_FAILED = "failed to fetch record"
    UNMARSHAL_FAILED = "failed to unmarshal record"
    MARSHAL_FAILED = "could not marshal item"
    WRITE_FAILED = "could not put item"
    DELETE_FAILED = "could not delete item"
    USER_EXISTS = "user already exists"
    USER_NOT_FOUND = "user does not exist"

    @property
    def message(self) -> str:
        return self.value


class UserRepositoryError(Exception):
    """
    Base for every failure the user repository reports.
    `message` is stable and safe to hand to an external caller; the underlying
    cause, if any, is chained on `__cause__`.
    """

    kind: UserErrorKind

    def __init__(self) -> None:
        super().__init__(self.kind.message)

    @property
    def message(self) -> str:
        return self.kind.message


class InvalidDataError(UserRepositoryError):
    kind = UserErrorKind.INVALID_DATA


class InvalidEmailError(UserRepositoryError):
    kind = UserErrorKind.INVALID_EMAIL


class FetchError(UserRepositoryError):
    kind = UserErrorKind.FETCH_FAILED


class UnmarshalError(UserRepositoryError):
    kind = UserErrorKind.UNMARSHAL_FAILED


class MarshalError(UserRepositoryError):
    kind = UserErrorKind.MARSHAL_FAILED


class WriteError(UserRepositoryError):
    kind = UserErrorKind.WRITE_FAILED


class DeleteError(UserRepositoryError):
    kind = UserErrorKind.DELETE_FAILED


class DuplicateUserError(UserRepositoryError):
    kind = UserErrorKind.USER_EXISTS


class UserNotFoundError(UserRepositoryError):
    kind = UserErrorKind.USER_NOT_FOUND
