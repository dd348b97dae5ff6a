from typing import Optional

from pydantic import BaseModel, Field

from userapi.core.domain.user import User


class UserPayload(BaseModel):
    """
    Wire shape of a user: `{"email", "firstName", "lastName"}`.
    Missing or null fields become empty strings; unknown fields, including the
    snake_case attribute names, are ignored.
    """

    email: Optional[str] = ""
    first_name: Optional[str] = Field(default="", alias="firstName")
    last_name: Optional[str] = Field(default="", alias="lastName")

    def to_user(self) -> User:
        return User(
            email=self.email or "",
            first_name=self.first_name or "",
            last_name=self.last_name or "",
        )

    @classmethod
    def from_user(cls, user: User) -> "UserPayload":
        return cls(
            **{
                "email": user.email,
                "firstName": user.first_name,
                "lastName": user.last_name,
            }
        )


class ErrorBody(BaseModel):
    error: Optional[str] = None
