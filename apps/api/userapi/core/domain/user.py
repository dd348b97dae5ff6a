from dataclasses import dataclass
from typing import Any, Dict, Mapping

RECORD_KEY = "email"


@dataclass
class User:
    email: str = ""
    first_name: str = ""
    last_name: str = ""

    @property
    def exists(self) -> bool:
        # A missing key comes back as a zero-valued user.
        return len(self.email) != 0

    def to_record(self) -> Dict[str, Any]:
        return {
            "email": self.email,
            "firstName": self.first_name,
            "lastName": self.last_name,
        }

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> "User":
        """
        Build a user from a store record. Absent fields fall back to empty strings;
        present fields must be strings.
        """
        values = {}
        for attr, field in (
            ("email", "email"),
            ("first_name", "firstName"),
            ("last_name", "lastName"),
        ):
            value = record.get(field, "")
            if value is None:
                value = ""
            if not isinstance(value, str):
                raise TypeError(f"field {field!r} must be a string")
            values[attr] = value
        return cls(**values)
