from enum import Enum


class UserRole(str, Enum):
    ADMIN = "admin"
    CLIENT = "client"

    @classmethod
    def values(cls) -> list[str]:
        return [role.value for role in cls]
