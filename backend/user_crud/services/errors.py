from __future__ import annotations


class UserServiceError(Exception):
    """Base class for failures raised by the user data access operations."""


class UserNotFound(UserServiceError):
    def __init__(self, user_id: int) -> None:
        super().__init__(f"User {user_id} not found")
        self.user_id = user_id


class EmailAlreadyExists(UserServiceError):
    def __init__(self, email: str | None = None) -> None:
        super().__init__("A user with this email already exists")
        self.email = email


class DatabaseUnavailable(UserServiceError):
    """The pool could not hand out a working connection in time."""

    def __init__(self, message: str = "Database unavailable") -> None:
        super().__init__(message)
