"""User custom exceptions"""
from app.utils.exceptions import AuthorizationException, ConflictException, NotFoundException


class UserNotFoundException(NotFoundException):
    """Raised when a user is not found"""
    def __init__(self, user_id: str):
        super().__init__(f"User {user_id} not found")


class UserAlreadyExistsException(ConflictException):
    """Raised when the user id or email is already registered"""
    def __init__(self, field: str, value: str):
        super().__init__(f"User with {field} {value} already exists")


class SelfRoleChangeException(AuthorizationException):
    """Raised when an admin tries to change their own role"""
    def __init__(self):
        super().__init__("You cannot change your own role")
