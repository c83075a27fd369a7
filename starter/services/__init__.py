from starter.services.users import UserService

__all__ = ["UserService"]
