from commerce_auth.models.user import User

__all__ = ["User"]
