from app.auth.models.user import User

__all__ = ["User"]
