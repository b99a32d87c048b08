from uuid import UUID

from sqlalchemy.orm import Session

from app.auth.models.user import User


class UserService:
    @staticmethod
    def get_user_by_id(user_id: UUID, db: Session) -> User | None:
        return db.query(User).filter(User.id == user_id).first()
