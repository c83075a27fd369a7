"""
User service - the only layer that touches the `users` table.

Methods are synchronous (plain SQLAlchemy sessions); controllers call them
through the threadpool.
"""
from typing import List

import logfire
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from starter.database import Database, UserDB
from starter.exceptions import ConflictError, NotFoundError
from starter.models.user_models import UserCreate, UserResponse, UserUpdate


class UserService:
    def __init__(self, database: Database):
        self.database = database

    # --- Helpers ---

    @staticmethod
    def _get_or_raise(db: Session, user_id: int) -> UserDB:
        user = db.get(UserDB, user_id)
        if user is None:
            raise NotFoundError("User not found")
        return user

    @staticmethod
    def _ensure_email_free(db: Session, email: str, exclude_id: int = None) -> None:
        query = db.query(UserDB).filter(UserDB.email == email)
        if exclude_id is not None:
            query = query.filter(UserDB.id != exclude_id)
        if query.first() is not None:
            raise ConflictError("Email already in use")

    @staticmethod
    def _commit(db: Session) -> None:
        try:
            db.commit()
        except IntegrityError as e:
            db.rollback()
            raise ConflictError("Email already in use") from e

    # --- CRUD ---

    def list_users(self) -> List[UserResponse]:
        with self.database.session() as db:
            users = db.query(UserDB).order_by(UserDB.id).all()
            return [UserResponse.model_validate(u) for u in users]

    def get_user(self, user_id: int) -> UserResponse:
        with self.database.session() as db:
            return UserResponse.model_validate(self._get_or_raise(db, user_id))

    def create_user(self, data: UserCreate) -> UserResponse:
        with self.database.session() as db:
            self._ensure_email_free(db, data.email)
            user = UserDB(**data.model_dump())
            db.add(user)
            self._commit(db)
            db.refresh(user)
            logfire.info("Created user", user_id=user.id)
            return UserResponse.model_validate(user)

    def update_user(self, user_id: int, data: UserUpdate) -> UserResponse:
        with self.database.session() as db:
            user = self._get_or_raise(db, user_id)
            changes = data.model_dump(exclude_unset=True, exclude_none=True)
            if "email" in changes:
                self._ensure_email_free(db, changes["email"], exclude_id=user_id)
            for field, value in changes.items():
                setattr(user, field, value)
            self._commit(db)
            db.refresh(user)
            logfire.info("Updated user", user_id=user_id, fields=sorted(changes))
            return UserResponse.model_validate(user)

    def delete_user(self, user_id: int) -> None:
        with self.database.session() as db:
            user = self._get_or_raise(db, user_id)
            db.delete(user)
            db.commit()
            logfire.info("Deleted user", user_id=user_id)
