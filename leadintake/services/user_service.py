import logging
from typing import Optional

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import sessionmaker

from leadintake.core.exceptions import StorageError, ValidationError
from leadintake.core.security import get_password_hash, verify_password
from leadintake.models.user import User
from leadintake.schemas.user import UserCreate
from leadintake.utils.audit import audit

logger = logging.getLogger(__name__)


class UserService:
    def __init__(self, session_factory: sessionmaker):
        self._session_factory = session_factory

    def get_user_by_email(self, email: str) -> Optional[User]:
        with self._session_factory() as session:
            return session.query(User).filter(User.email == email.lower()).first()

    def create_user(self, user_create: UserCreate) -> User:
        email = user_create.email.lower()
        with self._session_factory() as session:
            user = User(email=email, password_hash=get_password_hash(user_create.password), is_active=True)
            session.add(user)
            try:
                session.commit()
            except IntegrityError:
                session.rollback()
                raise ValidationError([("email", "already registered")])
            except SQLAlchemyError as e:
                session.rollback()
                logger.error(f"❌ User insert failed: {e}")
                raise StorageError(details=str(e))
        audit("USER_REGISTERED", email=email, user_id=user.id)
        return user

    def authenticate_user(self, email: str, password: str) -> Optional[User]:
        user = self.get_user_by_email(email)
        if not user or not user.is_active:
            audit("LOGIN_FAILED", email=email)
            return None
        if not verify_password(password, user.password_hash):
            audit("LOGIN_FAILED", email=email, user_id=user.id)
            return None
        audit("LOGIN_OK", email=email, user_id=user.id)
        return user
