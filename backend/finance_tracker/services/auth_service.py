import logging
from datetime import datetime, timedelta, timezone

import bcrypt
from jose import JWTError, jwt
from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ..config import Settings
from ..errors import AuthenticationError, ConflictError, ValidationError
from ..models import User
from ..schemas import CurrentUser
from .category_service import CategoryService

logger = logging.getLogger(__name__)

# bcrypt only looks at the first 72 bytes of a password
MAX_PASSWORD_BYTES = 72


def hash_password(password: str) -> str:
    encoded = password.encode("utf-8")
    if len(encoded) > MAX_PASSWORD_BYTES:
        raise ValidationError(f"Password must be at most {MAX_PASSWORD_BYTES} bytes")
    return bcrypt.hashpw(encoded, bcrypt.gensalt()).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    encoded = password.encode("utf-8")
    if len(encoded) > MAX_PASSWORD_BYTES:
        return False
    return bcrypt.checkpw(encoded, password_hash.encode("utf-8"))


def create_access_token(user: User, settings: Settings, now: datetime | None = None) -> str:
    """Signed bearer token carrying ``{userId, username}``."""
    issued = now or datetime.now(timezone.utc)
    payload = {
        "userId": user.id,
        "username": user.username,
        "iat": issued,
        "exp": issued + timedelta(days=settings.token_expire_days),
    }
    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def decode_access_token(token: str, settings: Settings) -> CurrentUser:
    try:
        payload = jwt.decode(token, settings.jwt_secret, algorithms=[settings.jwt_algorithm])
    except JWTError:
        raise AuthenticationError("Invalid or expired token")

    user_id = payload.get("userId")
    username = payload.get("username")
    if not isinstance(user_id, int) or not username:
        raise AuthenticationError("Invalid or expired token")
    return CurrentUser(id=user_id, username=username)


class AuthService:
    def __init__(self, db: Session, settings: Settings):
        self.db = db
        self.settings = settings

    def _check_available(self, username: str, email: str) -> None:
        existing = (
            self.db.query(User.id)
            .filter(or_(User.username == username, User.email == email))
            .first()
        )
        if existing:
            raise ConflictError("Username or email already exists")

    def register(self, username: str, email: str, password: str) -> tuple[User, str]:
        """Create the user, seed the default categories and issue a token."""
        self._check_available(username, email)

        user = User(username=username, email=email, password_hash=hash_password(password))
        self.db.add(user)
        try:
            self.db.flush()
        except IntegrityError as exc:
            # Lost a race with a concurrent registration
            raise ConflictError("Username or email already exists") from exc

        CategoryService(self.db).seed_default_categories(user.id)

        logger.info("Registered user %s (id=%d)", user.username, user.id)
        return user, create_access_token(user, self.settings)

    def login(self, identifier: str, password: str) -> tuple[User, str]:
        """``identifier`` matches either the username or the email."""
        user = (
            self.db.query(User)
            .filter(or_(User.username == identifier, User.email == identifier))
            .first()
        )
        if not user or not verify_password(password, user.password_hash):
            raise AuthenticationError("Invalid credentials")

        logger.info("User %s logged in", user.username)
        return user, create_access_token(user, self.settings)
