"""Signup, login and profile operations on the user store."""
import logging
import re

import bcrypt
from pydantic import BaseModel
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from profile_app.auth.jwt_handler import TokenSigner
from profile_app.core.errors import (
    AuthenticationError,
    ConflictError,
    NotFoundError,
    ServiceUnavailableError,
    UnknownUserError,
    ValidationError,
    WeakPasswordError,
)
from profile_app.models.user import Campus, Course, User, normalize_username

logger = logging.getLogger(__name__)

PASSWORD_PATTERN = re.compile(r"(?=.*\d)(?=.*[a-z])(?=.*[A-Z]).{6,}")
DEFAULT_PASSWORD_ROUNDS = 10
DATABASE_UNAVAILABLE = 'Database unavailable.'
# bcrypt only looks at the first 72 bytes and refuses longer input.
MAX_PASSWORD_BYTES = 72


class UserSummary(BaseModel):
    id: str
    username: str
    campus: str | None = None
    course: str | None = None


def is_strong_password(password: str) -> bool:
    return PASSWORD_PATTERN.search(password) is not None


def is_encodable(value: str) -> bool:
    try:
        value.encode('utf-8')
    except UnicodeEncodeError:
        return False
    return True


def password_bytes(password: str) -> bytes:
    if not is_encodable(password):
        raise ValidationError("Password contains characters that cannot be encoded.")

    encoded = password.encode('utf-8')
    if len(encoded) > MAX_PASSWORD_BYTES:
        raise ValidationError(f"Password must be at most {MAX_PASSWORD_BYTES} bytes long.")
    return encoded


def hash_password(password: str, rounds: int = DEFAULT_PASSWORD_ROUNDS) -> str:
    return bcrypt.hashpw(password_bytes(password), bcrypt.gensalt(rounds)).decode('utf-8')


def verify_password(password: str, hashed_password: str) -> bool:
    try:
        candidate = password_bytes(password)
    except ValidationError:
        return False
    return bcrypt.checkpw(candidate, hashed_password.encode('utf-8'))


def _check_choice(value: str | None, choices: type[Campus] | type[Course], field: str) -> str | None:
    if value is None:
        return None
    allowed = [choice.value for choice in choices]
    if value not in allowed:
        raise ValidationError(f"{field} must be one of: {', '.join(allowed)}.")
    return value


class CredentialService:
    """User store operations for one request.

    The session and the token signer are passed in; the service holds no
    state of its own between calls.
    """

    def __init__(
        self,
        db: Session,
        token_signer: TokenSigner,
        password_rounds: int = DEFAULT_PASSWORD_ROUNDS,
    ) -> None:
        self.db = db
        self.token_signer = token_signer
        self.password_rounds = password_rounds

    def register(
        self,
        username: str | None,
        password: str | None,
        campus: str | None = None,
        course: str | None = None,
    ) -> UserSummary:
        if not username or not password or campus == "" or course == "":
            raise ValidationError("Provide username, password, campus and course")

        if not is_strong_password(password):
            raise WeakPasswordError(
                "Password must have at least 6 characters and contain at least one number, "
                "one lowercase and one uppercase letter."
            )
        password_bytes(password)

        campus = _check_choice(campus, Campus, "Campus")
        course = _check_choice(course, Course, "Course")

        normalized_username = normalize_username(username)
        if not normalized_username:
            raise ValidationError("Provide username, password, campus and course")
        if not is_encodable(normalized_username):
            raise ValidationError("Username contains characters that cannot be encoded.")

        try:
            if self._find_by_username(normalized_username) is not None:
                raise ConflictError("Username already exists.")

            user = User(
                username=normalized_username,
                hashed_password=hash_password(password, self.password_rounds),
                campus=campus,
                course=course,
            )
            self.db.add(user)
            self.db.commit()
            self.db.refresh(user)
        except IntegrityError as exc:
            # Lost a race with a concurrent signup for the same username.
            self.db.rollback()
            raise ConflictError("Username already exists.") from exc
        except SQLAlchemyError as exc:
            self.db.rollback()
            logger.exception('Could not create user %s', normalized_username)
            raise ServiceUnavailableError(DATABASE_UNAVAILABLE) from exc

        logger.info('Registered user %s', user.username)
        return UserSummary(id=user.id, username=user.username, campus=user.campus, course=user.course)

    def authenticate(self, username: str | None, password: str | None) -> str:
        if not username or not password:
            raise ValidationError("Provide username and password.")

        normalized_username = normalize_username(username)
        if not is_encodable(normalized_username):
            raise UnknownUserError("Username not found.")

        try:
            user = self._find_by_username(normalized_username)
        except SQLAlchemyError as exc:
            logger.exception('Could not look up user for login')
            raise ServiceUnavailableError(DATABASE_UNAVAILABLE) from exc

        if user is None:
            logger.info('Login for unknown username')
            raise UnknownUserError("Username not found.")

        if not verify_password(password, user.hashed_password):
            logger.info('Failed login for user %s', user.username)
            raise AuthenticationError("Unable to authenticate the user")

        return self.token_signer.issue(user.token_claims())

    def get_profile(self, user_id: str) -> User:
        try:
            user = self.db.get(User, user_id)
        except SQLAlchemyError as exc:
            logger.exception('Could not load user %s', user_id)
            raise ServiceUnavailableError(DATABASE_UNAVAILABLE) from exc

        if user is None:
            raise NotFoundError("User not found.")
        return user

    def update_profile_image(self, user_id: str, image: str | None) -> User:
        user = self.get_profile(user_id)

        if image is None:
            return user
        if not is_encodable(image):
            raise ValidationError("Image contains characters that cannot be encoded.")

        try:
            user.image = image
            self.db.commit()
            self.db.refresh(user)
        except SQLAlchemyError as exc:
            self.db.rollback()
            logger.exception('Could not update image for user %s', user_id)
            raise ServiceUnavailableError(DATABASE_UNAVAILABLE) from exc

        return user

    def _find_by_username(self, username: str) -> User | None:
        return self.db.query(User).filter(User.username == username).first()
