"""User model definitions."""

import enum
import uuid

from sqlalchemy import Column, String
from profile_app.database import Base


class Campus(str, enum.Enum):
    MADRID = "Madrid"
    BARCELONA = "Barcelona"
    MIAMI = "Miami"
    PARIS = "Paris"
    BERLIN = "Berlin"
    AMSTERDAM = "Amsterdam"
    MEXICO = "México"
    SAO_PAULO = "Sao Paulo"
    LISBON = "Lisbon"
    REMOTE = "Remote"


class Course(str, enum.Enum):
    WEB_DEV = "Web Dev"
    UX_UI = "UX/UI"
    DATA_ANALYTICS = "Data Analytics"
    CYBER_SECURITY = "Cyber Security"


def generate_user_id() -> str:
    return uuid.uuid4().hex


def normalize_username(username: str) -> str:
    return username.strip().lower()


class User(Base):
    """Represents a registered profile."""
    __tablename__ = "users"

    id = Column(String(32), primary_key=True, default=generate_user_id)
    username = Column(String, unique=True, index=True, nullable=False)
    hashed_password = Column(String, nullable=False)
    campus = Column(String, nullable=True)  # Campus value
    course = Column(String, nullable=True)  # Course value
    image = Column(String, nullable=True)

    def token_claims(self) -> dict:
        return {
            "id": self.id,
            "username": self.username,
            "campus": self.campus,
            "course": self.course,
            "image": self.image,
        }
