import os

from dotenv import load_dotenv


load_dotenv()


def _get_list(value: str | None, default: list[str]) -> list[str]:
    if not value:
        return default
    return [item.strip() for item in value.split(",") if item.strip()]

APP_ENV = os.getenv("APP_ENV", "development")

DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./profile_app.db")

JWT_SECRET_KEY = os.getenv("JWT_SECRET_KEY") or os.getenv("TOKEN_SECRET", "change-me")
JWT_ALGORITHM = os.getenv("JWT_ALGORITHM", "HS256")
JWT_EXPIRES_MINUTES = int(os.getenv("JWT_EXPIRES_MINUTES", "360"))

BCRYPT_ROUNDS = int(os.getenv("BCRYPT_ROUNDS", "10"))

CORS_ORIGINS = _get_list(
    os.getenv("CORS_ORIGINS"),
    default=[os.getenv("ORIGIN", "http://localhost:5173")],
)

PORT = int(os.getenv("PORT", "5005"))
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

def validate_runtime_config() -> None:
    if APP_ENV.lower() == "production" and JWT_SECRET_KEY == "change-me":
        raise RuntimeError("JWT_SECRET_KEY must be set in production.")
