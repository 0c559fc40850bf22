from threading import Lock

from sqlalchemy import create_engine, inspect, text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker

from profile_app.core import config


def build_engine(database_url: str) -> Engine:
    connect_args = {}
    if database_url.startswith("sqlite"):
        connect_args["check_same_thread"] = False
    return create_engine(database_url, connect_args=connect_args)


engine = build_engine(config.DATABASE_URL)

SessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    bind=engine,
)

Base = declarative_base()

_schema_lock = Lock()
_users_schema_checked = False


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def ensure_users_schema(bind: Engine | None = None) -> None:
    """Bring an existing ``users`` table up to date with the profile columns."""
    global _users_schema_checked

    if _users_schema_checked:
        return

    bind = bind or engine

    with _schema_lock:
        if _users_schema_checked:
            return

        inspector = inspect(bind)

        if 'users' not in inspector.get_table_names():
            _users_schema_checked = True
            return

        existing_columns = {column['name'] for column in inspector.get_columns('users')}
        migration_steps = [
            ('campus', 'ALTER TABLE users ADD COLUMN campus VARCHAR'),
            ('course', 'ALTER TABLE users ADD COLUMN course VARCHAR'),
            ('image', 'ALTER TABLE users ADD COLUMN image VARCHAR'),
        ]

        with bind.begin() as connection:
            for column_name, statement in migration_steps:
                if column_name not in existing_columns:
                    connection.execute(text(statement))
            connection.execute(
                text('CREATE UNIQUE INDEX IF NOT EXISTS ix_users_username ON users(username)')
            )

        _users_schema_checked = True
