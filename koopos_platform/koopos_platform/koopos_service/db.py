from typing import Generator
import logging

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, declarative_base, sessionmaker

from .config import settings

logger = logging.getLogger(__name__)

engine = create_engine(
    settings.DATABASE_URL,
    connect_args={"check_same_thread": False} if settings.DATABASE_URL.startswith("sqlite") else {},
)
SessionLocal = sessionmaker(bind=engine, autocommit=False, autoflush=False)
Base = declarative_base()

# Roles are reference data; registration only checks that the id exists
DEFAULT_ROLES = {
    1: "ADMIN",
    2: "CASHIER",
}


def init_db():
    from .models import Role  # Import here to avoid circular dependency

    Base.metadata.create_all(bind=engine)

    db = SessionLocal()
    try:
        existing = {role_id for (role_id,) in db.query(Role.id).all()}
        missing = [Role(id=role_id, name=name) for role_id, name in DEFAULT_ROLES.items() if role_id not in existing]
        if missing:
            db.add_all(missing)
            db.commit()
            logger.info("Seeded roles: %s", ", ".join(role.name for role in missing))
    finally:
        db.close()


def get_db() -> Generator[Session, None, None]:
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
