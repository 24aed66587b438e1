# app/db/init_db.py
"""Database initialization utilities."""
import logging
from typing import Optional

from sqlalchemy import inspect, select
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session

from app.config.settings import settings
from app.core.security import get_password_hasher
from app.db.base import Base
from app.db.session import SessionLocal, engine as default_engine
from app.models.base.enums import UserRole, UserStatus
from app.models.user import User

logger = logging.getLogger(__name__)


def init_db(engine: Optional[Engine] = None) -> None:
    """
    Initialize the database by creating missing tables and provisioning
    the bootstrap administrator.

    Note: This is suitable for development/testing only.
    For production, use migrations instead.
    """
    engine = engine or default_engine
    try:
        existing_tables = inspect(engine).get_table_names()
        Base.metadata.create_all(bind=engine)
        logger.info(
            f"Database ready ({len(existing_tables)} existing tables, "
            f"{len(Base.metadata.tables)} mapped)"
        )
    except Exception as e:
        logger.error(f"Error initializing database: {e}")
        raise

    session = SessionLocal() if engine is default_engine else Session(bind=engine)
    with session as db:
        ensure_bootstrap_admin(db)


def ensure_bootstrap_admin(
    db: Session,
    email: Optional[str] = None,
    password: Optional[str] = None,
    full_name: Optional[str] = None,
) -> Optional[User]:
    """
    Create the configured administrator if missing, or force an existing
    account with that email to an approved admin.

    Returns None when no admin credentials are configured.
    """
    email = (email or settings.ADMIN_EMAIL or "").strip().lower()
    password = password or settings.ADMIN_PASSWORD
    if not email or not password:
        logger.warning("ADMIN_EMAIL/ADMIN_PASSWORD not set; no bootstrap admin provisioned")
        return None

    admin = db.execute(select(User).where(User.email == email)).scalar_one_or_none()
    if admin is None:
        admin = User(
            email=email,
            password_hash=get_password_hasher().hash(password),
            full_name=full_name or settings.ADMIN_NAME,
            role=UserRole.ADMIN,
            status=UserStatus.APPROVED,
        )
        db.add(admin)
        logger.info(f"Bootstrap admin created: {email}")
    elif admin.role != UserRole.ADMIN or admin.status != UserStatus.APPROVED:
        admin.role = UserRole.ADMIN
        admin.status = UserStatus.APPROVED
        logger.info(f"Bootstrap admin restored to approved admin: {email}")

    db.commit()
    db.refresh(admin)
    return admin


def drop_db(engine: Optional[Engine] = None) -> None:
    """
    Drop all database tables.

    WARNING: This will delete all data! Use with caution.
    Only for development/testing purposes.
    """
    Base.metadata.drop_all(bind=engine or default_engine)
    logger.warning("All database tables dropped")
