"""Create the initial superadmin.

    python -m app.db.seed

Reads SEED_ADMIN_USERNAME, SEED_ADMIN_EMAIL and SEED_ADMIN_PASSWORD. The
password is required and is never echoed back.
"""

import os
import sys

from sqlalchemy.exc import SQLAlchemyError

from app.core.config import Settings, get_settings
from app.core.exceptions import AppError
from app.core.logging_config import configure_logging, get_logger
from app.db.session import Database
from app.models.admin import Admin
from app.models.enums import AdminRole
from app.services.auth_service import AuthService

logger = get_logger("auth")


def seed_admin(database: Database, settings: Settings, username: str, email: str, password: str) -> bool:
    """Returns False when the admin already exists."""
    database.create_all()

    db = database.session()
    try:
        if db.query(Admin).filter(Admin.email == email.lower()).first():
            logger.warning(f"Admin already exists: {email}")
            return False

        admin = AuthService(db, settings).register(username, email, password, AdminRole.SUPERADMIN)
        logger.info(f"Superadmin created: {admin.email}")
        logger.warning("Please change this password after first login!")
        return True
    finally:
        db.close()


def main() -> int:
    settings = get_settings()
    configure_logging(settings)

    password = os.getenv("SEED_ADMIN_PASSWORD")
    if not password:
        logger.error("SEED_ADMIN_PASSWORD is not set")
        return 1

    database = Database(settings.database_url)
    try:
        seed_admin(
            database,
            settings,
            username=os.getenv("SEED_ADMIN_USERNAME", "admin"),
            email=os.getenv("SEED_ADMIN_EMAIL", "admin@example.com"),
            password=password,
        )
    except (AppError, SQLAlchemyError) as e:
        logger.error(f"Error seeding admin: {e}")
        return 1
    finally:
        database.dispose()
    return 0


if __name__ == "__main__":
    sys.exit(main())
