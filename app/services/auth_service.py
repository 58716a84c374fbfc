"""Admin registration, login and session tokens."""

from datetime import datetime, timezone

from pydantic import ValidationError as PydanticValidationError
from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.config import Settings
from app.core.exceptions import AuthError, NotFoundError, UnexpectedError, ValidationError
from app.core.jwt import create_access_token, decode_access_token
from app.core.logging_config import get_logger
from app.core.security import hash_password, verify_password
from app.models.admin import Admin
from app.models.enums import AdminRole
from app.schemas.admin import AdminClaims, AdminCreate

logger = get_logger("auth")

INVALID_CREDENTIALS = "Invalid credentials"


def _describe(error: Exception) -> str:
    if isinstance(error, PydanticValidationError):
        return ", ".join(
            f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in error.errors()
        )
    return str(error)


def verify_token(token: str | None, settings: Settings) -> AdminClaims:
    """Check signature and expiry only. No database access."""
    payload = decode_access_token(token, settings)
    try:
        return AdminClaims(
            admin_id=int(payload["sub"]),
            role=payload["role"],
            issued_at=datetime.fromtimestamp(payload.get("iat", payload["exp"]), tz=timezone.utc),
            expires_at=datetime.fromtimestamp(payload["exp"], tz=timezone.utc),
        )
    except (TypeError, ValueError):
        raise AuthError("Invalid token payload")


class AuthService:

    def __init__(self, db: Session, settings: Settings):
        self.db = db
        self.settings = settings

    # ---------------- REGISTER ----------------
    def register(self, username: str, email: str, password: str, role: AdminRole = AdminRole.ADMIN) -> Admin:
        try:
            data = AdminCreate(username=username, email=email, password=password)
            role = AdminRole(role)
        except (PydanticValidationError, ValueError) as e:
            raise ValidationError(f"Invalid admin details: {_describe(e)}")

        username, password = data.username, data.password
        email = data.email.lower()
        existing = self.db.query(Admin).filter(
            or_(Admin.email == email, Admin.username == username)
        ).first()
        if existing:
            field = "Email" if existing.email == email else "Username"
            raise ValidationError(f"{field} already registered")

        admin = Admin(
            username=username,
            email=email,
            password_hash=hash_password(password),
            role=role,
        )
        self.db.add(admin)
        try:
            self.db.commit()
        except IntegrityError:
            # lost a race with a concurrent registration
            self.db.rollback()
            raise ValidationError("Username or email already registered")
        except SQLAlchemyError as e:
            self.db.rollback()
            raise UnexpectedError(f"Failed to register admin: {e}")
        self.db.refresh(admin)

        logger.info(f"Admin registered: id={admin.id} email={admin.email} role={admin.role.value}")
        return admin

    # ---------------- LOGIN ----------------
    def login(self, email: str, password: str) -> tuple[Admin, str]:
        admin = self.db.query(Admin).filter(Admin.email == email.lower()).first()

        if not admin:
            logger.info(f"Login failed: unknown email {email}")
            raise AuthError(INVALID_CREDENTIALS)

        if not verify_password(password, admin.password_hash):
            logger.info(f"Login failed: wrong password for admin id={admin.id}")
            raise AuthError(INVALID_CREDENTIALS)

        logger.info(f"Admin logged in: id={admin.id}")
        return admin, self.issue_token(admin)

    def issue_token(self, admin: Admin) -> str:
        return create_access_token({"sub": str(admin.id), "role": admin.role.value}, self.settings)

    # ---------------- TOKENS ----------------
    def verify_token(self, token: str | None) -> AdminClaims:
        return verify_token(token, self.settings)

    # ---------------- PROFILE ----------------
    def get_admin(self, admin_id: int) -> Admin:
        admin = self.db.get(Admin, admin_id)
        if not admin:
            raise NotFoundError("Admin not found")
        return admin

    def update_password(self, admin_id: int, old_password: str, new_password: str) -> Admin:
        admin = self.get_admin(admin_id)

        if not verify_password(old_password, admin.password_hash):
            logger.info(f"Password update rejected for admin id={admin.id}")
            raise AuthError("Current password is incorrect")

        admin.password_hash = hash_password(new_password)
        try:
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            raise UnexpectedError(f"Failed to update password: {e}")
        self.db.refresh(admin)

        logger.info(f"Password updated for admin id={admin.id}")
        return admin
