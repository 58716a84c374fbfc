from sqlalchemy import Column, Integer, String, DateTime, Enum as SAEnum

from app.db.session import Base, utcnow
from app.models.enums import AdminRole


class Admin(Base):
    __tablename__ = "admins"

    id = Column(Integer, primary_key=True, index=True)
    username = Column(String(30), unique=True, index=True, nullable=False)
    email = Column(String, unique=True, index=True, nullable=False)
    password_hash = Column(String, nullable=False)

    role = Column(
        SAEnum(AdminRole, name="admin_role", values_callable=lambda e: [m.value for m in e]),
        nullable=False,
        default=AdminRole.ADMIN,
    )

    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
