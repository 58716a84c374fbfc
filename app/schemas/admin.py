from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from app.models.enums import AdminRole


class AdminBase(BaseModel):
    username: str = Field(min_length=3, max_length=30)
    email: EmailStr

    model_config = ConfigDict(from_attributes=True)


class AdminCreate(AdminBase):
    """Public registration body. Superadmins only come from the seed."""
    password: str = Field(min_length=6)


class AdminLogin(BaseModel):
    email: EmailStr
    password: str


class PasswordUpdate(BaseModel):
    current_password: str
    new_password: str = Field(min_length=6)


class AdminOut(AdminBase):
    id: int
    role: AdminRole
    created_at: Optional[datetime] = None


class AdminClaims(BaseModel):
    """Verified identity carried by a session token."""
    admin_id: int
    role: AdminRole
    issued_at: datetime
    expires_at: datetime
