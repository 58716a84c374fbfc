from fastapi import APIRouter, Depends, status

from app.core.dependencies import get_auth_service, get_current_admin
from app.schemas.admin import AdminClaims, AdminCreate, AdminLogin, AdminOut, PasswordUpdate
from app.services.auth_service import AuthService

router = APIRouter(prefix="/auth", tags=["Authentication"])


def admin_json(admin) -> dict:
    return AdminOut.model_validate(admin).model_dump(mode="json")


# =====================================================================
#                           ADMIN REGISTER
# =====================================================================
@router.post("/register", status_code=status.HTTP_201_CREATED)
def register(data: AdminCreate, auth: AuthService = Depends(get_auth_service)):
    admin = auth.register(data.username, data.email, data.password)

    return {
        "success": True,
        "message": "Admin registered successfully",
        "data": {
            "admin": admin_json(admin),
            "token": auth.issue_token(admin),
        },
    }


# =====================================================================
#                           ADMIN LOGIN
# =====================================================================
@router.post("/login")
def login(data: AdminLogin, auth: AuthService = Depends(get_auth_service)):
    admin, token = auth.login(data.email, data.password)

    return {
        "success": True,
        "message": "Login successful",
        "data": {
            "admin": admin_json(admin),
            "token": token,
            "token_type": "bearer",
        },
    }


# =====================================================================
#                           CURRENT ADMIN
# =====================================================================
@router.get("/me")
def me(
    claims: AdminClaims = Depends(get_current_admin),
    auth: AuthService = Depends(get_auth_service),
):
    return {"success": True, "data": admin_json(auth.get_admin(claims.admin_id))}


# =====================================================================
#                           UPDATE PASSWORD
# =====================================================================
@router.put("/update-password")
def update_password(
    data: PasswordUpdate,
    claims: AdminClaims = Depends(get_current_admin),
    auth: AuthService = Depends(get_auth_service),
):
    admin = auth.update_password(claims.admin_id, data.current_password, data.new_password)

    return {
        "success": True,
        "message": "Password updated successfully",
        "data": {"token": auth.issue_token(admin)},
    }
