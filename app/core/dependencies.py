from fastapi import Depends, Request
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.orm import Session

from app.core.config import Settings
from app.core.exceptions import AuthError
from app.schemas.admin import AdminClaims
from app.services.auth_service import AuthService, verify_token
from app.services.event_service import EventService
from app.utils.cloudinary_utils import AssetStore

# auto_error=False so a missing header becomes our 401 envelope
security = HTTPBearer(auto_error=False)


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_db(request: Request):
    db = request.app.state.database.session()
    try:
        yield db
    finally:
        db.close()


def get_asset_store(request: Request) -> AssetStore:
    return request.app.state.asset_store


def get_auth_service(
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> AuthService:
    return AuthService(db, settings)


def get_event_service(
    db: Session = Depends(get_db),
    storage: AssetStore = Depends(get_asset_store),
) -> EventService:
    return EventService(db, storage)


def get_current_admin(
    request: Request,
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
    settings: Settings = Depends(get_settings),
) -> AdminClaims:
    """Gate for mutation routes: a valid bearer token or 401."""
    if credentials is None or not credentials.credentials:
        raise AuthError("Not authorized, no token")

    claims = verify_token(credentials.credentials, settings)
    request.state.admin = claims
    return claims
