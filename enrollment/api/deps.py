from typing import Optional

from fastapi import Depends, HTTPException
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from enrollment.schemas.enrollment import User
from enrollment.services.auth import TokenService
from enrollment.services.enrollment_store import EnrollmentStore
from enrollment.services.form_engine import FormConfigurationEngine

bearer = HTTPBearer(auto_error=False)


def get_engine() -> FormConfigurationEngine:
    return FormConfigurationEngine.get_instance()


def get_store() -> EnrollmentStore:
    return EnrollmentStore.get_instance()


def get_token_service() -> TokenService:
    return TokenService.get_instance()


def get_current_user(
    creds: Optional[HTTPAuthorizationCredentials] = Depends(bearer),
    store: EnrollmentStore = Depends(get_store),
    tokens: TokenService = Depends(get_token_service),
) -> User:
    if not creds:
        raise HTTPException(status_code=401, detail="Not authenticated")
    if creds.credentials in store.revoked_tokens:
        raise HTTPException(status_code=401, detail="Session has ended")
    user_id = tokens.user_id_for(creds.credentials)
    user = store.users.get(user_id) if user_id is not None else None
    if user is None:
        raise HTTPException(status_code=401, detail="Invalid or expired token")
    return user


def require_admin(user: User = Depends(get_current_user)) -> User:
    if not user.is_admin:
        raise HTTPException(status_code=403, detail="Administrator access required")
    return user
