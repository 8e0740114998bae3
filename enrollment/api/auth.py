from fastapi import APIRouter, Depends, HTTPException
from fastapi.security import HTTPAuthorizationCredentials

from enrollment.api.deps import bearer, get_current_user, get_store, get_token_service
from enrollment.schemas.enrollment import Credentials, LoginResponse, User, UserPublic
from enrollment.services.auth import TokenService, authenticate, hash_password
from enrollment.services.enrollment_store import EnrollmentStore

router = APIRouter(prefix="/auth")


def _public(user: User) -> UserPublic:
    return UserPublic(id=user.id, username=user.username, is_admin=user.is_admin)


@router.post("/register", response_model=LoginResponse, status_code=201)
async def register(
    credentials: Credentials,
    store: EnrollmentStore = Depends(get_store),
    tokens: TokenService = Depends(get_token_service),
):
    if store.get_user_by_username(credentials.username):
        raise HTTPException(status_code=400, detail="Username already taken")
    user = store.create_user(credentials.username, hash_password(credentials.password))
    return LoginResponse(token=tokens.issue(user), user=_public(user))


@router.post("/login", response_model=LoginResponse)
async def login(
    credentials: Credentials,
    store: EnrollmentStore = Depends(get_store),
    tokens: TokenService = Depends(get_token_service),
):
    user = authenticate(store, credentials.username, credentials.password)
    if user is None:
        raise HTTPException(status_code=401, detail="Invalid username or password")
    return LoginResponse(token=tokens.issue(user), user=_public(user))


@router.post("/logout")
async def logout(
    user: User = Depends(get_current_user),
    creds: HTTPAuthorizationCredentials = Depends(bearer),
    store: EnrollmentStore = Depends(get_store),
    tokens: TokenService = Depends(get_token_service),
):
    store.revoke_token(creds.credentials, lambda t: tokens.user_id_for(t) is not None)
    return {"status": "logged_out", "user_id": user.id}


@router.get("/user", response_model=UserPublic)
async def current_user(user: User = Depends(get_current_user)):
    return _public(user)
