from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from marketplace.database import get_db
from marketplace.models import User
from marketplace.schemas.auth import AuthSession, LoginRequest, RefreshRequest, RegisterRequest
from marketplace.schemas.user import UserResponse
from marketplace.services import auth_service
from marketplace.services.token_service import TokenIssuer, get_token_issuer
from marketplace.utils.response import success

router = APIRouter(prefix="/auth", tags=["auth"])


def user_to_response(user: User) -> UserResponse:
    return UserResponse(
        id=user.id,
        name=user.name,
        username=user.username,
        email=user.email,
        is_active=user.is_active,
        last_login_at=user.last_login_at,
        roles=user.role_codes,
        created_at=user.created_at,
    )


@router.post("/register", status_code=201)
async def register(req: RegisterRequest, db: Session = Depends(get_db)):
    user = auth_service.register_user(db, req.name, req.username, req.email, req.password)
    return success(user_to_response(user), "User registered", 201)


@router.post("/login")
async def login(
    req: LoginRequest,
    db: Session = Depends(get_db),
    issuer: TokenIssuer = Depends(get_token_issuer),
):
    result = auth_service.login(db, issuer, req.email_or_username, req.password)
    session = AuthSession(
        user=user_to_response(result["user"]),
        access_token=result["access_token"],
        refresh_token=result["refresh_token"],
    )
    return success(session, "Login successful")


@router.post("/refresh")
async def refresh(
    req: RefreshRequest,
    db: Session = Depends(get_db),
    issuer: TokenIssuer = Depends(get_token_issuer),
):
    result = auth_service.refresh(db, issuer, req.refresh_token)
    session = AuthSession(user=user_to_response(result["user"]), access_token=result["access_token"])
    return success(session, "Token refreshed")


@router.post("/logout")
async def logout(req: RefreshRequest, db: Session = Depends(get_db)):
    auth_service.revoke(db, req.refresh_token)
    return success(message="Logged out")
