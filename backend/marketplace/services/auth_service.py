import logging

from sqlalchemy import or_
from sqlalchemy.orm import Session

from marketplace.errors import ConflictError, ForbiddenError, UnauthorizedError
from marketplace.models import AuthToken, Role, User
from marketplace.services.token_service import TokenIssuer
from marketplace.utils.security import hash_password, verify_password
from marketplace.utils.text import new_id, to_timestamp, utc_now

logger = logging.getLogger(__name__)

DEFAULT_ROLE = "USER"


def register_user(db: Session, name: str, username: str, email: str, password: str) -> User:
    existing = (
        db.query(User)
        .filter(or_(User.email == email, User.username == username))
        .first()
    )
    if existing:
        raise ConflictError(error_code="EMAIL_OR_USERNAME_TAKEN")

    now = utc_now()
    user = User(
        id=new_id(),
        name=name,
        username=username,
        email=email,
        password_hash=hash_password(password),
        is_active=True,
        created_at=now,
        updated_at=now,
    )
    default_role = db.query(Role).filter(Role.code == DEFAULT_ROLE).first()
    if default_role:
        user.roles.append(default_role)
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def login(db: Session, issuer: TokenIssuer, email_or_username: str, password: str) -> dict:
    user = (
        db.query(User)
        .filter(or_(User.email == email_or_username, User.username == email_or_username))
        .first()
    )
    if not user or not verify_password(user.password_hash, password):
        raise UnauthorizedError(error_code="INVALID_CREDENTIALS")
    if not user.is_active:
        raise ForbiddenError("User is deactivated")

    roles = user.role_codes
    access_token = issuer.issue_access_token(user.id, user.email, roles)
    refresh_token, expires_at = issuer.issue_refresh_token(user.id)

    now = utc_now()
    db.add(AuthToken(
        id=new_id(),
        user_id=user.id,
        token=refresh_token,
        token_type="REFRESH",
        expires_at=to_timestamp(expires_at),
        is_revoked=False,
        created_at=now,
    ))
    user.last_login_at = now
    db.commit()
    db.refresh(user)
    logger.info("User %s logged in", user.id)

    return {
        "user": user,
        "roles": roles,
        "access_token": access_token,
        "refresh_token": refresh_token,
    }


def _stored_refresh_token(db: Session, raw_token: str) -> AuthToken:
    stored = (
        db.query(AuthToken)
        .filter(
            AuthToken.token == raw_token,
            AuthToken.token_type == "REFRESH",
            AuthToken.is_revoked.is_(False),
        )
        .first()
    )
    if not stored:
        raise UnauthorizedError()
    return stored


def refresh(db: Session, issuer: TokenIssuer, raw_token: str) -> dict:
    stored = _stored_refresh_token(db, raw_token)
    issuer.verify_refresh_token(raw_token)

    user = stored.user
    if not user.is_active:
        raise UnauthorizedError()

    # Roles are re-read so a grant or revocation takes effect on the next refresh.
    db.refresh(user)
    roles = user.role_codes
    access_token = issuer.issue_access_token(user.id, user.email, roles)
    return {"user": user, "roles": roles, "access_token": access_token}


def revoke(db: Session, raw_token: str) -> None:
    stored = _stored_refresh_token(db, raw_token)
    stored.is_revoked = True
    db.commit()
    logger.info("Refresh token %s revoked for user %s", stored.id, stored.user_id)
