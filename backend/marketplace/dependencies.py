from fastapi import Depends, Header

from marketplace.errors import ForbiddenError, UnauthorizedError
from marketplace.services.access import Principal
from marketplace.services.token_service import TokenIssuer, get_token_issuer


def _principal_from_claims(claims: dict) -> Principal:
    return Principal(id=claims["sub"], email=claims.get("email"), roles=list(claims.get("roles") or []))


async def require_principal(
    authorization: str | None = Header(None),
    issuer: TokenIssuer = Depends(get_token_issuer),
) -> Principal:
    if not authorization or not authorization.startswith("Bearer "):
        raise UnauthorizedError()
    claims = issuer.verify_access_token(authorization[7:])
    return _principal_from_claims(claims)


async def optional_principal(
    authorization: str | None = Header(None),
    issuer: TokenIssuer = Depends(get_token_issuer),
) -> Principal | None:
    # Only a missing header means guest; a bad or expired token is still rejected.
    if not authorization:
        return None
    return await require_principal(authorization, issuer)


def require_role(role: str):
    async def role_checker(principal: Principal = Depends(require_principal)) -> Principal:
        if role not in principal.roles:
            raise ForbiddenError()
        return principal

    return role_checker
