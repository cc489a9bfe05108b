"""Session cookie auth: signup/login/logout/me/change-password and the authorization gate."""

import logging
from functools import lru_cache
from typing import Annotated

from fastapi import APIRouter, Depends, Request, Response, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from ratestore.core.config import Settings, get_settings
from ratestore.core.database import get_db
from ratestore.core.security import SessionClaims, TokenService, TokenVerificationError
from ratestore.models import Role
from ratestore.schemas.auth import (
    ChangePasswordRequest,
    LoginRequest,
    LoginResponse,
    MeResponse,
    SignupRequest,
    SignupResponse,
    UserOut,
)
from ratestore.schemas.common import MessageResponse
from ratestore.services import accounts
from ratestore.services.errors import Forbidden, NotFound, Unauthenticated

logger = logging.getLogger(__name__)

router = APIRouter()
# Non-browser clients may send the same token as "Authorization: Bearer <token>".
security = HTTPBearer(auto_error=False)

# Landing page per role. Must list every Role member.
ROLE_HOME: dict[Role, str] = {
    Role.SYSTEM_ADMIN: "/admin/dashboard",
    Role.STORE_OWNER: "/store/dashboard",
    Role.NORMAL_USER: "/user/stores",
}


@lru_cache
def get_token_service() -> TokenService:
    """Token service built once from settings; override in tests via dependency_overrides."""
    return TokenService.from_settings(get_settings())


def _resolve_claims(
    request: Request,
    credentials: HTTPAuthorizationCredentials | None,
    settings: Settings,
    tokens: TokenService,
) -> SessionClaims | None:
    """
    Return verified claims, or None when no token was sent.
    Raises Unauthenticated when a token is present but invalid or expired.
    """
    token = request.cookies.get(settings.COOKIE_NAME)
    if not token and credentials is not None:
        token = credentials.credentials
    if not token:
        return None
    try:
        return tokens.verify(token)
    except TokenVerificationError as e:
        raise Unauthenticated(e.message) from e


def get_session(
    request: Request,
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    settings: Annotated[Settings, Depends(get_settings)],
    tokens: Annotated[TokenService, Depends(get_token_service)],
) -> SessionClaims:
    """Dependency: require a valid session token. Raises 401 if missing or invalid."""
    claims = _resolve_claims(request, credentials, settings, tokens)
    if claims is None:
        raise Unauthenticated("Not authenticated")
    return claims


def get_optional_session(
    request: Request,
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    settings: Annotated[Settings, Depends(get_settings)],
    tokens: Annotated[TokenService, Depends(get_token_service)],
) -> SessionClaims | None:
    """Dependency: the caller's session if a valid token was sent, else None."""
    try:
        return _resolve_claims(request, credentials, settings, tokens)
    except Unauthenticated:
        return None


def require_role(role: Role):
    """
    Dependency factory: require a session whose role is exactly `role`.

    Roles are flat; a SYSTEM_ADMIN is not allowed on STORE_OWNER routes.

    Usage::
        @router.get("/stats")
        def stats(_admin: Annotated[SessionClaims, Depends(require_role(Role.SYSTEM_ADMIN))]):
            ...
    """
    required = Role(role)

    def _check(session: Annotated[SessionClaims, Depends(get_session)]) -> SessionClaims:
        if session.role is not required:
            logger.warning(
                "Forbidden: account_id=%s role=%s required=%s",
                session.account_id,
                session.role.value,
                required.value,
            )
            raise Forbidden("Forbidden")
        return session

    return _check


require_admin = require_role(Role.SYSTEM_ADMIN)
require_store_owner = require_role(Role.STORE_OWNER)


@router.post("/signup", response_model=SignupResponse, status_code=status.HTTP_201_CREATED)
def signup(
    body: SignupRequest,
    db: Annotated[Session, Depends(get_db)],
) -> SignupResponse:
    """Register a NORMAL_USER account. Returns 409 if the email is taken."""
    user = accounts.create_account(
        db,
        name=body.name,
        email=body.email,
        password=body.password,
        address=body.address,
        role=Role.NORMAL_USER,
    )
    return SignupResponse(message="User created successfully", user=UserOut.model_validate(user))


@router.post("/login", response_model=LoginResponse)
def login(
    body: LoginRequest,
    response: Response,
    db: Annotated[Session, Depends(get_db)],
    settings: Annotated[Settings, Depends(get_settings)],
    tokens: Annotated[TokenService, Depends(get_token_service)],
) -> LoginResponse:
    """
    Authenticate with email and password and set the httponly session cookie.
    Unknown email and wrong password both return 401 "Invalid credentials".
    """
    user = accounts.verify_credentials(db, body.email, body.password)
    token = tokens.issue(user.id, user.role)
    response.set_cookie(
        key=settings.COOKIE_NAME,
        value=token,
        max_age=int(tokens.lifetime.total_seconds()),
        httponly=True,
        samesite="lax",
        secure=settings.COOKIE_SECURE,
        path="/",
    )
    logger.info("Login succeeded: id=%s role=%s", user.id, user.role.value)
    return LoginResponse(
        message="Login successful",
        user=UserOut.model_validate(user),
        redirect_to=ROLE_HOME[user.role],
    )


@router.post("/logout", response_model=MessageResponse)
def logout(
    response: Response,
    settings: Annotated[Settings, Depends(get_settings)],
) -> MessageResponse:
    """Clear the session cookie."""
    response.delete_cookie(
        key=settings.COOKIE_NAME,
        path="/",
        httponly=True,
        samesite="lax",
        secure=settings.COOKIE_SECURE,
    )
    return MessageResponse(message="Logged out successfully")


@router.get("/me", response_model=MeResponse)
def me(
    session: Annotated[SessionClaims, Depends(get_session)],
    db: Annotated[Session, Depends(get_db)],
) -> MeResponse:
    """Current account for the session cookie."""
    try:
        user = accounts.get_account(db, session.account_id)
    except NotFound as e:
        raise Unauthenticated("User not found") from e
    return MeResponse(user=UserOut.model_validate(user), redirect_to=ROLE_HOME[user.role])


@router.post("/change-password", response_model=MessageResponse)
def change_password(
    body: ChangePasswordRequest,
    session: Annotated[SessionClaims, Depends(get_session)],
    db: Annotated[Session, Depends(get_db)],
) -> MessageResponse:
    """Change the caller's password; 401 if the current password is wrong."""
    try:
        accounts.change_password(db, session.account_id, body.current_password, body.new_password)
    except NotFound as e:
        raise Unauthenticated("User not found") from e
    return MessageResponse(message="Password changed successfully")
