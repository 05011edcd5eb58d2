# api/auth.py
"""
Cookie-presence authentication.

Login checks the configured admin credentials and sets an http-only cookie;
any request carrying the cookie is treated as authenticated.
"""

import logging
import secrets

from fastapi import APIRouter, HTTPException, Request, Response

from api.schemas import AuthStatus, LoginRequest, MessageResponse
from migration.common.config import settings

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/auth", tags=["Auth"])


def require_auth(request: Request) -> None:
    """Dependency rejecting requests without the auth cookie."""
    if not request.cookies.get(settings.AUTH_COOKIE_NAME):
        raise HTTPException(status_code=401, detail="Unauthorized")


@router.post("/login", response_model=MessageResponse)
def login(credentials: LoginRequest, response: Response):
    """
    Log in with email and password.

    - **400** when either field is missing
    - **401** when the credentials are wrong
    """
    if not credentials.email or not credentials.password:
        raise HTTPException(status_code=400, detail="Email and password are required.")

    email_ok = secrets.compare_digest(
        credentials.email.strip().lower(), settings.ADMIN_EMAIL.lower()
    )
    password_ok = secrets.compare_digest(credentials.password, settings.ADMIN_PASSWORD)
    if not (email_ok and password_ok):
        logger.warning(f"Failed login attempt for {credentials.email}")
        raise HTTPException(status_code=401, detail="Incorrect email or password.")

    response.set_cookie(
        key=settings.AUTH_COOKIE_NAME,
        value=secrets.token_urlsafe(32),
        max_age=settings.AUTH_COOKIE_MAX_AGE,
        httponly=True,
        secure=settings.ENVIRONMENT == "production",
        samesite="lax",
        path="/",
    )
    return {"message": "Login successful"}


@router.post("/logout", response_model=MessageResponse)
def logout(response: Response):
    """Remove the auth cookie."""
    response.delete_cookie(key=settings.AUTH_COOKIE_NAME, path="/")
    return {"message": "Logged out"}


@router.get("/check", response_model=AuthStatus)
def check_auth(request: Request):
    """Report whether the request carries the auth cookie."""
    return {"isAuthenticated": bool(request.cookies.get(settings.AUTH_COOKIE_NAME))}
