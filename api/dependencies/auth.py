"""
Auth dependencies:
- get_current_user: validates Supabase JWT from Authorization header, returns UserContext
- get_user_supabase: returns a Supabase client already bound to the caller's JWT
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from functools import lru_cache
from typing import Optional

import jwt
from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jwt import PyJWKClient

import config
from db.supabase_client import user_client

logger = logging.getLogger(__name__)

_auth_scheme = HTTPBearer(auto_error=False)


# ---- Data model ---------------------------------------------------------------


@dataclass(frozen=True)
class UserContext:
    user_id: str
    jwt: str
    email: Optional[str] = None
    role: Optional[str] = None  # e.g., "authenticated"


# ---- Core verification --------------------------------------------------------


@lru_cache()
def get_jwks_client() -> PyJWKClient:
    """JWKS client for the project's Supabase Auth signing keys."""
    if not config.SUPABASE_URL:
        raise RuntimeError("Missing SUPABASE_URL for auth verification")
    return PyJWKClient(f"{config.SUPABASE_URL.rstrip('/')}/auth/v1/.well-known/jwks.json")


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def _verify_supabase_jwt(token: str) -> UserContext:
    """
    Verify an asymmetric Supabase JWT against the project JWKS.
    Raises 401 on failure; returns a minimal UserContext on success.
    """
    try:
        signing_key = get_jwks_client().get_signing_key_from_jwt(token).key
        claims = jwt.decode(
            token,
            signing_key,
            algorithms=["RS256", "ES256"],
            audience=config.SUPABASE_JWT_AUDIENCE,
            options={
                "require": ["sub", "exp"],
                "verify_signature": True,
                "verify_aud": True,
            },
        )
    except (jwt.PyJWTError, RuntimeError) as exc:
        logger.error(f"User authentication failed: {exc}")
        raise _unauthorized("Unauthorized") from exc

    return UserContext(
        user_id=claims["sub"],
        jwt=token,
        email=claims.get("email"),
        role=claims.get("role"),
    )


# ---- FastAPI dependencies -----------------------------------------------------


def get_current_user(
    request: Request,
    creds: HTTPAuthorizationCredentials = Depends(_auth_scheme),
) -> UserContext:
    """
    Extracts and verifies the Supabase JWT from Authorization: Bearer <token>.
    Returns a UserContext for downstream dependencies/services.
    """
    if not request.headers.get("Authorization"):
        logger.error("Missing authorization header")
        raise _unauthorized("Missing authorization header")
    if not creds or not creds.credentials:
        raise _unauthorized("Unauthorized")

    user = _verify_supabase_jwt(creds.credentials)
    logger.info(f"Authenticated user: {user.user_id}")
    return user


def get_user_supabase(
    user: UserContext = Depends(get_current_user),
):
    """
    Returns a Supabase client bound to the caller's JWT (RLS enforced).
    Typical endpoint usage:
        def handler(db = Depends(get_user_supabase)):
            db.table("question_papers").insert({...})
    """
    return user_client(user.jwt)
