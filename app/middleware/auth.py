"""
Supabase JWT authentication for the admin API.

Tokens issued by Supabase Auth are verified against the project's public
JWKS, which is cached for an hour.
"""
import logging
import time
from typing import Optional

import httpx
from fastapi import Header, HTTPException
from jose import jwk, jwt

from app.config import get_settings

logger = logging.getLogger(__name__)

_jwks_cache: Optional[dict] = None
_jwks_cache_time: float = 0
JWKS_CACHE_DURATION = 60 * 60

JWT_AUDIENCE = "authenticated"


def get_auth_base_url() -> str:
    url = get_settings().supabase_url
    if not url:
        raise HTTPException(status_code=500, detail="SUPABASE_URL must be set")
    return f"{url.rstrip('/')}/auth/v1"


async def get_jwks() -> dict:
    """Fetch JWKS, reusing the cached copy while it is fresh"""
    global _jwks_cache, _jwks_cache_time

    now = time.time()
    if _jwks_cache and (now - _jwks_cache_time) < JWKS_CACHE_DURATION:
        return _jwks_cache

    jwks_url = f"{get_auth_base_url()}/.well-known/jwks.json"
    logger.info(f"Fetching JWKS from Supabase: {jwks_url}")

    try:
        async with httpx.AsyncClient() as client:
            response = await client.get(jwks_url, timeout=10.0)
            response.raise_for_status()
            _jwks_cache = response.json()
            _jwks_cache_time = now
            return _jwks_cache
    except httpx.HTTPError as e:
        logger.error(f"Failed to fetch JWKS: {e}")
        if _jwks_cache:
            logger.warning("Using expired JWKS cache due to fetch failure")
            return _jwks_cache
        raise HTTPException(status_code=500, detail="Failed to fetch authentication keys")


async def verify_token(token: str) -> dict:
    """
    Verify a Supabase access token (ES256 or RS256) and return its claims.

    Raises HTTPException(401) for anything that does not verify.
    """
    try:
        jwks = await get_jwks()
        header = jwt.get_unverified_header(token)
        kid = header.get("kid")
        if not kid:
            raise HTTPException(status_code=401, detail="Token missing key ID (kid)")

        key_data = next((k for k in jwks.get("keys", []) if k.get("kid") == kid), None)
        if not key_data:
            raise HTTPException(status_code=401, detail=f"Key with ID '{kid}' not found in JWKS")

        return jwt.decode(
            token,
            jwk.construct(key_data),
            algorithms=["ES256", "RS256"],
            audience=JWT_AUDIENCE,
            issuer=get_auth_base_url(),
        )
    except jwt.ExpiredSignatureError:
        raise HTTPException(status_code=401, detail="Token has expired")
    except jwt.JWTClaimsError as e:
        raise HTTPException(status_code=401, detail=f"Token validation failed: {str(e)}")
    except jwt.JWTError as e:
        raise HTTPException(status_code=401, detail=f"Invalid token: {str(e)}")


async def get_current_user_id(authorization: Optional[str] = Header(None)) -> str:
    """
    FastAPI dependency: verify the Bearer token and return the user ID (sub)
    """
    if not authorization:
        raise HTTPException(status_code=401, detail="Authorization header missing")

    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token:
        raise HTTPException(
            status_code=401,
            detail="Invalid authorization header format. Expected 'Bearer <token>'"
        )

    payload = await verify_token(token)
    user_id = payload.get("sub")
    if not user_id:
        raise HTTPException(status_code=401, detail="Invalid token: no user ID")
    return user_id
