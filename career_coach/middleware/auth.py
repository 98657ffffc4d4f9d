from fastapi import Header, HTTPException, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from typing import Optional
import jwt
import time
import httpx
from career_coach.config import get_settings
from career_coach.database import get_db
from career_coach.models.user import User
from career_coach.utils.logger import logger

# Cache for the identity provider's public keys (RS256/ES256) with TTL
_jwks_cache = None
_jwks_cached_at = 0.0
_JWKS_CACHE_TTL_SECONDS = 6 * 3600  # 6 hours


async def get_jwks() -> dict:
    """
    Fetch the identity provider's JWKS document.
    Caches it with a 6-hour TTL to pick up key rotations.
    """
    global _jwks_cache, _jwks_cached_at

    now = time.monotonic()
    if _jwks_cache and (now - _jwks_cached_at) < _JWKS_CACHE_TTL_SECONDS:
        return _jwks_cache

    jwks_url = get_settings().auth_jwks_url
    if not jwks_url:
        raise ValueError("AUTH_JWKS_URL is not configured")

    logger.info(f"[Auth] Fetching JWKS from: {jwks_url}")
    async with httpx.AsyncClient() as client:
        response = await client.get(jwks_url, timeout=5.0)
        response.raise_for_status()
        jwks = response.json()

    if not jwks.get("keys"):
        raise ValueError("No keys found in JWKS")

    _jwks_cache = jwks
    _jwks_cached_at = time.monotonic()
    logger.info(f"[Auth] Cached JWKS ({len(jwks['keys'])} keys, TTL: {_JWKS_CACHE_TTL_SECONDS}s)")
    return jwks


async def get_public_key(kid: Optional[str]):
    """Resolve the verification key for a token's key id."""
    from jwt.algorithms import RSAAlgorithm, ECAlgorithm

    jwks = await get_jwks()
    keys = jwks["keys"]
    key_data = next((k for k in keys if k.get("kid") == kid), keys[0])

    if key_data.get("kty") == "RSA":
        return RSAAlgorithm.from_jwk(key_data)
    if key_data.get("kty") == "EC":
        return ECAlgorithm.from_jwk(key_data)
    raise ValueError(f"Unsupported key type: {key_data.get('kty')}")


async def decode_token(token: str) -> dict:
    """Verify signature and expiry; returns the claims."""
    settings = get_settings()
    unverified_header = jwt.get_unverified_header(token)
    token_algorithm = unverified_header.get("alg", "HS256")

    if token_algorithm in ("RS256", "ES256"):
        verification_key = await get_public_key(unverified_header.get("kid"))
        algorithms = ["RS256", "ES256"]
    else:
        if not settings.auth_jwt_secret:
            raise HTTPException(
                status_code=500,
                detail="Server misconfiguration: JWT secret not set"
            )
        verification_key = settings.auth_jwt_secret
        algorithms = ["HS256"]

    return jwt.decode(
        token,
        verification_key,
        algorithms=algorithms,
        options={"verify_exp": True, "verify_aud": False}
    )


async def get_current_user(
    authorization: Optional[str] = Header(None),
    db: AsyncSession = Depends(get_db)
) -> User:
    """
    Validate the bearer JWT and return the matching user.

    Creates the user record on first sign-in and keeps email/name/avatar in
    sync with the token claims afterwards.

    Usage:
        @router.get("/endpoint")
        async def protected_endpoint(current_user: User = Depends(get_current_user)):
            ...
    """
    if not authorization:
        raise HTTPException(
            status_code=401,
            detail="Authorization header required",
            headers={"WWW-Authenticate": "Bearer"}
        )

    parts = authorization.split()
    if len(parts) != 2 or parts[0].lower() != "bearer":
        raise HTTPException(
            status_code=401,
            detail="Invalid authorization header format. Expected: Bearer <token>",
            headers={"WWW-Authenticate": "Bearer"}
        )

    try:
        payload = await decode_token(parts[1])
    except HTTPException:
        raise
    except jwt.ExpiredSignatureError:
        raise HTTPException(
            status_code=401,
            detail="Token expired. Please sign in again.",
            headers={"WWW-Authenticate": "Bearer"}
        )
    except jwt.InvalidTokenError as e:
        raise HTTPException(
            status_code=401,
            detail=f"Invalid token: {str(e)}",
            headers={"WWW-Authenticate": "Bearer"}
        )
    except Exception as e:
        logger.error(f"[Auth] JWT validation error: {type(e).__name__}: {str(e)}", exc_info=True)
        raise HTTPException(
            status_code=401,
            detail=f"Authentication failed: {type(e).__name__}",
            headers={"WWW-Authenticate": "Bearer"}
        )

    external_id = payload.get("sub")
    if not external_id:
        raise HTTPException(status_code=401, detail="Invalid token: missing user ID")

    result = await db.execute(select(User).where(User.external_id == external_id))
    user = result.scalar_one_or_none()

    claims = {
        "email": payload.get("email"),
        "name": payload.get("name"),
        "image_url": payload.get("picture"),
    }

    if not user:
        user = User(external_id=external_id, skills=[], **claims)
        db.add(user)
        await db.commit()
        await db.refresh(user)
        logger.info(f"[Auth] Created new user from JWT: {external_id}")
    else:
        changed = False
        for attr, value in claims.items():
            if value and getattr(user, attr) != value:
                setattr(user, attr, value)
                changed = True
        if changed:
            await db.commit()

    return user
