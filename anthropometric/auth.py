# anthropometric/auth.py
from datetime import datetime, timedelta, timezone

from fastapi import Depends, Request
from jose import ExpiredSignatureError, JWTError, jwt
from passlib.context import CryptContext
from starlette.concurrency import run_in_threadpool

from anthropometric import settings
from anthropometric.db.users import UserStore, get_user_store
from anthropometric.errors import InvalidToken, TokenExpired, Unauthenticated, UserNotFound

# --- crypto ------------------------------------------------------------------
pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__rounds=settings.BCRYPT_ROUNDS,
)


# --- password utils ----------------------------------------------------------
# bcrypt is CPU-bound; run it off the event loop so other requests keep moving.
async def hash_password(password: str) -> str:
    return await run_in_threadpool(pwd_context.hash, password)


async def verify_password(plain: str, hashed: str) -> bool:
    if not hashed:
        return False
    return await run_in_threadpool(pwd_context.verify, plain, hashed)


# --- JWT helpers -------------------------------------------------------------
def _now_utc() -> datetime:
    return datetime.now(timezone.utc)


def create_access_token(sub: str, expires_delta: timedelta | None = None) -> str:
    iat = _now_utc()
    exp = iat + (expires_delta or timedelta(days=settings.ACCESS_TOKEN_EXPIRE_DAYS))
    payload = {
        "sub": str(sub),
        "iat": int(iat.timestamp()),
        "exp": int(exp.timestamp()),
    }
    return jwt.encode(payload, settings.JWT_SECRET, algorithm=settings.JWT_ALG)


def decode_token(raw: str) -> dict:
    try:
        payload = jwt.decode(raw, settings.JWT_SECRET, algorithms=[settings.JWT_ALG])
    except ExpiredSignatureError:
        raise TokenExpired()
    except JWTError:
        raise InvalidToken()
    if not payload.get("sub"):
        raise InvalidToken("Invalid token format")
    return payload


def bearer_token(request: Request) -> str | None:
    auth_header = request.headers.get("Authorization") or ""
    if auth_header.lower().startswith("bearer "):
        return auth_header.split(" ", 1)[1].strip() or None
    return None


# --- dependency used by the routes -------------------------------------------
async def get_current_user(request: Request, users: UserStore = Depends(get_user_store)) -> dict:
    """
    Resolve the acting user from ``Authorization: Bearer <token>``.

    Missing token, bad signature, expiry and a subject that no longer exists
    all end in 401. The user document (without password) is also kept on
    ``request.state.actor`` for the audit middleware.
    """
    token = bearer_token(request)
    if not token:
        raise Unauthenticated()

    payload = decode_token(token)

    user = users.find_by_id(payload["sub"])
    if not user:
        raise UserNotFound()

    request.state.actor = user
    return user
