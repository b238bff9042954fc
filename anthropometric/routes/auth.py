# anthropometric/routes/auth.py
from fastapi import APIRouter, Depends, status

from anthropometric.auth import create_access_token, get_current_user, hash_password, verify_password
from anthropometric.db.users import UserStore, get_user_store
from anthropometric.errors import Conflict, InvalidCredentials
from anthropometric.schemas.users import AuthResponse, LoginRequest, RegisterRequest, UserOut
from anthropometric.utils.logger import log_activity
from anthropometric.utils.serialize import to_public

router = APIRouter(prefix="/auth", tags=["auth"])


def public_user(doc: dict) -> UserOut:
    return UserOut.model_validate(to_public(doc))


def _auth_response(user: dict) -> AuthResponse:
    return AuthResponse(token=create_access_token(str(user["_id"])), user=public_user(user))


# ---------- Register ----------
@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
async def register(body: RegisterRequest, users: UserStore = Depends(get_user_store)):
    if users.find_by_email(body.email):
        raise Conflict()

    doc = body.model_dump(exclude={"password"}, exclude_none=True)
    doc["role"] = body.role.value
    doc["password"] = await hash_password(body.password)
    user = users.create(doc)

    log_activity(user_id=str(user["_id"]), action="register", metadata={"email": user["email"], "role": user["role"]})
    return _auth_response(user)


# ---------- Login ----------
@router.post("/login", response_model=AuthResponse)
async def login(body: LoginRequest, users: UserStore = Depends(get_user_store)):
    user = users.find_by_email(body.email)
    # Same answer for unknown email and wrong password.
    if not user or not await verify_password(body.password, user.get("password")):
        raise InvalidCredentials()

    log_activity(user_id=str(user["_id"]), action="login", metadata={})
    return _auth_response(user)


# ---------- Current user ----------
@router.get("/me", response_model=UserOut)
async def me(current_user: dict = Depends(get_current_user)):
    return public_user(current_user)
