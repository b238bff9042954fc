# anthropometric/routes/athletes.py
from fastapi import APIRouter, Depends, status

from anthropometric.auth import get_current_user, hash_password
from anthropometric.authz import Role, athlete_scope, require_role, role_of
from anthropometric.db.users import UserStore, get_user_store
from anthropometric.errors import BadRequest, Conflict, Forbidden, NotFound
from anthropometric.routes.auth import public_user
from anthropometric.schemas.users import AthleteCreate, AthleteUpdate, UserOut
from anthropometric.utils.logger import log_activity
from anthropometric.utils.merge import merge_profile

router = APIRouter(prefix="/athletes", tags=["athletes"])

PROFILE_FIELDS = ("name", "gender", "age", "country", "sport", "phone")


def _athlete_or_error(users: UserStore, athlete_id: str) -> dict:
    athlete = users.find_by_id(athlete_id)
    if not athlete:
        raise NotFound("Athlete not found")
    if athlete.get("role") != Role.ATHLETE.value:
        raise BadRequest("User is not an athlete")
    return athlete


@router.get("", response_model=list[UserOut])
async def list_athletes(
    current_user: dict = Depends(get_current_user),
    users: UserStore = Depends(get_user_store),
):
    # professionals see every athlete, an athlete sees only themselves
    return [public_user(u) for u in users.find(athlete_scope(current_user))]


@router.get("/{athlete_id}", response_model=UserOut)
async def get_athlete(
    athlete_id: str,
    current_user: dict = Depends(get_current_user),
    users: UserStore = Depends(get_user_store),
):
    if role_of(current_user) is Role.ATHLETE and athlete_id != str(current_user["_id"]):
        raise Forbidden("Not authorized to view this athlete")
    return public_user(_athlete_or_error(users, athlete_id))


@router.post("", response_model=UserOut, status_code=status.HTTP_201_CREATED)
async def create_athlete(
    body: AthleteCreate,
    current_user: dict = Depends(require_role(Role.PROFESSIONAL, message="Only professionals can create athletes")),
    users: UserStore = Depends(get_user_store),
):
    if users.find_by_email(body.email):
        raise Conflict()

    doc = body.model_dump(exclude={"password"}, exclude_none=True)
    doc["role"] = Role.ATHLETE.value
    doc["password"] = await hash_password(body.password)
    athlete = users.create(doc)

    log_activity(
        user_id=str(current_user["_id"]),
        action="create_athlete",
        metadata={"athlete_id": str(athlete["_id"]), "email": athlete["email"]},
    )
    return public_user(athlete)


@router.put("/{athlete_id}", response_model=UserOut)
async def update_athlete(
    athlete_id: str,
    body: AthleteUpdate,
    current_user: dict = Depends(require_role(Role.PROFESSIONAL, message="Only professionals can update athletes")),
    users: UserStore = Depends(get_user_store),
):
    athlete = _athlete_or_error(users, athlete_id)

    patch = body.model_dump(exclude_unset=True)
    updated = users.update_fields(athlete["_id"], merge_profile(athlete, patch, PROFILE_FIELDS))
    if updated is None:
        raise NotFound("Athlete not found")

    log_activity(
        user_id=str(current_user["_id"]),
        action="update_athlete",
        metadata={"athlete_id": athlete_id, "fields": sorted(patch)},
    )
    return public_user(updated)


@router.delete("/{athlete_id}")
async def delete_athlete(
    athlete_id: str,
    current_user: dict = Depends(require_role(Role.PROFESSIONAL, message="Only professionals can delete athletes")),
    users: UserStore = Depends(get_user_store),
):
    athlete = _athlete_or_error(users, athlete_id)
    if not users.delete(athlete["_id"]):
        raise NotFound("Athlete not found")

    log_activity(user_id=str(current_user["_id"]), action="delete_athlete", metadata={"athlete_id": athlete_id})
    return {"message": "Athlete deleted successfully"}
