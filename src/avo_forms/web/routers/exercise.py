"""Exercise, steps and friend request routes."""

from fastapi import APIRouter, Depends

from ...clients.base import BackendClient
from ...forms.exercise_form import ExerciseDraft, ExerciseForm, StepsForm
from ...models.exercise_log import summarize_day
from ...models.friends import FriendRequestDisplay
from ...validation.errors import RequiredFieldError
from ...validation.ranges import validate_email
from ..deps import get_backend, parse_day, submit_or_raise
from ..schemas import ExerciseRequest, FriendRequestRequest, StepsRequest, as_text

router = APIRouter(tags=["exercise"])


@router.get("/exercise/{user_id}")
async def list_exercise(user_id: str, date: str | None = None, backend: BackendClient = Depends(get_backend)):
    """The day's logs (cardio first) with cardio totals."""
    day = parse_day(date)
    summary = summarize_day(await backend.list_exercise_logs(user_id, day))
    steps = await backend.get_daily_steps(user_id, day)
    return {
        "date": day.isoformat(),
        "logs": [log.to_dict() for log in summary.logs],
        "cardio_minutes": summary.cardio_minutes,
        "cardio_distance_km": summary.cardio_distance_km,
        "cardio_count": summary.cardio_count,
        "strength_count": summary.strength_count,
        "steps": steps,
    }


@router.post("/exercise/{user_id}", status_code=201)
async def save_exercise(user_id: str, body: ExerciseRequest, backend: BackendClient = Depends(get_backend)):
    """Create a log, or update ``log_id`` when given."""
    draft = ExerciseDraft(
        name=body.name,
        category=body.category,
        minutes=as_text(body.minutes),
        distance=as_text(body.distance),
        distance_unit=body.distance_unit,
        sets=as_text(body.sets),
        reps_min=as_text(body.reps_min),
        reps_max=as_text(body.reps_max),
        intensity=body.intensity,
        notes=body.notes or "",
    )
    form = ExerciseForm(backend, user_id, parse_day(body.date), draft=draft, log_id=body.log_id)
    log = await submit_or_raise(form)
    return log.to_dict()


@router.put("/exercise/{user_id}/steps")
async def save_steps(user_id: str, body: StepsRequest, backend: BackendClient = Depends(get_backend)):
    day = parse_day(body.date)
    form = StepsForm(backend, user_id, day, steps=as_text(body.steps))
    steps = await submit_or_raise(form)
    return {"date": day.isoformat(), "steps": steps}


@router.post("/friends/{user_id}", status_code=201)
async def send_friend_request(
    user_id: str, body: FriendRequestRequest, backend: BackendClient = Depends(get_backend)
):
    target = body.target.strip()
    if not target:
        raise RequiredFieldError("target", "Enter an email address or handle")
    if "@" in target:
        target = validate_email(target)
    request_id = await backend.send_friend_request(user_id, target)
    return {"id": request_id}


@router.get("/friends/{user_id}/outgoing")
async def outgoing_requests(user_id: str, backend: BackendClient = Depends(get_backend)):
    rows = await backend.list_outgoing_friend_requests(user_id)
    return [FriendRequestDisplay.from_outgoing(row).to_dict() for row in rows]


@router.get("/friends/{user_id}/incoming")
async def incoming_requests(user_id: str, backend: BackendClient = Depends(get_backend)):
    rows = await backend.list_incoming_friend_requests(user_id)
    return [FriendRequestDisplay.from_incoming(row).to_dict() for row in rows]
