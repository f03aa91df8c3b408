"""Profile and registration routes."""

from fastapi import APIRouter, Depends, HTTPException

from ...clients.base import BackendClient
from ...forms.profile_form import ProfileDraft, ProfileForm
from ...forms.registration_form import RegistrationDraft, RegistrationForm
from ...models.profile import bmi_classification, calculate_bmi
from ..deps import get_backend, submit_or_raise
from ..schemas import ProfileRequest, RegisterRequest

router = APIRouter(tags=["profile"])


def _profile_body(profile) -> dict:
    bmi = calculate_bmi(profile.height_cm, profile.weight_lb)
    return {**profile.to_dict(), "bmi": bmi, "bmi_class": bmi_classification(bmi)}


@router.get("/profile/{user_id}")
async def get_profile(user_id: str, backend: BackendClient = Depends(get_backend)):
    profile = await backend.get_profile(user_id)
    if profile is None:
        raise HTTPException(status_code=404, detail="Profile not found")
    return _profile_body(profile)


@router.put("/profile/{user_id}")
async def update_profile(user_id: str, body: ProfileRequest, backend: BackendClient = Depends(get_backend)):
    """Validate and save the whole profile. Height and weight are stored as cm and lb."""
    form = ProfileForm(backend, user_id, draft=ProfileDraft(**body.draft_kwargs()))
    profile = await submit_or_raise(form)
    return _profile_body(profile)


@router.post("/register", status_code=201)
async def register(body: RegisterRequest, backend: BackendClient = Depends(get_backend)):
    draft = RegistrationDraft(
        email=body.email,
        password=body.password,
        confirm_password=body.confirm_password,
        **body.draft_kwargs(),
    )
    user_id = await submit_or_raise(RegistrationForm(backend, draft))
    return {"user_id": user_id}
