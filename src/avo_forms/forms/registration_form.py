"""Account registration form."""

import logging
from dataclasses import dataclass
from datetime import date

from ..clients.base import BackendClient
from ..models.profile import ProfileUpdate
from ..validation.errors import ConfirmationMismatchError
from ..validation.password import PasswordCheck, require_valid_password, validate_password
from ..validation.ranges import validate_date_of_birth, validate_email, validate_preferred_name
from .base import CancellationToken, Form
from .profile_form import ProfileDraft

logger = logging.getLogger(__name__)


@dataclass
class RegistrationDraft(ProfileDraft):
    email: str = ""
    password: str = ""
    confirm_password: str = ""

    def password_checklist(self) -> PasswordCheck:
        """Live rule status for the password field."""
        return validate_password(self.password, self.email)


@dataclass
class Registration:
    email: str
    password: str
    profile: ProfileUpdate


class RegistrationForm(Form[Registration, str]):
    """Signs up, then writes the initial profile. The result is the user ID.

    Validation order: email, password rules, confirmation, preferred name,
    date of birth, height, weight. If sign-up succeeds but the profile write
    fails, resubmitting with the same email only retries the profile write.
    Changing the email before resubmitting signs up a new account.
    """

    def __init__(
        self,
        backend: BackendClient,
        draft: RegistrationDraft | None = None,
        today: date | None = None,
        token: CancellationToken | None = None,
    ):
        super().__init__(backend, token)
        self.draft = draft or RegistrationDraft()
        self.today = today
        self.user_id: str | None = None
        self.signed_up_email: str | None = None

    def build_payload(self) -> Registration:
        d = self.draft
        email = validate_email(d.email)
        require_valid_password(d.password, email)
        if d.password != d.confirm_password:
            raise ConfirmationMismatchError()
        first_name = validate_preferred_name(d.first_name)
        dob = validate_date_of_birth(d.date_of_birth, self.today)
        profile = ProfileUpdate(
            height_cm=d.height_cm_value(),
            weight_lb=d.weight_lb_value(),
            height_unit=d.height_unit,
            weight_unit=d.weight_unit,
            distance_unit=d.distance_unit,
            first_name=first_name,
            date_of_birth=dob,
        )
        return Registration(email=email, password=d.password, profile=profile)

    async def send(self, payload: Registration) -> str:
        if self.user_id is not None and payload.email != self.signed_up_email:
            logger.debug("Email changed since sign-up; creating a new account")
            self.user_id = None
        if self.user_id is None:
            self.user_id = await self.backend.sign_up(payload.email, payload.password)
            self.signed_up_email = payload.email
        else:
            logger.debug("Account already created; retrying profile write only")
        await self.backend.update_profile(self.user_id, payload.profile.to_payload())
        return self.user_id
