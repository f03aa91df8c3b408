"""Profile edit form."""

from dataclasses import dataclass
from datetime import date

from ..clients.base import BackendClient
from ..constraints import Field
from ..models.measurement import DistanceUnit, HeightUnit, MeasurementValue, WeightUnit
from ..models.profile import Profile, ProfileUpdate
from ..validation.errors import RequiredFieldError
from ..validation.ranges import parse_number, validate, validate_date_of_birth, validate_preferred_name
from ..validation.units import cm_to_ft_in, from_canonical, to_canonical
from .base import CancellationToken, Form


@dataclass
class BodyDraft:
    """Raw text for height and weight as typed, plus the chosen units."""

    height_unit: HeightUnit = HeightUnit.CM
    height_cm: str = ""
    height_ft: str = ""
    height_in: str = ""
    weight_unit: WeightUnit = WeightUnit.LB
    weight: str = ""

    def height_cm_value(self) -> float:
        """Height in cm (4 dp), validated against the height bounds."""
        if self.height_unit is HeightUnit.CM:
            cm = parse_number("height_cm", self.height_cm, "Height")
        else:
            if not self.height_ft.strip() or not self.height_in.strip():
                raise RequiredFieldError("height_cm", "Height is required")
            feet = parse_number("height_cm", self.height_ft, "Feet")
            inches = parse_number("height_cm", self.height_in, "Inches")
            cm = to_canonical(MeasurementValue.from_feet_inches(feet, inches))
        return validate(Field.HEIGHT_CM, cm)

    def weight_lb_value(self) -> float:
        """Weight in lb (4 dp), validated against the weight bounds."""
        number = parse_number("weight_lb", self.weight, "Weight")
        lb = to_canonical(MeasurementValue(number, self.weight_unit))
        return validate(Field.WEIGHT_LB, lb)

    def show_height(self, height_cm: float | None) -> None:
        """Fill the height fields from a stored cm value in the current unit."""
        if height_cm is None:
            return
        if self.height_unit is HeightUnit.CM:
            self.height_cm = f"{from_canonical(height_cm, HeightUnit.CM).magnitude:g}"
            return
        ft_in = cm_to_ft_in(height_cm)
        if ft_in is not None:
            self.height_ft, self.height_in = str(ft_in[0]), str(ft_in[1])

    def show_weight(self, weight_lb: float | None) -> None:
        if weight_lb is not None:
            self.weight = f"{from_canonical(weight_lb, self.weight_unit).magnitude:g}"


@dataclass
class ProfileDraft(BodyDraft):
    first_name: str = ""
    date_of_birth: str = ""
    distance_unit: DistanceUnit = DistanceUnit.KM


class ProfileForm(Form[ProfileUpdate, Profile]):
    """Edits preferred name, date of birth, height, weight and units.

    Fields validate in that order; the payload carries canonical cm and lb.
    """

    def __init__(
        self,
        backend: BackendClient,
        user_id: str,
        draft: ProfileDraft | None = None,
        today: date | None = None,
        token: CancellationToken | None = None,
    ):
        super().__init__(backend, token)
        self.user_id = user_id
        self.draft = draft or ProfileDraft()
        self.today = today

    @classmethod
    def from_profile(cls, backend: BackendClient, profile: Profile, **kwargs) -> "ProfileForm":
        """Start editing from a stored profile, shown in its preferred units."""
        draft = ProfileDraft(
            height_unit=profile.height_unit,
            weight_unit=profile.weight_unit,
            distance_unit=profile.distance_unit,
            first_name=profile.first_name or "",
            date_of_birth=profile.date_of_birth.isoformat() if profile.date_of_birth else "",
        )
        draft.show_height(profile.height_cm)
        draft.show_weight(profile.weight_lb)
        return cls(backend, profile.user_id, draft=draft, **kwargs)

    def build_payload(self) -> ProfileUpdate:
        first_name = validate_preferred_name(self.draft.first_name)
        dob = validate_date_of_birth(self.draft.date_of_birth, self.today)
        return ProfileUpdate(
            height_cm=self.draft.height_cm_value(),
            weight_lb=self.draft.weight_lb_value(),
            height_unit=self.draft.height_unit,
            weight_unit=self.draft.weight_unit,
            distance_unit=self.draft.distance_unit,
            first_name=first_name,
            date_of_birth=dob,
        )

    async def send(self, payload: ProfileUpdate) -> Profile:
        return await self.backend.update_profile(self.user_id, payload.to_payload())
