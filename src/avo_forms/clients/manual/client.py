"""Interactive draft entry for the CLI."""

import questionary
from questionary import Style

from ...constraints import Field
from ...forms.exercise_form import REPS_PRESETS, ExerciseDraft
from ...forms.profile_form import ProfileDraft
from ...forms.registration_form import RegistrationDraft
from ...models.exercise_log import ExerciseCategory, Intensity
from ...models.measurement import DistanceUnit, HeightUnit, WeightUnit
from ...validation.errors import ValidationError
from ...validation.input_filters import filter_bounded_integer, filter_numeric_input, normalize_spaces
from ...validation.ranges import validate_email

custom_style = Style(
    [
        ("qmark", "fg:#2e7d32 bold"),
        ("question", "bold"),
        ("answer", "fg:#558b2f bold"),
        ("pointer", "fg:#2e7d32 bold"),
        ("highlighted", "fg:#2e7d32 bold"),
        ("selected", "fg:#827717"),
        ("instruction", ""),
        ("text", ""),
    ]
)


def _check(func):
    """Adapt a validator that raises ValidationError to questionary's protocol."""

    def validate(text: str):
        try:
            func(text)
        except ValidationError as e:
            return e.message
        return True

    return validate


class ManualInputClient:
    """Prompts for form drafts.

    Numeric answers pass through the same keystroke filters the forms use,
    so pasted text like ``"6 ft"`` arrives as ``"6"``. Range checks are left
    to the form on submit.
    """

    async def _text(self, message: str, default: str = "") -> str:
        return await questionary.text(message, default=default, style=custom_style).ask_async() or ""

    async def _number(self, message: str, default: str = "") -> str:
        return filter_numeric_input(await self._text(message, default))

    async def _integer(self, message: str, field: Field, default: str = "") -> str:
        return filter_bounded_integer(await self._text(message, default), field)

    async def collect_profile(self, draft: ProfileDraft | None = None) -> ProfileDraft:
        """Prompt for every profile field, defaulting to ``draft``'s values."""
        draft = draft or ProfileDraft()
        print("\n=== Profile ===\n")

        draft.first_name = normalize_spaces(
            await questionary.text(
                "Preferred name:", default=draft.first_name, style=custom_style
            ).ask_async()
            or ""
        )
        draft.date_of_birth = (
            await questionary.text(
                "Date of birth (YYYY-MM-DD):", default=draft.date_of_birth, style=custom_style
            ).ask_async()
            or ""
        ).strip()

        await self._collect_body(draft)

        draft.distance_unit = await questionary.select(
            "Distance unit:",
            choices=[
                questionary.Choice("Kilometers", DistanceUnit.KM),
                questionary.Choice("Miles", DistanceUnit.MI),
            ],
            default=draft.distance_unit,
            style=custom_style,
        ).ask_async()
        return draft

    async def _collect_body(self, draft: ProfileDraft) -> None:
        draft.height_unit = await questionary.select(
            "Height unit:",
            choices=[
                questionary.Choice("Centimeters", HeightUnit.CM),
                questionary.Choice("Feet and inches", HeightUnit.FT_IN),
            ],
            default=draft.height_unit,
            style=custom_style,
        ).ask_async()
        if draft.height_unit is HeightUnit.CM:
            draft.height_cm = await self._number("Height (cm):", draft.height_cm)
        else:
            draft.height_ft = await self._number("Height - feet:", draft.height_ft)
            draft.height_in = await self._number("Height - inches:", draft.height_in)

        draft.weight_unit = await questionary.select(
            "Weight unit:",
            choices=[
                questionary.Choice("Pounds", WeightUnit.LB),
                questionary.Choice("Kilograms", WeightUnit.KG),
            ],
            default=draft.weight_unit,
            style=custom_style,
        ).ask_async()
        draft.weight = await self._number(f"Weight ({draft.weight_unit.value}):", draft.weight)

    async def collect_registration(self) -> RegistrationDraft:
        """Prompt for credentials, then the profile fields."""
        draft = RegistrationDraft()
        draft.email = (
            await questionary.text(
                "Email:", validate=_check(validate_email), style=custom_style
            ).ask_async()
            or ""
        ).strip()

        while True:
            draft.password = await questionary.password("Password:", style=custom_style).ask_async() or ""
            check = draft.password_checklist()
            if check.is_valid:
                break
            for label, passed in check.checklist():
                print(f"  [{'x' if passed else ' '}] {label}")

        draft.confirm_password = (
            await questionary.password("Confirm password:", style=custom_style).ask_async() or ""
        )
        await self.collect_profile(draft)
        return draft

    async def collect_exercise(self, distance_unit: DistanceUnit = DistanceUnit.KM) -> ExerciseDraft:
        """Prompt for one exercise log. Only the chosen category's fields are asked."""
        draft = ExerciseDraft(distance_unit=distance_unit)
        draft.name = normalize_spaces(
            await questionary.text("Exercise name:", style=custom_style).ask_async() or ""
        )
        draft.category = await questionary.select(
            "Category:",
            choices=[
                questionary.Choice("Cardio / mind-body", ExerciseCategory.CARDIO_MIND_BODY),
                questionary.Choice("Strength", ExerciseCategory.STRENGTH),
            ],
            style=custom_style,
        ).ask_async()

        if draft.category is ExerciseCategory.CARDIO_MIND_BODY:
            draft.set_minutes(await self._text("Minutes (optional):"))
            draft.distance = await self._number(f"Distance in {distance_unit.value} (optional):")
        else:
            draft.set_sets(await self._text("Sets (optional):"))
            preset = await questionary.select(
                "Reps range:",
                choices=[questionary.Choice("Skip", None), questionary.Choice("Custom", "custom")]
                + [questionary.Choice(f"{low}-{high}", (low, high)) for low, high in REPS_PRESETS],
                style=custom_style,
            ).ask_async()
            if preset == "custom":
                draft.reps_min = await self._integer("Minimum reps:", Field.EXERCISE_REPS)
                draft.reps_max = await self._integer("Maximum reps:", Field.EXERCISE_REPS)
            elif preset:
                draft.reps_min, draft.reps_max = str(preset[0]), str(preset[1])
            draft.intensity = await questionary.select(
                "Intensity:",
                choices=[questionary.Choice("Skip", None)]
                + [questionary.Choice(i.value.capitalize(), i) for i in Intensity],
                style=custom_style,
            ).ask_async()

        draft.notes = (
            await questionary.text("Notes (optional):", default="", style=custom_style).ask_async() or ""
        )
        return draft
