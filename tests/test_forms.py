"""Tests for the form orchestrator and concrete forms."""

import asyncio

import pytest

from avo_forms.forms import (
    CancellationToken,
    ExerciseDraft,
    ExerciseForm,
    FormState,
    KeyedCooldown,
    ProfileDraft,
    ProfileForm,
    QuickAdd,
    RegistrationForm,
    RepsRangeForm,
    StepsForm,
)
from avo_forms.models.exercise_log import ExerciseCategory, Intensity
from avo_forms.models.measurement import DistanceUnit, HeightUnit, WeightUnit
from avo_forms.models.profile import Profile
from avo_forms.validation.errors import (
    BackendError,
    ConfirmationMismatchError,
    LengthError,
    PasswordPolicyError,
    RangeError,
    RequiredFieldError,
)


class FakeClock:
    def __init__(self):
        self.now = 100.0

    def __call__(self):
        return self.now


class TestFormLifecycle:
    """Tests for the shared submit state machine."""

    def test_success(self, fake_backend, sample_profile_draft, today):
        """Test a valid submit reaching SUCCESS with one backend call."""
        form = ProfileForm(fake_backend, "user-1", draft=sample_profile_draft, today=today)
        assert form.state is FormState.EDITING

        state = asyncio.run(form.submit())

        assert state is FormState.SUCCESS
        assert form.error is None
        assert form.result.first_name == "Sam"
        assert fake_backend.call_names() == ["update_profile"]

    def test_validation_failure_skips_backend(self, fake_backend, today):
        """Test that a validation failure returns to EDITING without a backend call."""
        draft = ProfileDraft(first_name="Sam", date_of_birth="1990-06-01", height_cm="49.9", weight="170")
        form = ProfileForm(fake_backend, "user-1", draft=draft, today=today)

        state = asyncio.run(form.submit())

        assert state is FormState.EDITING
        assert isinstance(form.error, RangeError)
        assert form.error.field == "height_cm"
        assert fake_backend.calls == []

    def test_first_failing_field_wins(self, fake_backend, today):
        """Test that validation stops at the first failing field in order."""
        draft = ProfileDraft(first_name="", date_of_birth="bad", height_cm="1", weight="1")
        form = ProfileForm(fake_backend, "user-1", draft=draft, today=today)

        asyncio.run(form.submit())

        assert isinstance(form.error, RequiredFieldError)
        assert form.error.field == "preferred_name"

    def test_backend_failure_then_retry(self, fake_backend, sample_profile_draft, today):
        """Test that FAILED keeps the server message and allows a new submit."""
        fake_backend.fail_with = BackendError("new row violates check constraint")
        form = ProfileForm(fake_backend, "user-1", draft=sample_profile_draft, today=today)

        assert asyncio.run(form.submit()) is FormState.FAILED
        assert form.error.message == "new row violates check constraint"
        assert form.is_editable

        fake_backend.fail_with = None
        assert asyncio.run(form.submit()) is FormState.SUCCESS
        assert form.error is None
        assert len(fake_backend.calls) == 2

    def test_submit_after_success_ignored(self, fake_backend, sample_profile_draft, today):
        """Test that a finished form does not submit again."""
        form = ProfileForm(fake_backend, "user-1", draft=sample_profile_draft, today=today)
        asyncio.run(form.submit())
        asyncio.run(form.submit())
        assert len(fake_backend.calls) == 1

    def test_second_submit_while_submitting_ignored(self, fake_backend, sample_profile_draft, today):
        """Test that a double tap issues only one backend call."""

        async def scenario():
            fake_backend.gate = asyncio.Event()
            form = ProfileForm(fake_backend, "user-1", draft=sample_profile_draft, today=today)
            first = asyncio.create_task(form.submit())
            await asyncio.sleep(0)
            assert form.state is FormState.SUBMITTING

            second = await form.submit()
            assert second is FormState.SUBMITTING

            fake_backend.gate.set()
            return await first

        assert asyncio.run(scenario()) is FormState.SUCCESS
        assert fake_backend.call_names() == ["update_profile"]

    def test_close_discards_late_result(self, fake_backend, sample_profile_draft, today):
        """Test that a result arriving after close is not applied."""

        async def scenario():
            fake_backend.gate = asyncio.Event()
            form = ProfileForm(fake_backend, "user-1", draft=sample_profile_draft, today=today)
            task = asyncio.create_task(form.submit())
            await asyncio.sleep(0)
            form.close()
            fake_backend.gate.set()
            await task
            return form

        form = asyncio.run(scenario())
        assert form.closed
        assert form.result is None
        assert form.error is None
        assert form.state is not FormState.SUCCESS

    def test_close_discards_late_error(self, fake_backend, sample_profile_draft, today):
        """Test that a failure arriving after close is not applied."""

        async def scenario():
            fake_backend.gate = asyncio.Event()
            fake_backend.fail_with = BackendError("boom")
            form = ProfileForm(fake_backend, "user-1", draft=sample_profile_draft, today=today)
            task = asyncio.create_task(form.submit())
            await asyncio.sleep(0)
            form.close()
            fake_backend.gate.set()
            await task
            return form

        form = asyncio.run(scenario())
        assert form.error is None
        assert form.state is not FormState.FAILED

    def test_closed_form_does_not_submit(self, fake_backend, sample_profile_draft, today):
        """Test that submit on a closed form is a no-op."""
        form = ProfileForm(fake_backend, "user-1", draft=sample_profile_draft, today=today)
        form.close()
        assert asyncio.run(form.submit()) is FormState.EDITING
        assert fake_backend.calls == []

    def test_timeout_becomes_backend_error(self, fake_backend, sample_profile_draft, today):
        """Test that a hung backend call fails the form."""

        async def scenario():
            fake_backend.gate = asyncio.Event()
            form = ProfileForm(fake_backend, "user-1", draft=sample_profile_draft, today=today)
            form.timeout = 0.01
            await form.submit()
            return form

        form = asyncio.run(scenario())
        assert form.state is FormState.FAILED
        assert "timed out" in form.error.message

    def test_cancellation_token_callbacks(self):
        """Test that callbacks run once on cancel, or immediately if already cancelled."""
        token = CancellationToken()
        seen = []
        token.on_cancel(lambda: seen.append("a"))
        token.cancel()
        token.cancel()
        token.on_cancel(lambda: seen.append("b"))
        assert seen == ["a", "b"]


class TestProfileForm:
    """Tests for profile unit handling."""

    def test_imperial_input_stored_canonical(self, fake_backend, today):
        """Test that ft/in and kg are stored as cm and lb at four decimals."""
        draft = ProfileDraft(
            first_name="Sam",
            date_of_birth="1990-06-01",
            height_unit=HeightUnit.FT_IN,
            height_ft="5",
            height_in="11",
            weight_unit=WeightUnit.KG,
            weight="80",
        )
        form = ProfileForm(fake_backend, "user-1", draft=draft, today=today)
        asyncio.run(form.submit())

        payload = fake_backend.calls[0][2]
        assert payload["height_cm"] == 180.34
        assert payload["weight_lb"] == 176.3696
        assert payload["height_unit"] == "ft_in"
        assert payload["weight_unit"] == "kg"

    def test_feet_without_inches_required(self, fake_backend, today):
        """Test that both ft and in are needed."""
        draft = ProfileDraft(first_name="Sam", date_of_birth="1990-06-01",
                             height_unit=HeightUnit.FT_IN, height_ft="6", weight="170")
        form = ProfileForm(fake_backend, "user-1", draft=draft, today=today)
        asyncio.run(form.submit())
        assert isinstance(form.error, RequiredFieldError)

    def test_weight_range_checked_in_lb(self, fake_backend, today):
        """Test that a kg weight is range-checked after conversion."""
        draft = ProfileDraft(first_name="Sam", date_of_birth="1990-06-01", height_cm="180",
                             weight_unit=WeightUnit.KG, weight="20")
        form = ProfileForm(fake_backend, "user-1", draft=draft, today=today)
        asyncio.run(form.submit())
        assert isinstance(form.error, RangeError)
        assert form.error.field == "weight_lb"

    def test_from_profile_shows_preferred_units(self, fake_backend):
        """Test prefilling from a stored profile."""
        profile = Profile(
            user_id="user-1",
            height_cm=182.88,
            weight_lb=176.3696,
            height_unit=HeightUnit.FT_IN,
            weight_unit=WeightUnit.KG,
            first_name="Sam",
        )
        form = ProfileForm.from_profile(fake_backend, profile)
        assert (form.draft.height_ft, form.draft.height_in) == ("6", "0")
        assert form.draft.weight == "80"
        assert form.user_id == "user-1"


class TestExerciseForm:
    """Tests for exercise logging."""

    def test_strength_nulls_cardio(self, fake_backend, today):
        """Test that a strength submit stores no minutes or distance."""
        draft = ExerciseDraft(
            name="Bench press",
            category=ExerciseCategory.STRENGTH,
            minutes="30",
            distance="5",
            sets="3",
            reps_min="8",
            reps_max="12",
            intensity=Intensity.MEDIUM,
        )
        form = ExerciseForm(fake_backend, "user-1", today, draft=draft)
        assert asyncio.run(form.submit()) is FormState.SUCCESS

        name, user_id, log_date, payload = fake_backend.calls[0]
        assert name == "create_exercise_log"
        assert log_date == today
        assert payload["minutes"] is None
        assert payload["distance_km"] is None
        assert payload["sets"] == 3
        assert (payload["reps_min"], payload["reps_max"]) == (8, 12)
        assert payload["intensity"] == "medium"

    def test_cardio_nulls_strength(self, fake_backend, today):
        """Test that a cardio submit stores no sets, reps or intensity."""
        draft = ExerciseDraft(
            name="Run",
            minutes="30",
            distance="3.1",
            distance_unit=DistanceUnit.MI,
            sets="3",
            reps_min="8",
            intensity=Intensity.HIGH,
        )
        form = ExerciseForm(fake_backend, "user-1", today, draft=draft)
        asyncio.run(form.submit())

        payload = fake_backend.calls[0][3]
        assert payload["minutes"] == 30
        assert payload["distance_km"] == 4.989
        for key in ("sets", "reps_min", "reps_max", "intensity"):
            assert payload[key] is None

    def test_strength_fields_not_validated_for_cardio(self, fake_backend, today):
        """Test that hidden fields of the other category are ignored."""
        draft = ExerciseDraft(name="Yoga", minutes="45", reps_min="500")
        form = ExerciseForm(fake_backend, "user-1", today, draft=draft)
        assert asyncio.run(form.submit()) is FormState.SUCCESS

    def test_update_uses_log_id(self, fake_backend, today):
        """Test that editing an existing log updates it."""
        form = ExerciseForm(fake_backend, "user-1", today, draft=ExerciseDraft(name="Walk"), log_id=12)
        asyncio.run(form.submit())
        assert fake_backend.calls[0][:3] == ("update_exercise_log", "user-1", 12)
        assert form.result.id == 12

    def test_name_rules(self, fake_backend, today):
        """Test name required and length limits."""
        form = ExerciseForm(fake_backend, "user-1", today, draft=ExerciseDraft(name="  "))
        asyncio.run(form.submit())
        assert isinstance(form.error, RequiredFieldError)

        form = ExerciseForm(fake_backend, "user-1", today, draft=ExerciseDraft(name="x" * 31))
        asyncio.run(form.submit())
        assert isinstance(form.error, LengthError)
        assert fake_backend.calls == []

    def test_minutes_typing_clamps(self):
        """Test the minutes field clamps while typing."""
        draft = ExerciseDraft()
        draft.set_minutes("1500")
        assert draft.minutes == "999"


class TestRepsRangeForm:
    """Tests for the reps range sheet."""

    def test_min_greater_than_max_rejected(self):
        """Test that min must not exceed max."""
        form = RepsRangeForm()
        form.reps_min, form.reps_max = "12", "8"
        assert asyncio.run(form.submit()) is FormState.EDITING
        assert isinstance(form.error, RangeError)
        assert form.error.field == "reps_min"
        assert (form.error.min, form.error.max) == (1, 100)

    def test_bounds(self):
        """Test that each bound is 1..100."""
        form = RepsRangeForm()
        form.reps_min = "0"
        asyncio.run(form.submit())
        assert isinstance(form.error, RangeError)

    def test_preset_and_clear(self):
        """Test presets and clearing."""
        form = RepsRangeForm()
        form.apply_preset(1)
        assert asyncio.run(form.submit()) is FormState.SUCCESS
        assert form.result == (8, 12)

        cleared = RepsRangeForm(8, 12)
        cleared.clear()
        asyncio.run(cleared.submit())
        assert cleared.result == (None, None)


class TestStepsForm:
    """Tests for daily steps."""

    def test_typing_clamps_and_never_stores_over_max(self, fake_backend, today):
        """Test that 150001 shows 150000 and stores 150000."""
        form = StepsForm(fake_backend, "user-1", today)
        assert form.type_steps("150001") == "150000"
        asyncio.run(form.submit())
        assert fake_backend.calls[0][3] == 150000

    def test_raw_value_over_max_rejected(self, fake_backend, today):
        """Test that an unfiltered value over the max fails validation."""
        form = StepsForm(fake_backend, "user-1", today, steps="150001")
        asyncio.run(form.submit())
        assert isinstance(form.error, RangeError)
        assert fake_backend.calls == []


class TestQuickAdd:
    """Tests for quick-add chips."""

    def test_cooldown_blocks_duplicates(self, fake_backend, today):
        """Test that a chip is disabled for three seconds after a tap."""
        clock = FakeClock()
        quick = QuickAdd(fake_backend, "user-1", today, cooldown=KeyedCooldown(3.0, clock=clock))

        first = asyncio.run(quick.add("Walk", 30))
        assert first.state is FormState.SUCCESS
        assert asyncio.run(quick.add("Walk", 30)) is None
        assert quick.is_disabled("Walk", 30)

        assert asyncio.run(quick.add("Walk")) is not None

        clock.now += 3.0
        assert not quick.is_disabled("Walk", 30)
        assert asyncio.run(quick.add("Walk", 30)) is not None
        assert fake_backend.call_names().count("create_exercise_log") == 3

    def test_chip_key(self):
        """Test that chips are keyed by name and minutes."""
        assert QuickAdd.chip_key("Walk", None) == "Walk-None"
        assert QuickAdd.chip_key("Walk", 30) == "Walk-30"


class TestRegistrationForm:
    """Tests for registration."""

    def test_success(self, fake_backend, sample_registration_draft, today):
        """Test sign-up followed by the initial profile write."""
        form = RegistrationForm(fake_backend, sample_registration_draft, today=today)
        assert asyncio.run(form.submit()) is FormState.SUCCESS
        assert form.result == "user-1"
        assert fake_backend.call_names() == ["sign_up", "update_profile"]
        assert fake_backend.calls[0][1] == "someone@example.com"

    def test_email_checked_first(self, fake_backend, sample_registration_draft, today):
        """Test that a bad email is reported before a bad password."""
        sample_registration_draft.email = "nope"
        sample_registration_draft.password = "abc"
        form = RegistrationForm(fake_backend, sample_registration_draft, today=today)
        asyncio.run(form.submit())
        assert form.error.field == "email"

    def test_password_policy(self, fake_backend, sample_registration_draft, today):
        """Test that a weak password lists its failed rules."""
        sample_registration_draft.password = sample_registration_draft.confirm_password = "someone123"
        form = RegistrationForm(fake_backend, sample_registration_draft, today=today)
        asyncio.run(form.submit())
        assert isinstance(form.error, PasswordPolicyError)
        assert fake_backend.calls == []

    def test_confirmation_mismatch(self, fake_backend, sample_registration_draft, today):
        """Test that the confirmation must match."""
        sample_registration_draft.confirm_password = "Tr0ub4dor&9?"
        form = RegistrationForm(fake_backend, sample_registration_draft, today=today)
        asyncio.run(form.submit())
        assert isinstance(form.error, ConfirmationMismatchError)
        assert form.error.field == "confirm_password"

    def test_duplicate_email_surfaced(self, fake_backend, sample_registration_draft, today):
        """Test that the backend's message is shown as-is."""
        message = "This email is already registered. Please try logging in instead."
        fake_backend.fail_with = BackendError(message, status=409)
        form = RegistrationForm(fake_backend, sample_registration_draft, today=today)
        assert asyncio.run(form.submit()) is FormState.FAILED
        assert form.error.message == message

    def test_retry_skips_sign_up(self, fake_backend, sample_registration_draft, today):
        """Test that a retry after a profile failure does not sign up twice."""
        form = RegistrationForm(fake_backend, sample_registration_draft, today=today)
        original = fake_backend.update_profile

        async def failing_update(user_id, payload):
            fake_backend.calls.append(("update_profile", user_id, payload))
            raise BackendError("profile write failed")

        fake_backend.update_profile = failing_update
        assert asyncio.run(form.submit()) is FormState.FAILED

        fake_backend.update_profile = original
        assert asyncio.run(form.submit()) is FormState.SUCCESS
        assert fake_backend.call_names().count("sign_up") == 1

    def test_retry_with_new_email_signs_up_again(self, fake_backend, sample_registration_draft, today):
        """Test that changing the email after a profile failure creates a new account."""
        form = RegistrationForm(fake_backend, sample_registration_draft, today=today)
        original = fake_backend.update_profile

        async def failing_update(user_id, payload):
            fake_backend.calls.append(("update_profile", user_id, payload))
            raise BackendError("profile write failed")

        fake_backend.update_profile = failing_update
        assert asyncio.run(form.submit()) is FormState.FAILED

        fake_backend.update_profile = original
        sample_registration_draft.email = "other@example.com"
        assert asyncio.run(form.submit()) is FormState.SUCCESS
        sign_ups = [call[1] for call in fake_backend.calls if call[0] == "sign_up"]
        assert sign_ups == ["someone@example.com", "other@example.com"]
        assert form.signed_up_email == "other@example.com"


@pytest.mark.parametrize("seconds", [0.0, 3.0])
def test_keyed_cooldown_window(seconds):
    """Test that a key unblocks exactly when its window ends."""
    clock = FakeClock()
    cooldown = KeyedCooldown(seconds, clock=clock)
    assert cooldown.trigger("k")
    if seconds:
        assert not cooldown.trigger("k")
    clock.now += seconds
    assert not cooldown.is_blocked("k")
