"""Integration tests for the CLI and JSON API over a real SQLite file.

Each test gets its own data directory, so nothing touches the default
database.
"""

import re

import pytest

DAY = "2026-01-15"
PASSWORD = "Tr0ub4dor&9!"


@pytest.fixture
def registered(cli):
    """Initialize the database and register one account. Returns its user ID."""
    assert cli("init").exit_code == 0
    result = cli(
        "register",
        "--email", "someone@example.com",
        "--password", PASSWORD,
        "--name", "Sam",
        "--dob", "1990-06-01",
        "--height", "180",
        "--weight", "170",
    )
    assert result.exit_code == 0, result.output
    return re.search(r"AVO_USER_ID=(\S+)", result.output).group(1)


class TestCliStateless:
    """Commands that need no database."""

    def test_convert(self, cli):
        """Test unit conversion output."""
        assert cli("convert", "182.88", "cm", "ft_in").output.strip() == "6' 0\""
        assert cli("convert", "5", "mi", "km").output.strip() == "8.05 km"

    def test_convert_across_dimensions(self, cli):
        """Test that height cannot convert to weight."""
        assert cli("convert", "180", "cm", "lb").exit_code == 1

    def test_password_check(self, cli):
        """Test the password checklist and exit code."""
        weak = cli("password", "check", "--email", "abc@x.com", "--password", "abc")
        assert weak.exit_code == 1
        assert "requirement(s) not met" in weak.output

        strong = cli("password", "check", "--password", PASSWORD)
        assert strong.exit_code == 0
        assert "meets all requirements" in strong.output

    def test_validate(self, cli):
        """Test single-field validation."""
        rejected = cli("validate", "height_cm", "49.9")
        assert rejected.exit_code == 1
        assert "Height must be between 50 and 304.8 cm" in rejected.output

        accepted = cli("validate", "steps", "9000")
        assert accepted.exit_code == 0
        assert "steps: 9000" in accepted.output


class TestCliAccountFlow:
    """Register, edit the profile, log exercise and send friend requests."""

    def test_requires_init(self, cli):
        """Test that database commands fail before init."""
        result = cli("profile", "show", "--user", "u1")
        assert result.exit_code == 1
        assert "avo-forms init" in result.output

    def test_profile_show_and_set(self, cli, registered):
        """Test showing a profile and switching it to imperial height and kg."""
        shown = cli("profile", "show", "--user", registered)
        assert "Sam" in shown.output
        assert "180 cm" in shown.output
        assert "23.8 (normal)" in shown.output

        updated = cli("profile", "set", "--user", registered,
                      "--feet", "5", "--inches", "11", "--weight", "80", "--weight-unit", "kg")
        assert updated.exit_code == 0, updated.output

        shown = cli("profile", "show", "--user", registered)
        assert "5' 11\"" in shown.output
        assert "80 kg" in shown.output

    def test_profile_set_out_of_range(self, cli, registered):
        """Test that an invalid height is reported and nothing is saved."""
        result = cli("profile", "set", "--user", registered, "--height", "20")
        assert result.exit_code == 1
        assert "Height must be between 50 and 304.8 cm" in result.output
        assert "180 cm" in cli("profile", "show", "--user", registered).output

    def test_duplicate_registration(self, cli, registered):
        """Test that the backend's duplicate message is shown."""
        result = cli("register", "--email", "someone@example.com", "--password", PASSWORD,
                     "--name", "Sam", "--dob", "1990-06-01", "--height", "180", "--weight", "170")
        assert result.exit_code == 1
        assert "already registered" in result.output

    def test_exercise_day(self, cli, registered):
        """Test logging cardio and strength and listing the day."""
        walk = cli("exercise", "add", "--user", registered, "--date", DAY,
                   "--name", "Walk", "--minutes", "30", "--distance", "2.5")
        assert walk.exit_code == 0, walk.output
        assert "Logged Walk" in walk.output

        bench = cli("exercise", "add", "--user", registered, "--date", DAY, "--strength",
                    "--name", "Bench press", "--sets", "3", "--reps-min", "8", "--reps-max", "12",
                    "--intensity", "high")
        assert bench.exit_code == 0, bench.output

        listed = cli("exercise", "list", "--user", registered, "--date", DAY)
        assert listed.output.index("Walk") < listed.output.index("Bench press")
        assert "8-12 reps" in listed.output
        assert "Cardio: 1 (30m, 2.5 km)  Strength: 1" in listed.output

    def test_exercise_reps_range_rejected(self, cli, registered):
        """Test that min reps above max reps is refused."""
        result = cli("exercise", "add", "--user", registered, "--date", DAY, "--strength",
                     "--name", "Squat", "--reps-min", "12", "--reps-max", "8")
        assert result.exit_code == 1
        assert "Minimum reps cannot exceed maximum reps" in result.output

    def test_steps_clamped(self, cli, registered):
        """Test that steps above the max are saved as the max."""
        result = cli("exercise", "steps", "--user", registered, "--date", DAY, "150001")
        assert result.exit_code == 0
        assert "Saved 150000 steps" in result.output

    def test_friend_requests(self, cli, registered):
        """Test sending a request and listing it masked."""
        sent = cli("friends", "add", "--user", registered, "friend@example.com")
        assert sent.exit_code == 0, sent.output

        outgoing = cli("friends", "outgoing", "--user", registered)
        assert "f***@e***.com" in outgoing.output
        assert "friend@example.com" not in outgoing.output

        bad = cli("friends", "add", "--user", registered, "friend@nowhere")
        assert bad.exit_code == 1


class TestApi:
    """Tests for the JSON API."""

    def _register(self, api):
        response = api.post("/register", json={
            "email": "someone@example.com",
            "password": PASSWORD,
            "confirm_password": PASSWORD,
            "first_name": "Sam",
            "date_of_birth": "1990-06-01",
            "height_cm": 180,
            "weight": "170",
        })
        assert response.status_code == 201, response.text
        return response.json()["user_id"]

    def test_health(self, api):
        """Test the health endpoint."""
        assert api.get("/health").json()["status"] == "healthy"

    def test_validate_field(self, api):
        """Test field validation responses."""
        rejected = api.post("/validate/height_cm", json={"value": "49.9"})
        assert rejected.status_code == 422
        assert rejected.json() == {"field": "height_cm", "error": "Height must be between 50 and 304.8 cm"}

        accepted = api.post("/validate/date_of_birth", json={"value": "1990-06-01"})
        assert accepted.json() == {"field": "date_of_birth", "value": "1990-06-01"}

        assert api.post("/validate/shoe_size", json={"value": "10"}).status_code == 404
        assert "steps" in api.get("/validate").json()["fields"]

    def test_convert_and_password(self, api):
        """Test the stateless helpers."""
        converted = api.post("/convert", json={"magnitude": 182.88, "unit": "cm", "to": "ft_in"}).json()
        assert converted["display"] == "6' 0\""
        assert api.post("/convert", json={"magnitude": 1, "unit": "cm", "to": "lb"}).status_code == 422

        check = api.post("/password/check", json={"password": "abc", "email": "abc@x.com"}).json()
        assert check["valid"] is False
        assert len(check["checklist"]) == 9

    def test_register_and_profile(self, api):
        """Test registration, profile read and an imperial update."""
        user_id = self._register(api)

        profile = api.get(f"/profile/{user_id}").json()
        assert profile["first_name"] == "Sam"
        assert profile["bmi"] == 23.8

        updated = api.put(f"/profile/{user_id}", json={
            "first_name": "Sam",
            "date_of_birth": "1990-06-01",
            "height_unit": "ft_in",
            "height_ft": 5,
            "height_in": 11,
            "weight_unit": "kg",
            "weight": 80,
        })
        assert updated.status_code == 200, updated.text
        assert updated.json()["height_cm"] == 180.34
        assert updated.json()["weight_lb"] == 176.3696

        assert api.get("/profile/nobody").status_code == 404

    def test_duplicate_registration_is_backend_error(self, api):
        """Test that a backend failure returns 502 with the message."""
        self._register(api)
        response = api.post("/register", json={
            "email": "someone@example.com",
            "password": PASSWORD,
            "confirm_password": PASSWORD,
            "first_name": "Sam",
            "date_of_birth": "1990-06-01",
            "height_cm": 180,
            "weight": 170,
        })
        assert response.status_code == 502
        assert "already registered" in response.json()["error"]

    def test_exercise_and_steps(self, api):
        """Test logging exercise and steps for a day."""
        created = api.post("/exercise/u1", json={
            "date": DAY, "name": "Run", "minutes": 30, "distance": 3.1, "distance_unit": "mi",
        })
        assert created.status_code == 201, created.text
        assert created.json()["distance_km"] == 4.989

        bad = api.post("/exercise/u1", json={
            "date": DAY, "name": "Squat", "category": "strength", "reps_min": 12, "reps_max": 8,
        })
        assert bad.status_code == 422
        assert bad.json()["field"] == "reps_min"

        assert api.put("/exercise/u1/steps", json={"date": DAY, "steps": 150001}).status_code == 422
        assert api.put("/exercise/u1/steps", json={"date": DAY, "steps": 9000}).json()["steps"] == 9000

        day = api.get("/exercise/u1", params={"date": DAY}).json()
        assert [log["name"] for log in day["logs"]] == ["Run"]
        assert day["cardio_minutes"] == 30
        assert day["steps"] == 9000

        assert api.get("/exercise/u1", params={"date": "15/01/2026"}).status_code == 422

    def test_friend_requests(self, api):
        """Test sending and listing friend requests."""
        assert api.post("/friends/u1", json={"target": "  "}).status_code == 422
        assert api.post("/friends/u1", json={"target": "jane@example.com"}).status_code == 201
        assert api.post("/friends/u1", json={"target": "runner_jane"}).status_code == 201

        labels = {row["label"] for row in api.get("/friends/u1/outgoing").json()}
        assert labels == {"j***@e***.com", "runner_jane"}

    def test_update_other_users_exercise(self, api):
        """Test that a log can only be updated by the user who owns it."""
        created = api.post("/exercise/u1", json={"date": DAY, "name": "Walk", "minutes": 30}).json()

        stolen = api.post("/exercise/u2", json={
            "date": DAY, "name": "Walk", "minutes": 90, "log_id": created["id"],
        })
        assert stolen.status_code == 404

        day = api.get("/exercise/u1", params={"date": DAY}).json()
        assert [log["minutes"] for log in day["logs"]] == [30]
