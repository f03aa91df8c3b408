"""Exercise log commands."""

from datetime import date

import click

from ..clients.manual import ManualInputClient
from ..forms.exercise_form import ExerciseDraft, ExerciseForm, StepsForm
from ..models.exercise_log import ExerciseCategory, ExerciseLog, Intensity, format_minutes, summarize_day
from ..models.measurement import DistanceUnit
from ..validation.errors import BackendError
from ..validation.units import distance_for_display
from .base import (
    async_command,
    echo_error,
    echo_info,
    ensure_initialized,
    format_table,
    get_backend,
    submit_form,
    user_option,
)

date_option = click.option(
    "--date",
    "log_date",
    type=click.DateTime(formats=["%Y-%m-%d"]),
    default=None,
    help="Log date (YYYY-MM-DD, default: today)",
)


def _day(log_date) -> date:
    return log_date.date() if log_date else date.today()


async def _distance_unit(backend, user_id: str) -> DistanceUnit:
    profile = await backend.get_profile(user_id)
    return profile.distance_unit if profile else DistanceUnit.KM


def _detail(log: ExerciseLog, unit: DistanceUnit) -> str:
    parts = []
    if log.category is ExerciseCategory.CARDIO_MIND_BODY:
        if log.minutes is not None:
            parts.append(f"{log.minutes} min")
        if log.distance_km is not None:
            parts.append(f"{distance_for_display(log.distance_km, unit):g} {unit.value}")
    else:
        if log.sets is not None:
            parts.append(f"{log.sets} sets")
        if log.reps_min is not None or log.reps_max is not None:
            low = log.reps_min if log.reps_min is not None else "?"
            high = log.reps_max if log.reps_max is not None else "?"
            parts.append(f"{low}-{high} reps")
        if log.intensity:
            parts.append(log.intensity.value)
    return ", ".join(parts) or "-"


@click.group()
@click.pass_context
def exercise(ctx):
    """Log and review exercise."""
    ensure_initialized(ctx)


@exercise.command()
@user_option
@date_option
@click.option("--name", default=None, help="Exercise name")
@click.option("--strength", is_flag=True, help="Strength exercise (default: cardio/mind-body)")
@click.option("--minutes", default="", help="Duration in minutes (cardio)")
@click.option("--distance", default="", help="Distance in your distance unit (cardio)")
@click.option("--sets", default="", help="Number of sets (strength)")
@click.option("--reps-min", default="", help="Minimum reps (strength)")
@click.option("--reps-max", default="", help="Maximum reps (strength)")
@click.option("--intensity", type=click.Choice([i.value for i in Intensity]), default=None)
@click.option("--notes", default="", help="Notes")
@click.option("--log-id", type=int, default=None, help="Update this log instead of adding one")
@click.option("--interactive", "-i", is_flag=True, help="Prompt for every field")
@click.pass_context
@async_command
async def add(ctx, user_id, log_date, name, strength, minutes, distance, sets, reps_min, reps_max,
              intensity, notes, log_id, interactive):
    """Add (or with --log-id, update) an exercise log.

    Examples:

        avo-forms exercise add --name Walk --minutes 30 --distance 2.5

        avo-forms exercise add --strength --name "Bench press" --sets 3 --reps-min 8 --reps-max 12
    """
    day = _day(log_date)
    async with get_backend() as backend:
        unit = await _distance_unit(backend, user_id)
        if interactive:
            draft = await ManualInputClient().collect_exercise(unit)
        elif name is None:
            echo_error("--name is required unless --interactive is given")
            ctx.exit(1)
        else:
            draft = ExerciseDraft(
                name=name,
                category=ExerciseCategory.STRENGTH if strength else ExerciseCategory.CARDIO_MIND_BODY,
                minutes=minutes,
                distance=distance,
                distance_unit=unit,
                sets=sets,
                reps_min=reps_min,
                reps_max=reps_max,
                intensity=Intensity(intensity) if intensity else None,
                notes=notes,
            )

        form = ExerciseForm(backend, user_id, day, draft=draft, log_id=log_id)
        verb = "Updated" if form.is_update else "Logged"
        await submit_form(ctx, form, lambda f: f"{verb} {f.result.name} (ID: {f.result.id})")


@exercise.command(name="list")
@user_option
@date_option
@click.pass_context
@async_command
async def list_logs(ctx, user_id, log_date):
    """List a day's exercise logs, cardio first."""
    day = _day(log_date)
    async with get_backend() as backend:
        try:
            unit = await _distance_unit(backend, user_id)
            logs = await backend.list_exercise_logs(user_id, day)
        except BackendError as e:
            echo_error(e.message)
            ctx.exit(1)

    if not logs:
        echo_info(f"No exercise logged for {day.isoformat()}")
        return

    summary = summarize_day(logs)
    rows = [
        [str(log.id), log.name, log.category.value, _detail(log, unit)]
        for log in summary.logs
    ]
    click.echo()
    click.echo(format_table(["ID", "Name", "Category", "Details"], rows))
    click.echo()
    distance = distance_for_display(summary.cardio_distance_km, unit)
    click.echo(
        f"Cardio: {summary.cardio_count} ({format_minutes(summary.cardio_minutes)}, "
        f"{distance:g} {unit.value})  Strength: {summary.strength_count}"
    )


@exercise.command()
@user_option
@date_option
@click.argument("steps")
@click.pass_context
@async_command
async def steps(ctx, user_id, log_date, steps):
    """Record the day's step count."""
    day = _day(log_date)
    async with get_backend() as backend:
        form = StepsForm(backend, user_id, day)
        form.type_steps(steps)
        await submit_form(ctx, form, f"Saved {form.steps} steps for {day.isoformat()}")
