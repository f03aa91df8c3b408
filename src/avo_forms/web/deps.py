"""Request helpers shared by the routers."""

from datetime import date

from fastapi import Request

from ..clients.base import BackendClient
from ..forms.base import Form, FormState
from ..validation.errors import FormatError


def get_backend(request: Request) -> BackendClient:
    return request.app.state.backend


def parse_day(value: str | None) -> date:
    """YYYY-MM-DD, or today when omitted."""
    if not value:
        return date.today()
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise FormatError("date", "Date must be in YYYY-MM-DD format") from None


async def submit_or_raise(form: Form):
    """Submit ``form`` and return its result, or raise its error.

    The app's exception handlers turn the error into a response.
    """
    state = await form.submit()
    if state is not FormState.SUCCESS:
        raise form.error
    return form.result
