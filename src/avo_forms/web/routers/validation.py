"""Stateless validation, conversion and password routes."""

from fastapi import APIRouter, HTTPException

from ...models.measurement import MeasurementValue, parse_unit
from ...validation.fields import FIELD_VALIDATORS, validate_field
from ...validation.password import validate_password
from ...validation.units import convert, format_measurement
from ..schemas import ConvertRequest, PasswordCheckRequest, ValueRequest, as_text

router = APIRouter(tags=["validation"])


@router.get("/validate")
async def list_fields():
    """Names accepted by ``POST /validate/{field}``."""
    return {"fields": sorted(FIELD_VALIDATORS)}


@router.post("/validate/{field}")
async def validate_value(field: str, body: ValueRequest):
    """Validate one value. Rejections are returned as 422."""
    if field not in FIELD_VALIDATORS:
        raise HTTPException(status_code=404, detail=f"Unknown field: {field}")
    parsed = validate_field(field, as_text(body.value))
    if hasattr(parsed, "isoformat"):
        parsed = parsed.isoformat()
    return {"field": field, "value": parsed}


@router.post("/convert")
async def convert_value(body: ConvertRequest):
    try:
        result = convert(MeasurementValue(body.magnitude, parse_unit(body.unit)), parse_unit(body.to))
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e)) from None
    return {**result.to_dict(), "display": format_measurement(result)}


@router.post("/password/check")
async def check_password(body: PasswordCheckRequest):
    check = validate_password(body.password, body.email)
    return {
        **check.to_dict(),
        "checklist": [{"label": label, "met": met} for label, met in check.checklist()],
    }
