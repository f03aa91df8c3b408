"""Error taxonomy for form validation and backend calls."""


class ValidationError(Exception):
    """A locally detected input problem. Raised before any backend call."""

    def __init__(self, field: str, message: str):
        super().__init__(message)
        self.field = field
        self.message = message

    def to_dict(self) -> dict:
        return {"field": self.field, "error": self.message, "type": type(self).__name__}


class FormatError(ValidationError):
    """Text that cannot be parsed into the expected shape."""


class RequiredFieldError(ValidationError):
    """A required field was left empty."""


class RangeError(ValidationError):
    """A parsed value outside its inclusive bounds."""

    def __init__(self, field: str, message: str, min_value: float, max_value: float):
        super().__init__(field, message)
        self.min = min_value
        self.max = max_value


class LengthError(ValidationError):
    """Text longer than its limit."""

    def __init__(self, field: str, message: str, max_length: int):
        super().__init__(field, message)
        self.max_length = max_length


class PasswordPolicyError(ValidationError):
    """One or more password rules are unmet."""

    def __init__(self, failed_rules: list, message: str = "Password does not meet all requirements"):
        super().__init__("password", message)
        self.failed_rules = list(failed_rules)


class ConfirmationMismatchError(ValidationError):
    """Password and confirmation differ."""

    def __init__(self, message: str = "Passwords do not match"):
        super().__init__("confirm_password", message)


class BackendError(Exception):
    """Opaque failure reported by the backend collaborator.

    The message is surfaced to the user verbatim.
    """

    def __init__(self, message: str, status: int | None = None):
        super().__init__(message)
        self.message = message
        self.status = status
