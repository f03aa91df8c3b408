"""Password strength rules for account registration."""

import re
from dataclasses import dataclass
from enum import Enum

from .errors import PasswordPolicyError


class PasswordRule(str, Enum):
    """The nine password rules, in display order."""

    MIN_LENGTH = "min_length"
    HAS_LETTER = "has_letter"
    HAS_UPPERCASE = "has_uppercase"
    HAS_LOWERCASE = "has_lowercase"
    HAS_NUMBER = "has_number"
    HAS_SPECIAL = "has_special"
    NO_LEADING_TRAILING_SPACES = "no_leading_trailing_spaces"
    NOT_MATCHES_EMAIL = "not_matches_email"
    NOT_COMMON = "not_common"


RULE_LABELS = {
    PasswordRule.MIN_LENGTH: "Minimum 10 characters",
    PasswordRule.HAS_LETTER: "At least one letter",
    PasswordRule.HAS_UPPERCASE: "At least one uppercase letter",
    PasswordRule.HAS_LOWERCASE: "At least one lowercase letter",
    PasswordRule.HAS_NUMBER: "At least one number",
    PasswordRule.HAS_SPECIAL: "At least one special character",
    PasswordRule.NO_LEADING_TRAILING_SPACES: "No leading or trailing spaces",
    PasswordRule.NOT_MATCHES_EMAIL: "Doesn't match your email",
    PasswordRule.NOT_COMMON: "Not a common password",
}

MIN_PASSWORD_LENGTH = 10
SPECIAL_CHARACTERS = "!@#$%^&*()_+-=[]{};':\"\\|,.<>/?"

COMMON_PASSWORDS = (
    "123456",
    "password",
    "12345678",
    "qwerty",
    "abc123",
    "password123",
    "admin",
    "letmein",
    "welcome",
    "monkey",
    "1234567890",
    "password1",
    "qwerty123",
)

_REPEATED_CHARS = re.compile(r"(.)\1{2,}", re.DOTALL)


@dataclass(frozen=True)
class PasswordCheck:
    """Per-rule results for one password candidate."""

    results: dict[PasswordRule, bool]

    @property
    def is_valid(self) -> bool:
        return all(self.results.values())

    @property
    def failed_rules(self) -> list[PasswordRule]:
        return [rule for rule in PasswordRule if not self.results[rule]]

    def checklist(self) -> list[tuple[str, bool]]:
        """(label, met) pairs in display order."""
        return [(RULE_LABELS[rule], self.results[rule]) for rule in PasswordRule]

    def to_dict(self) -> dict:
        return {
            "valid": self.is_valid,
            "rules": {rule.value: met for rule, met in self.results.items()},
        }


def _email_local_part(email: str | None) -> str:
    if not email:
        return ""
    return email.lower().split("@")[0]


def validate_password(password: str, email: str | None = None) -> PasswordCheck:
    """Evaluate all nine rules. Pure function of its inputs."""
    lowered = password.lower()
    local_part = _email_local_part(email)
    has_repeats = _REPEATED_CHARS.search(password) is not None

    results = {
        PasswordRule.MIN_LENGTH: len(password) >= MIN_PASSWORD_LENGTH,
        PasswordRule.HAS_LETTER: re.search(r"[a-zA-Z]", password) is not None,
        PasswordRule.HAS_UPPERCASE: re.search(r"[A-Z]", password) is not None,
        PasswordRule.HAS_LOWERCASE: re.search(r"[a-z]", password) is not None,
        PasswordRule.HAS_NUMBER: re.search(r"[0-9]", password) is not None,
        PasswordRule.HAS_SPECIAL: any(ch in SPECIAL_CHARACTERS for ch in password),
        PasswordRule.NO_LEADING_TRAILING_SPACES: password == password.strip(),
        PasswordRule.NOT_MATCHES_EMAIL: not local_part or local_part not in lowered,
        PasswordRule.NOT_COMMON: (
            not any(common in lowered for common in COMMON_PASSWORDS) and not has_repeats
        ),
    }
    return PasswordCheck(results=results)


def require_valid_password(password: str, email: str | None = None) -> PasswordCheck:
    """Raise PasswordPolicyError unless every rule holds."""
    check = validate_password(password, email)
    if not check.is_valid:
        raise PasswordPolicyError(check.failed_rules)
    return check
