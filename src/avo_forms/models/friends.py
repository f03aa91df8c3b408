"""Friend request display projections.

Outgoing requests only ever show what the requester typed in: a masked email
or the handle they entered. The resolved identity of the target is never
part of the projection.
"""

from dataclasses import dataclass
from enum import Enum

MASKED_EMAIL_FALLBACK = "•••@•••.com"
EMAIL_REQUEST_FALLBACK = "Email request"
MAX_LABEL_CHARS = 24


class RequestedVia(str, Enum):
    EMAIL = "email"
    HANDLE = "handle"
    QR = "qr"
    INVITE = "invite"


def mask_email(email: str | None) -> str:
    """Mask an email as e.g. ``j***@e***.com``."""
    if not email or "@" not in email:
        return MASKED_EMAIL_FALLBACK
    local, domain = email.split("@", 1)
    masked_local = "*" if len(local) <= 1 else local[0] + "***"
    dot = domain.rfind(".")
    name = domain[:dot] if dot >= 0 else domain
    ext = domain[dot:] if dot >= 0 else ""
    masked_domain = "*" if len(name) <= 1 else name[0] + "***"
    return f"{masked_local}@{masked_domain}{ext}"


def trim_label(label: str, max_chars: int = MAX_LABEL_CHARS) -> str:
    text = label.strip()
    if not text:
        return "•••"
    if len(text) <= max_chars:
        return text
    return text[: max(1, max_chars - 1)] + "…"


@dataclass(frozen=True)
class FriendRequestDisplay:
    """What a friend request row is allowed to show."""

    request_id: str
    direction: str  # "incoming" or "outgoing"
    label: str
    initials: str
    created_at: str

    @classmethod
    def from_outgoing(cls, row) -> "FriendRequestDisplay":
        via = row["requested_via"]
        email = row["target_email"]
        handle = row["target_handle"]

        if via == RequestedVia.EMAIL.value:
            label = mask_email(email) if email else EMAIL_REQUEST_FALLBACK
        elif via == RequestedVia.HANDLE.value:
            label = handle or "•••"
        elif email:
            label = mask_email(email)
        elif handle:
            label = handle
        else:
            label = EMAIL_REQUEST_FALLBACK

        return cls(
            request_id=str(row["id"]),
            direction="outgoing",
            label=trim_label(label),
            initials="••",
            created_at=str(row["created_at"]),
        )

    @classmethod
    def from_incoming(cls, row) -> "FriendRequestDisplay":
        first_name = (row["requester_first_name"] or "").strip()
        handle = (row["requester_handle"] or "").strip()
        label = first_name or handle or "•••"
        return cls(
            request_id=str(row["id"]),
            direction="incoming",
            label=trim_label(label),
            initials=_initials(first_name, handle),
            created_at=str(row["created_at"]),
        )

    def to_dict(self) -> dict:
        return {
            "id": self.request_id,
            "direction": self.direction,
            "label": self.label,
            "initials": self.initials,
            "created_at": self.created_at,
        }


def _initials(first_name: str, handle: str) -> str:
    for source in (first_name, handle):
        if source:
            return source[:2].upper()
    return "••"
