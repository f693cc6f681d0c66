"""
AnchorOutcome value object - Result of one optional anchoring step.

Every optional backend step (content upload, metadata upload, chain
mint, chain transfer) yields either Anchored(value) or Skipped(reason).
Callers and tests branch on the tag instead of on None checks.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional, Union


class SkipReason(str, Enum):
    """Why an optional anchoring step produced no value."""

    NOT_CONFIGURED = "not_configured"
    UNAVAILABLE = "unavailable"
    REJECTED = "rejected"
    REVERTED = "reverted"
    TIMEOUT = "timeout"
    UPSTREAM_SKIPPED = "upstream_skipped"
    IDENTITY_UNRESOLVED = "identity_unresolved"
    NO_TOKEN = "no_token"


@dataclass(frozen=True)
class Anchored:
    """Optional step succeeded and produced a value."""

    value: Any

    @property
    def is_anchored(self) -> bool:
        return True

    def value_or_none(self) -> Any:
        return self.value

    def to_dict(self) -> dict:
        """Convert to dictionary representation."""
        return {"status": "anchored", "value": self.value}


@dataclass(frozen=True)
class Skipped:
    """Optional step did not run or failed; the field stays unset."""

    reason: SkipReason
    detail: str = ""

    @property
    def is_anchored(self) -> bool:
        return False

    def value_or_none(self) -> Optional[Any]:
        return None

    def to_dict(self) -> dict:
        """Convert to dictionary representation."""
        return {
            "status": "skipped",
            "reason": self.reason.value,
            "detail": self.detail or None,
        }


AnchorOutcome = Union[Anchored, Skipped]
