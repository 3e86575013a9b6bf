"""
Aggregated authorization outcomes.

One outcome is produced per authorize() call:

    Allowed()                                  - no rule failed
    Denied("insufficient funds")               - exactly one rule failed
    DeniedMultiple(("insufficient funds",
                    "flagged account"))        - two or more rules failed

Branch on the type (or on `kind`):

    match await manager.authorize(request):
        case Allowed():
            ...
        case Denied(reason=reason):
            ...
        case DeniedMultiple(reasons=reasons):
            ...
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Sequence

from ..exceptions import AuthorizationDenied, MultipleAuthorizationsDenied


class OutcomeKind(str, Enum):
    """Outcome tags."""
    ALLOWED = "allowed"
    DENIED = "denied"
    DENIED_MULTIPLE = "denied_multiple"


class AuthorizationOutcome(ABC):
    """Base class for the three outcome variants."""

    @property
    @abstractmethod
    def kind(self) -> OutcomeKind:
        """Tag of the variant."""
        pass

    @property
    @abstractmethod
    def reasons(self) -> tuple[str, ...]:
        """Failure reasons in evaluation order; empty when allowed."""
        pass

    @property
    def allowed(self) -> bool:
        return self.kind is OutcomeKind.ALLOWED

    def raise_for_denial(self) -> None:
        """Raise the matching AuthorizationDenied exception unless allowed."""

    @staticmethod
    def from_failures(reasons: Sequence[str]) -> "AuthorizationOutcome":
        """Collapse ordered failure reasons into an outcome."""
        if not reasons:
            return ALLOWED
        if len(reasons) == 1:
            return Denied(reasons[0])
        return DeniedMultiple(reasons)


@dataclass(frozen=True)
class Allowed(AuthorizationOutcome):
    """No rule denied the request."""

    @property
    def kind(self) -> OutcomeKind:
        return OutcomeKind.ALLOWED

    @property
    def reasons(self) -> tuple[str, ...]:
        return ()


@dataclass(frozen=True)
class Denied(AuthorizationOutcome):
    """Exactly one rule denied the request."""
    reason: str

    @property
    def kind(self) -> OutcomeKind:
        return OutcomeKind.DENIED

    @property
    def reasons(self) -> tuple[str, ...]:
        return (self.reason,)

    def raise_for_denial(self) -> None:
        raise AuthorizationDenied(self.reason)


@dataclass(frozen=True, init=False)
class DeniedMultiple(AuthorizationOutcome):
    """Two or more rules denied the request; reasons keep evaluation order."""
    _reasons: tuple[str, ...]

    __match_args__ = ("reasons",)

    def __init__(self, reasons: Sequence[str]):
        reasons = tuple(reasons)
        if len(reasons) < 2:
            raise ValueError("DeniedMultiple needs at least two reasons")
        object.__setattr__(self, "_reasons", reasons)

    def __repr__(self) -> str:
        return f"DeniedMultiple(reasons={self._reasons!r})"

    @property
    def kind(self) -> OutcomeKind:
        return OutcomeKind.DENIED_MULTIPLE

    @property
    def reasons(self) -> tuple[str, ...]:
        return self._reasons

    def raise_for_denial(self) -> None:
        raise MultipleAuthorizationsDenied(self._reasons)


ALLOWED = Allowed()
