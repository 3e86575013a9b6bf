"""
Error types for rulegate.

A denial is normally a returned value (see authorization.outcome). The
exceptions here cover bad input, broken rule contracts, composition mistakes,
and the optional exception channel used by authorize_or_raise.
"""

from typing import Any
from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    """Standard error response format."""

    code: str
    message: str
    details: dict[str, Any] = Field(default_factory=dict)


class RuleGateError(Exception):
    """Base exception for rulegate."""

    default_code = "RULEGATE_ERROR"

    def __init__(
        self,
        message: str,
        *,
        code: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        self.code = code or self.default_code
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def to_response(self) -> ErrorResponse:
        """Convert to error response."""
        return ErrorResponse(code=self.code, message=self.message, details=self.details)


# ============================================================
# INPUT / CONTRACT ERRORS
# ============================================================

class InvalidAuthorizationRequest(RuleGateError, ValueError):
    """The request passed to authorize was absent or of the wrong type."""

    default_code = "INVALID_AUTHORIZATION_REQUEST"


class InvalidRuleResultError(RuleGateError, TypeError):
    """A rule returned something other than an AuthorizationResult."""

    default_code = "INVALID_RULE_RESULT"


class RegistryFrozenError(RuleGateError):
    """Raised when registering into a registry that has been frozen."""

    default_code = "REGISTRY_FROZEN"


# ============================================================
# DENIAL (EXCEPTION CHANNEL)
# ============================================================

class AuthorizationDenied(RuleGateError):
    """
    A single authorization rule denied the request.

    Attributes:
        reasons: Every denial reason, in rule evaluation order
    """

    default_code = "AUTHORIZATION_DENIED"

    def __init__(self, reason: str, *, details: dict[str, Any] | None = None):
        self.reasons: tuple[str, ...] = (reason,)
        super().__init__(reason, details={"reasons": list(self.reasons), **(details or {})})

    @property
    def reason(self) -> str:
        return self.reasons[0]


class MultipleAuthorizationsDenied(AuthorizationDenied):
    """Two or more authorization rules denied the request."""

    default_code = "MULTIPLE_AUTHORIZATIONS_DENIED"
    summary = "Multiple authorization rules broken. Please see reasons for details."

    def __init__(self, reasons: list[str] | tuple[str, ...]):
        if len(reasons) < 2:
            raise ValueError("MultipleAuthorizationsDenied needs at least two reasons")
        RuleGateError.__init__(self, self.summary, details={"reasons": list(reasons)})
        self.reasons = tuple(reasons)

    def __str__(self) -> str:
        joined = "; ".join(self.reasons)
        return f"{self.summary} ({joined})"


# ============================================================
# COMPANION MODULE ERRORS
# ============================================================

class ClaimNotFoundError(RuleGateError, LookupError):
    """A required claim is missing from a principal."""

    default_code = "CLAIM_NOT_FOUND"

    def __init__(self, claim_type: str):
        self.claim_type = claim_type
        super().__init__(
            f"No claim of type '{claim_type}' was found.",
            details={"claim_type": claim_type},
        )


class PasswordPolicyError(RuleGateError, ValueError):
    """Password generation options are invalid."""

    default_code = "PASSWORD_POLICY_ERROR"
