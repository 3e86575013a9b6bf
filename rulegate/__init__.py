"""
rulegate - pluggable, type-keyed authorization rules.

See rulegate.authorization for the rule/registry/manager API and
rulegate.security for claims and password helpers.
"""

from .authorization import (
    AuthorizationRule,
    AuthorizationResult,
    AuthorizationOutcome,
    Allowed,
    Denied,
    DeniedMultiple,
    RuleRegistry,
    AuthorizationManager,
)
from .exceptions import (
    RuleGateError,
    InvalidAuthorizationRequest,
    AuthorizationDenied,
    MultipleAuthorizationsDenied,
)

__version__ = "0.1.0"

__all__ = [
    "AuthorizationRule",
    "AuthorizationResult",
    "AuthorizationOutcome",
    "Allowed",
    "Denied",
    "DeniedMultiple",
    "RuleRegistry",
    "AuthorizationManager",
    "RuleGateError",
    "InvalidAuthorizationRequest",
    "AuthorizationDenied",
    "MultipleAuthorizationsDenied",
]
