"""
Authorization module - Type-keyed rule aggregation.

Rules are registered per request type. Authorizing a request runs every rule
registered for its type and aggregates the verdicts into one outcome.

Usage Levels:
=============

Level 1: Define a request and a rule
------------------------------------
    from rulegate.authorization import AuthorizationRule, AuthorizationResult

    @dataclass(frozen=True)
    class Withdraw:
        account_id: str
        amount: int

    class BalanceRule(AuthorizationRule[Withdraw]):
        async def evaluate(self, request: Withdraw) -> AuthorizationResult:
            ...

Level 2: Register and authorize
-------------------------------
    registry = RuleRegistry()
    registry.register(Withdraw, BalanceRule())

    manager = AuthorizationManager(registry.freeze())
    outcome = await manager.authorize(Withdraw("acc-1", 500))

Level 3: Branch on the outcome
------------------------------
    match outcome:
        case Allowed():
            ...
        case Denied(reason=reason):
            ...
        case DeniedMultiple(reasons=reasons):
            ...

Level 4: Exception channel / FastAPI
------------------------------------
    await manager.authorize_or_raise(request)  # AuthorizationDenied on denial

    add_authorization_security(app, registry)

    async def handler(authz: AuthorizationManagerDep):
        await authz.authorize_or_raise(request)

Configuration:
==============

Environment variables:
- AUTHZ_EVALUATION_MODE: "sequential" (default), "concurrent"
- AUTHZ_DEFAULT_DENIAL_MESSAGE: reason for failures without a message

Extensibility:
=============

Add rules from any module:
    @registry.rule(Withdraw)
    async def fraud_rule(request: Withdraw) -> AuthorizationResult:
        ...
"""

# Core interfaces (for type hints and custom implementations)
from .interfaces import (
    AuthorizationRule,
    AuthorizationResult,
    AuthorizationManagerBase,
    FunctionRule,
)

# Outcomes
from .outcome import (
    AuthorizationOutcome,
    OutcomeKind,
    Allowed,
    Denied,
    DeniedMultiple,
    ALLOWED,
)

# Registry
from .registry import RuleRegistry

# Manager (main facade)
from .manager import AuthorizationManager

# FastAPI integration
from .dependencies import (
    AuthorizationManagerDep,
    add_authorization_security,
    get_authorization_manager,
)

__all__ = [
    # Interfaces
    "AuthorizationRule",
    "AuthorizationResult",
    "AuthorizationManagerBase",
    "FunctionRule",
    # Outcomes
    "AuthorizationOutcome",
    "OutcomeKind",
    "Allowed",
    "Denied",
    "DeniedMultiple",
    "ALLOWED",
    # Registry
    "RuleRegistry",
    # Manager
    "AuthorizationManager",
    # FastAPI
    "AuthorizationManagerDep",
    "add_authorization_security",
    "get_authorization_manager",
]
