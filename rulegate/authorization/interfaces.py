"""
Authorization interfaces - Core abstractions.

These define the contracts that rule implementations and the authorization
manager must follow. Application code depends ONLY on these interfaces.

A rule is keyed by the request type it accepts:

    @dataclass(frozen=True)
    class Withdraw:
        account_id: str
        amount: int

    class BalanceRule(AuthorizationRule[Withdraw]):
        async def evaluate(self, request: Withdraw) -> AuthorizationResult:
            if request.amount > await balances.get(request.account_id):
                return AuthorizationResult.failure("insufficient funds")
            return AuthorizationResult.success()
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Generic, TypeVar, Union

from .outcome import AuthorizationOutcome


# ============================================================
# GENERIC TYPE VARIABLES
# ============================================================

RequestT = TypeVar("RequestT")  # Caller-defined request (Withdraw, ViewProfile, ...)


# ============================================================
# AUTHORIZATION RESULT
# ============================================================

@dataclass(frozen=True)
class AuthorizationResult:
    """
    Verdict of a single authorization rule.

    Attributes:
        successful: Whether the rule passed
        message: Human-readable explanation, used as the denial reason
    """
    successful: bool
    message: str | None = None

    @classmethod
    def success(cls, message: str | None = None) -> "AuthorizationResult":
        return cls(successful=True, message=message)

    @classmethod
    def failure(cls, message: str | None = None) -> "AuthorizationResult":
        return cls(successful=False, message=message)


RuleReturn = Union[AuthorizationResult, Awaitable[AuthorizationResult]]


# ============================================================
# AUTHORIZATION RULE
# ============================================================

class AuthorizationRule(ABC, Generic[RequestT]):
    """
    A single authorization check for one request type.

    Rules must not raise for their normal denial path: return
    AuthorizationResult.failure(...) instead. Anything raised from evaluate
    is treated as a malfunction and propagated to the caller of authorize.

    evaluate may be a coroutine (remote policy lookups etc.) or a plain
    method; the manager awaits the result when it is awaitable.
    """

    @property
    def name(self) -> str:
        """Identifier used in logs and default denial reasons."""
        return type(self).__qualname__

    @abstractmethod
    def evaluate(self, request: RequestT) -> RuleReturn:
        """
        Decide whether the request is authorized.

        Args:
            request: The request being checked

        Returns:
            AuthorizationResult, or an awaitable resolving to one
        """
        pass

    def __repr__(self) -> str:
        return f"<{type(self).__name__} name={self.name!r}>"


class FunctionRule(AuthorizationRule[RequestT]):
    """
    Rule backed by a plain function or coroutine function.

    Usage:
        @registry.rule(Withdraw)
        async def fraud_rule(request: Withdraw) -> AuthorizationResult:
            ...
    """

    def __init__(self, func: Callable[[RequestT], RuleReturn], name: str | None = None):
        self.func = func
        self._name = name or getattr(func, "__qualname__", repr(func))

    @property
    def name(self) -> str:
        return self._name

    def evaluate(self, request: RequestT) -> RuleReturn:
        return self.func(request)


# ============================================================
# AUTHORIZATION MANAGER
# ============================================================

class AuthorizationManagerBase(ABC):
    """
    High-level authorization interface.

    This is the main entry point for authorization checks.
    """

    @abstractmethod
    async def authorize(
        self,
        request: Any,
        request_type: type | None = None,
    ) -> AuthorizationOutcome:
        """
        Evaluate every rule registered for the request type.

        Returns an outcome (does not raise for denials).
        """
        pass

    async def authorize_or_raise(
        self,
        request: Any,
        request_type: type | None = None,
    ) -> None:
        """
        Authorize or raise AuthorizationDenied / MultipleAuthorizationsDenied.
        """
        outcome = await self.authorize(request, request_type)
        outcome.raise_for_denial()

    async def can(
        self,
        request: Any,
        request_type: type | None = None,
    ) -> bool:
        """
        Check if the request is allowed (returns bool, no exception).

        Usage:
            if await manager.can(Withdraw(account_id, 500)):
                # show withdraw button
        """
        outcome = await self.authorize(request, request_type)
        return outcome.allowed
