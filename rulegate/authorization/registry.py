"""
Authorization rule registry.

Maps a request type to the ordered list of rules registered for it.
Rules register themselves against an explicit registry object, either
directly or with decorators, so unrelated modules can add rules without
touching the manager.

Usage:
    registry = RuleRegistry()

    @registry.rule(Withdraw)
    class BalanceRule(AuthorizationRule[Withdraw]):
        ...

    @registry.rule(Withdraw)
    async def fraud_rule(request: Withdraw) -> AuthorizationResult:
        ...

    registry.freeze()  # read-only from here on
    registry.resolve(Withdraw)  # (BalanceRule(), FunctionRule(fraud_rule))
"""

import inspect
import logging
from collections import defaultdict
from typing import Any, Callable, TypeVar

from ..exceptions import RegistryFrozenError
from .interfaces import AuthorizationRule, FunctionRule, RequestT

logger = logging.getLogger(__name__)

RegistrableT = TypeVar("RegistrableT")


class RuleRegistry:
    """
    Type-keyed registry of authorization rules.

    Lookup is nominal and exact: rules registered for a base class are not
    returned for its subclasses. Rules are returned in registration order.
    """

    def __init__(self, name: str = "default"):
        self.name = name
        self._rules: dict[type, list[AuthorizationRule[Any]]] = defaultdict(list)
        self._frozen = False

    # ============================================================
    # REGISTRATION
    # ============================================================

    def register(
        self,
        request_type: type[RequestT],
        rule: AuthorizationRule[RequestT] | Callable[[RequestT], Any],
        *,
        name: str | None = None,
    ) -> AuthorizationRule[RequestT]:
        """
        Register a rule instance (or plain function) for a request type.

        Args:
            request_type: Class of the requests this rule checks
            rule: AuthorizationRule instance, or a callable taking the request
            name: Optional display name for function rules

        Returns:
            The registered rule instance

        Raises:
            RegistryFrozenError: If the registry has been frozen
            TypeError: If request_type is not a class or rule is not usable
        """
        if self._frozen:
            raise RegistryFrozenError(
                f"Cannot register rules into frozen registry '{self.name}'",
                details={"request_type": getattr(request_type, "__qualname__", repr(request_type))},
            )
        if not isinstance(request_type, type):
            raise TypeError(f"request_type must be a class, got {request_type!r}")

        if not isinstance(rule, AuthorizationRule):
            if isinstance(rule, type) or not callable(rule):
                raise TypeError(
                    f"Expected an AuthorizationRule instance or a function, got {rule!r}"
                )
            rule = FunctionRule(rule, name=name)

        self._rules[request_type].append(rule)
        logger.info(f"Registered authorization rule {rule.name} for {request_type.__qualname__}")
        return rule

    def rule(
        self,
        request_type: type[RequestT],
        **kwargs: Any,
    ) -> Callable[[RegistrableT], RegistrableT]:
        """
        Decorator to register a rule class or function.

        Classes are instantiated with **kwargs; functions are wrapped in a
        FunctionRule. The decorated object is returned unchanged.

        Usage:
            @registry.rule(Withdraw, limit=1000)
            class LimitRule(AuthorizationRule[Withdraw]):
                def __init__(self, limit: int):
                    self.limit = limit
                ...
        """
        def decorator(target: RegistrableT) -> RegistrableT:
            if inspect.isclass(target):
                if not issubclass(target, AuthorizationRule):
                    raise TypeError(f"{target.__qualname__} is not an AuthorizationRule")
                self.register(request_type, target(**kwargs))
            else:
                if kwargs:
                    raise TypeError("Keyword arguments are only supported for rule classes")
                self.register(request_type, target)  # type: ignore[arg-type]
            return target
        return decorator

    def freeze(self) -> "RuleRegistry":
        """Make the registry read-only. Returns self for chaining."""
        if not self._frozen:
            self._frozen = True
            logger.info(
                f"Froze rule registry '{self.name}' "
                f"({self.count()} rules, {len(self._rules)} request types)"
            )
        return self

    @property
    def frozen(self) -> bool:
        return self._frozen

    # ============================================================
    # LOOKUP
    # ============================================================

    def resolve(self, request_type: type[RequestT]) -> tuple[AuthorizationRule[RequestT], ...]:
        """Get the rules registered for exactly this request type."""
        rules = self._rules.get(request_type)
        return tuple(rules) if rules else ()

    # ============================================================
    # INTROSPECTION
    # ============================================================

    def has_rules(self, request_type: type) -> bool:
        """Check if any rule is registered for a request type."""
        return bool(self._rules.get(request_type))

    def list_request_types(self) -> list[type]:
        """List request types that have at least one rule."""
        return [request_type for request_type, rules in self._rules.items() if rules]

    def count(self, request_type: type | None = None) -> int:
        """Count rules, optionally for a single request type."""
        if request_type is not None:
            return len(self._rules.get(request_type, ()))
        return sum(len(rules) for rules in self._rules.values())

    def __repr__(self) -> str:
        state = "frozen" if self._frozen else "open"
        return f"<RuleRegistry {self.name!r} rules={self.count()} {state}>"
