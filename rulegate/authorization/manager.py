"""
Authorization manager - Main facade for rule-based authorization.

Resolves every rule registered for the request's type, evaluates all of
them, and collapses the verdicts into an outcome.

Usage:
    manager = AuthorizationManager(registry.freeze())

    outcome = await manager.authorize(Withdraw(account_id="acc-1", amount=500))
    if not outcome.allowed:
        print(outcome.reasons)

    # Exception channel
    await manager.authorize_or_raise(request)
"""

import asyncio
import inspect
from typing import Any, Literal, Sequence

import structlog

from ..config import AuthorizationSettings, check_denial_template
from ..exceptions import InvalidAuthorizationRequest, InvalidRuleResultError
from .interfaces import AuthorizationManagerBase, AuthorizationResult, AuthorizationRule
from .outcome import AuthorizationOutcome
from .registry import RuleRegistry

logger = structlog.get_logger(__name__)

EvaluationMode = Literal["sequential", "concurrent"]


class AuthorizationManager(AuthorizationManagerBase):
    """
    Default authorization manager.

    Every rule always runs; there is no short-circuit on the first failure.
    Failure reasons are reported in registry order in both evaluation modes.
    Exceptions raised by a rule are propagated unmodified and abort the call.

    Args:
        registry: Registry to resolve rules from
        evaluation_mode: "sequential" awaits rules one by one,
            "concurrent" gathers them
        default_denial_message: Reason used when a failing rule has no
            message; "{rule}" is replaced with the rule name
    """

    def __init__(
        self,
        registry: RuleRegistry,
        *,
        evaluation_mode: EvaluationMode = "sequential",
        default_denial_message: str = "Authorization rule '{rule}' failed.",
    ):
        if evaluation_mode not in ("sequential", "concurrent"):
            raise ValueError(f"Unknown evaluation mode: '{evaluation_mode}'")
        check_denial_template(default_denial_message)
        self.registry = registry
        self.evaluation_mode = evaluation_mode
        self.default_denial_message = default_denial_message

    @classmethod
    def from_settings(
        cls,
        registry: RuleRegistry,
        settings: AuthorizationSettings,
    ) -> "AuthorizationManager":
        """Build a manager from AuthorizationSettings."""
        return cls(
            registry,
            evaluation_mode=settings.evaluation_mode,
            default_denial_message=settings.default_denial_message,
        )

    async def authorize(
        self,
        request: Any,
        request_type: type | None = None,
    ) -> AuthorizationOutcome:
        """
        Evaluate all rules registered for the request type.

        Args:
            request: The request to check. Must not be None.
            request_type: Type to resolve rules for (defaults to type(request))

        Returns:
            Allowed, Denied or DeniedMultiple

        Raises:
            InvalidAuthorizationRequest: request is None or not a request_type
            InvalidRuleResultError: a rule returned a non-AuthorizationResult
            Exception: anything raised by a rule, unmodified
        """
        if request is None:
            raise InvalidAuthorizationRequest("An authorization request is required.")

        if request_type is None:
            request_type = type(request)
        elif not isinstance(request, request_type):
            raise InvalidAuthorizationRequest(
                f"Request of type {type(request).__qualname__} is not a {request_type.__qualname__}.",
                details={"request_type": request_type.__qualname__},
            )

        rules = self.registry.resolve(request_type)
        log = logger.bind(request_type=request_type.__qualname__, rules=len(rules))

        if not rules:
            log.debug("authorization_no_rules")
            return AuthorizationOutcome.from_failures(())

        if self.evaluation_mode == "concurrent":
            results = await self._evaluate_concurrently(rules, request)
        else:
            results = await self._evaluate_sequentially(rules, request)

        failures = [
            self._denial_reason(rule, result)
            for rule, result in zip(rules, results)
            if not result.successful
        ]
        outcome = AuthorizationOutcome.from_failures(failures)

        log.debug("authorization_evaluated", failures=len(failures), outcome=outcome.kind.value)
        return outcome

    # ============================================================
    # EVALUATION
    # ============================================================

    async def _evaluate_sequentially(
        self,
        rules: Sequence[AuthorizationRule[Any]],
        request: Any,
    ) -> list[AuthorizationResult]:
        results = []
        for rule in rules:
            results.append(await self._evaluate_rule(rule, request))
        return results

    async def _evaluate_concurrently(
        self,
        rules: Sequence[AuthorizationRule[Any]],
        request: Any,
    ) -> list[AuthorizationResult]:
        tasks = [asyncio.ensure_future(self._evaluate_rule(rule, request)) for rule in rules]
        try:
            # gather keeps input order
            return list(await asyncio.gather(*tasks))
        except BaseException:
            for task in tasks:
                if not task.done():
                    task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)
            raise

    async def _evaluate_rule(
        self,
        rule: AuthorizationRule[Any],
        request: Any,
    ) -> AuthorizationResult:
        result = rule.evaluate(request)
        if inspect.isawaitable(result):
            result = await result

        if not isinstance(result, AuthorizationResult):
            raise InvalidRuleResultError(
                f"Rule '{rule.name}' returned {type(result).__qualname__}, "
                f"expected AuthorizationResult.",
                details={"rule": rule.name},
            )
        return result

    def _denial_reason(self, rule: AuthorizationRule[Any], result: AuthorizationResult) -> str:
        if result.message and result.message.strip():
            return result.message
        return self.default_denial_message.format(rule=rule.name)
