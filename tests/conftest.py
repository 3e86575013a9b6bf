"""
Pytest fixtures for testing.

Provides:
- Registry and manager fixtures
- A sample Withdraw request

Request types and rules live in rules.py.
"""

import pytest

from rulegate.authorization import AuthorizationManager, RuleRegistry

from rules import Withdraw


# ============ Fixtures ============


@pytest.fixture
def registry() -> RuleRegistry:
    return RuleRegistry("test")


@pytest.fixture
def manager(registry: RuleRegistry) -> AuthorizationManager:
    return AuthorizationManager(registry)


@pytest.fixture
def concurrent_manager(registry: RuleRegistry) -> AuthorizationManager:
    return AuthorizationManager(registry, evaluation_mode="concurrent")


@pytest.fixture
def withdraw() -> Withdraw:
    return Withdraw(account_id="acc-1", amount=500)
