"""
Tests for the FastAPI integration.
"""

from typing import AsyncGenerator

import pytest
import pytest_asyncio
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from rulegate.authorization import (
    AuthorizationManager,
    AuthorizationManagerDep,
    RuleRegistry,
    add_authorization_security,
)
from rulegate.config import AuthorizationSettings, Settings

from rules import BalanceRule, FraudRule, Withdraw


def build_app(registry: RuleRegistry, settings: Settings | None = None) -> FastAPI:
    app = FastAPI()
    add_authorization_security(app, registry, settings or Settings(environment="testing"))

    @app.post("/accounts/{account_id}/withdraw")
    async def withdraw(account_id: str, amount: int, authz: AuthorizationManagerDep):
        await authz.authorize_or_raise(Withdraw(account_id=account_id, amount=amount))
        return {"status": "ok"}

    @app.get("/accounts/{account_id}/can-withdraw")
    async def can_withdraw(account_id: str, amount: int, authz: AuthorizationManagerDep):
        outcome = await authz.authorize(Withdraw(account_id=account_id, amount=amount))
        return {"allowed": outcome.allowed, "reasons": list(outcome.reasons)}

    @app.get("/broken")
    async def broken(authz: AuthorizationManagerDep):
        await authz.authorize(None)

    return app


@pytest.fixture
def bank_registry() -> RuleRegistry:
    registry = RuleRegistry("bank")
    registry.register(Withdraw, BalanceRule(balance=1000))
    registry.register(Withdraw, FraudRule(flagged={"acc-flagged"}))
    return registry


@pytest_asyncio.fixture
async def client(bank_registry: RuleRegistry) -> AsyncGenerator[AsyncClient, None]:
    app = build_app(bank_registry)
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as client:
        yield client


@pytest.mark.asyncio
async def test_allowed_request(client: AsyncClient):
    """Test allowed withdrawals pass through."""
    response = await client.post("/accounts/acc-1/withdraw", params={"amount": 500})

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


@pytest.mark.asyncio
async def test_single_denial_is_forbidden(client: AsyncClient):
    """Test a single denial maps to 403 with its reason."""
    response = await client.post("/accounts/acc-1/withdraw", params={"amount": 5000})

    assert response.status_code == 403
    data = response.json()
    assert data["code"] == "AUTHORIZATION_DENIED"
    assert data["message"] == "insufficient funds"
    assert data["details"]["reasons"] == ["insufficient funds"]


@pytest.mark.asyncio
async def test_multiple_denials_list_every_reason(client: AsyncClient):
    """Test aggregate denial maps to 403 listing all reasons in order."""
    response = await client.post("/accounts/acc-flagged/withdraw", params={"amount": 5000})

    assert response.status_code == 403
    data = response.json()
    assert data["code"] == "MULTIPLE_AUTHORIZATIONS_DENIED"
    assert data["details"]["reasons"] == ["insufficient funds", "flagged account"]


@pytest.mark.asyncio
async def test_outcome_without_exception(client: AsyncClient):
    """Test handlers can inspect the outcome directly."""
    response = await client.get("/accounts/acc-flagged/can-withdraw", params={"amount": 10})

    assert response.status_code == 200
    assert response.json() == {"allowed": False, "reasons": ["flagged account"]}


@pytest.mark.asyncio
async def test_invalid_request_is_bad_request(client: AsyncClient):
    """Test InvalidAuthorizationRequest maps to 400."""
    response = await client.get("/broken")

    assert response.status_code == 400
    assert response.json()["code"] == "INVALID_AUTHORIZATION_REQUEST"


def test_add_authorization_security_freezes_registry(bank_registry: RuleRegistry):
    """Test composition freezes the registry and applies settings."""
    settings = Settings(
        environment="testing",
        authorization=AuthorizationSettings(evaluation_mode="concurrent"),
    )
    app = FastAPI()

    manager = add_authorization_security(app, bank_registry, settings)

    assert bank_registry.frozen is True
    assert isinstance(manager, AuthorizationManager)
    assert manager.evaluation_mode == "concurrent"
    assert app.state.authorization_manager is manager


@pytest.mark.asyncio
async def test_missing_manager_raises():
    """Test using the dependency without composition is a programming error."""
    app = FastAPI()

    @app.get("/")
    async def handler(authz: AuthorizationManagerDep):
        return {}

    async with AsyncClient(
        transport=ASGITransport(app=app, raise_app_exceptions=True),
        base_url="http://test",
    ) as client:
        with pytest.raises(RuntimeError):
            await client.get("/")
