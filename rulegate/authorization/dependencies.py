"""
FastAPI integration for authorization.

Composition happens once, at startup:

    registry = RuleRegistry()
    registry.register(Withdraw, BalanceRule())

    app = FastAPI()
    add_authorization_security(app, registry)

Route handlers then depend on the manager:

    @app.post("/accounts/{account_id}/withdraw")
    async def withdraw(account_id: str, amount: int, authz: AuthorizationManagerDep):
        await authz.authorize_or_raise(Withdraw(account_id=account_id, amount=amount))
        ...

Denials raised through authorize_or_raise become 403 responses listing every
reason; invalid requests become 400 responses.
"""

from typing import Annotated

import structlog
from fastapi import Depends, FastAPI, Request, status
from fastapi.responses import JSONResponse

from ..config import Settings, get_settings
from ..exceptions import AuthorizationDenied, InvalidAuthorizationRequest
from .manager import AuthorizationManager
from .registry import RuleRegistry

logger = structlog.get_logger(__name__)

STATE_ATTRIBUTE = "authorization_manager"


# ============================================================
# COMPOSITION
# ============================================================

def add_authorization_security(
    app: FastAPI,
    registry: RuleRegistry,
    settings: Settings | None = None,
) -> AuthorizationManager:
    """
    Install an AuthorizationManager on a FastAPI application.

    Freezes the registry, builds the manager from settings, stores it on
    app.state and registers the denial exception handlers.

    Returns:
        The installed manager
    """
    settings = settings or get_settings()
    manager = AuthorizationManager.from_settings(registry.freeze(), settings.authorization)
    setattr(app.state, STATE_ATTRIBUTE, manager)

    app.add_exception_handler(AuthorizationDenied, authorization_denied_handler)
    app.add_exception_handler(InvalidAuthorizationRequest, invalid_request_handler)

    logger.info(
        "authorization_security_added",
        registry=registry.name,
        evaluation_mode=manager.evaluation_mode,
    )
    return manager


# ============================================================
# EXCEPTION HANDLERS
# ============================================================

async def authorization_denied_handler(request: Request, exc: AuthorizationDenied) -> JSONResponse:
    """Map AuthorizationDenied (and MultipleAuthorizationsDenied) to 403."""
    return JSONResponse(
        status_code=status.HTTP_403_FORBIDDEN,
        content=exc.to_response().model_dump(),
    )


async def invalid_request_handler(request: Request, exc: InvalidAuthorizationRequest) -> JSONResponse:
    """Map InvalidAuthorizationRequest to 400."""
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=exc.to_response().model_dump(),
    )


# ============================================================
# DEPENDENCIES
# ============================================================

def get_authorization_manager(request: Request) -> AuthorizationManager:
    """
    Get the manager installed by add_authorization_security.

    Raises:
        RuntimeError: If add_authorization_security was never called
    """
    manager = getattr(request.app.state, STATE_ATTRIBUTE, None)
    if manager is None:
        raise RuntimeError(
            "No authorization manager installed. Call add_authorization_security(app, registry) at startup."
        )
    return manager


# Authorization manager
AuthorizationManagerDep = Annotated[AuthorizationManager, Depends(get_authorization_manager)]
