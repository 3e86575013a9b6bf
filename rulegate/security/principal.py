"""
Principal factory contract.

Implementations build the principal for the current caller (from a token,
a session, a test fixture, ...). Rules and request builders depend only on
the factory.
"""

from abc import ABC, abstractmethod
from typing import Generic, TypeVar

from .claims import ClaimsPrincipal

PrincipalT = TypeVar("PrincipalT", bound=ClaimsPrincipal)


class PrincipalFactory(ABC, Generic[PrincipalT]):
    """Creates principals."""

    @abstractmethod
    def create_principal(self) -> PrincipalT:
        pass


class StaticPrincipalFactory(PrincipalFactory[PrincipalT]):
    """Always returns the same principal. Handy for jobs and tests."""

    def __init__(self, principal: PrincipalT):
        self.principal = principal

    def create_principal(self) -> PrincipalT:
        return self.principal
