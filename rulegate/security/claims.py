"""
Minimal claims model and lookup helpers.

Rules often need to pull values out of the caller's identity. This module
provides a small claims-based identity model and helpers over any iterable
of claims.

Usage:
    identity = ClaimsIdentity(authentication_type="Bearer")
    identity.add_claim(OpenIdClaimTypes.SUB, str(user_id))
    identity.add_unique_claim(MSIdentityClaimTypes.ROLE, "admin")

    principal = ClaimsPrincipal([identity])
    principal.get_claim_value_as_uuid(OpenIdClaimTypes.SUB)
"""

from dataclasses import dataclass, field
from typing import Iterable, TypeVar
from uuid import UUID

from ..exceptions import ClaimNotFoundError


@dataclass(frozen=True)
class Claim:
    """A single statement about a subject."""
    type: str
    value: str
    issuer: str | None = None


def _require_text(value: str, name: str) -> None:
    if value is None or not str(value).strip():
        raise ValueError(f"{name} cannot be empty")


# ============================================================
# HELPERS OVER CLAIM COLLECTIONS
# ============================================================

def get_claim_by_type(claims: Iterable[Claim], *claim_types: str) -> Claim | None:
    """
    Get the first claim whose type is one of claim_types.

    Type matching is exact. Returns None when nothing matches or when no
    claim types are given.
    """
    if claims is None:
        raise ValueError("claims cannot be None")
    if not claim_types:
        return None

    return next((claim for claim in claims if claim.type in claim_types), None)


def get_claim_value_by_type(claims: Iterable[Claim], *claim_types: str) -> str | None:
    """Value of the first matching claim, stripped of surrounding whitespace."""
    claim = get_claim_by_type(claims, *claim_types)
    return claim.value.strip() if claim is not None else None


def get_claims_by_type(claims: Iterable[Claim], *claim_types: str) -> list[Claim] | None:
    """All claims whose type is one of claim_types (None when none are given)."""
    if claims is None:
        raise ValueError("claims cannot be None")
    if not claim_types:
        return None

    return [claim for claim in claims if claim.type in claim_types]


def get_claim_values_by_type(claims: Iterable[Claim], *claim_types: str) -> list[str] | None:
    matching = get_claims_by_type(claims, *claim_types)
    if matching is None:
        return None
    return [claim.value for claim in matching]


# ============================================================
# IDENTITY / PRINCIPAL
# ============================================================

@dataclass
class ClaimsIdentity:
    """A set of claims issued together (one token, one login, ...)."""
    claims: list[Claim] = field(default_factory=list)
    authentication_type: str | None = None

    @property
    def is_authenticated(self) -> bool:
        return bool(self.authentication_type)

    def add_claim(self, claim_type: str, claim_value: str) -> Claim:
        """Add a claim, keeping any existing claims of the same type."""
        _require_text(claim_type, "claim_type")
        _require_text(claim_value, "claim_value")

        claim = Claim(claim_type, claim_value)
        self.claims.append(claim)
        return claim

    def add_unique_claim(self, claim_type: str, claim_value: str) -> Claim:
        """Replace every claim of this type (case-insensitive) with a single new one."""
        _require_text(claim_type, "claim_type")
        _require_text(claim_value, "claim_value")

        wanted = claim_type.casefold()
        self.claims = [claim for claim in self.claims if claim.type.casefold() != wanted]
        return self.add_claim(claim_type, claim_value)

    def remove_claim(self, claim: Claim) -> None:
        self.claims.remove(claim)


class ClaimsPrincipal:
    """
    The subject of a request: one or more identities.

    Lookups by claim type on the principal are case-insensitive.
    """

    def __init__(self, identities: Iterable[ClaimsIdentity] | None = None):
        self.identities: list[ClaimsIdentity] = list(identities or [])

    @property
    def claims(self) -> list[Claim]:
        return [claim for identity in self.identities for claim in identity.claims]

    @property
    def identity(self) -> ClaimsIdentity | None:
        """Primary identity."""
        return self.identities[0] if self.identities else None

    def _matching(self, claim_type: str) -> list[Claim]:
        _require_text(claim_type, "claim_type")
        wanted = claim_type.casefold()
        return [claim for claim in self.claims if claim.type.casefold() == wanted]

    def _first(self, claim_type: str) -> Claim:
        matching = self._matching(claim_type)
        if not matching:
            raise ClaimNotFoundError(claim_type)
        return matching[0]

    def get_claim_value(self, claim_type: str) -> str | None:
        matching = self._matching(claim_type)
        return matching[0].value if matching else None

    def get_claim_value_as_uuid(self, claim_type: str) -> UUID:
        """
        Raises:
            ClaimNotFoundError: No claim of this type
            ValueError: The value is not a UUID
        """
        return UUID(self._first(claim_type).value)

    def get_claim_value_as_bool(self, claim_type: str) -> bool:
        """
        Parse a "true"/"false" claim (case-insensitive, surrounding spaces ignored).

        Raises:
            ClaimNotFoundError: No claim of this type
            ValueError: The value is neither true nor false
        """
        value = self._first(claim_type).value.strip().lower()
        if value == "true":
            return True
        if value == "false":
            return False
        raise ValueError(f"Claim '{claim_type}' is not a boolean: {value!r}")

    def get_claim_values(self, claim_type: str) -> list[str]:
        return [claim.value for claim in self._matching(claim_type)]

    def get_claim_values_as_uuids(self, claim_type: str) -> list[UUID]:
        return [UUID(claim.value) for claim in self._matching(claim_type)]

    def __repr__(self) -> str:
        return f"<ClaimsPrincipal identities={len(self.identities)} claims={len(self.claims)}>"


# ============================================================
# CHECKED CASTS
# ============================================================

PrincipalT = TypeVar("PrincipalT", bound=ClaimsPrincipal)
IdentityT = TypeVar("IdentityT", bound=ClaimsIdentity)


def as_claims_principal(principal: object, cls: type[PrincipalT] = ClaimsPrincipal) -> PrincipalT:  # type: ignore[assignment]
    """Return principal typed as cls, or raise TypeError."""
    if principal is None:
        raise ValueError("principal cannot be None")
    if not isinstance(principal, cls):
        raise TypeError(f"Could not cast the provided principal to {cls.__qualname__}.")
    return principal


def as_claims_identity(identity: object, cls: type[IdentityT] = ClaimsIdentity) -> IdentityT:  # type: ignore[assignment]
    """Return identity typed as cls, or raise TypeError."""
    if identity is None:
        raise ValueError("identity cannot be None")
    if not isinstance(identity, cls):
        raise TypeError(f"Could not cast the provided identity to {cls.__qualname__}.")
    return identity
