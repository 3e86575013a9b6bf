"""
Security helpers used alongside authorization rules.

- claims: Claim / ClaimsIdentity / ClaimsPrincipal and lookup helpers
- claim_types: OpenID Connect and legacy Microsoft claim names
- principal: PrincipalFactory contract
- passwords: random password generation
"""

from .claims import (
    Claim,
    ClaimsIdentity,
    ClaimsPrincipal,
    get_claim_by_type,
    get_claim_value_by_type,
    get_claims_by_type,
    get_claim_values_by_type,
    as_claims_principal,
    as_claims_identity,
)
from .claim_types import OpenIdClaimTypes, MSIdentityClaimTypes
from .principal import PrincipalFactory, StaticPrincipalFactory
from .passwords import generate_password

__all__ = [
    "Claim",
    "ClaimsIdentity",
    "ClaimsPrincipal",
    "get_claim_by_type",
    "get_claim_value_by_type",
    "get_claims_by_type",
    "get_claim_values_by_type",
    "as_claims_principal",
    "as_claims_identity",
    "OpenIdClaimTypes",
    "MSIdentityClaimTypes",
    "PrincipalFactory",
    "StaticPrincipalFactory",
    "generate_password",
]
