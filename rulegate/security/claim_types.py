"""
Well-known claim type names.
"""


class OpenIdClaimTypes:
    """
    Standard OpenID Connect / JWT claim names.

    See OpenID Connect Core 1.0, sections 2 and 5.1.
    """

    # ID token claims
    ACR = "acr"
    ADDRESS = "address"
    AMR = "amr"
    AUDIENCE = "aud"
    AUTH_TIME = "auth_time"
    AZP = "azp"
    EXP = "exp"
    IAT = "iat"
    ISS = "iss"
    NONCE = "nonce"
    OID = "oid"  # Azure AD object id
    SUB = "sub"

    # Standard profile claims
    BIRTHDATE = "birthdate"
    EMAIL = "email"
    EMAIL_VERIFIED = "email_verified"
    FAMILY_NAME = "family_name"
    GENDER = "gender"
    GIVEN_NAME = "given_name"
    LOCALE = "locale"
    MIDDLE_NAME = "middle_name"
    NAME = "name"
    NICKNAME = "nickname"
    PHONE_NUMBER = "phone_number"
    PHONE_NUMBER_VERIFIED = "phone_number_verified"
    PICTURE = "picture"
    PREFERRED_USERNAME = "preferred_username"
    PROFILE = "profile"
    UPDATED_AT = "updated_at"
    WEBSITE = "website"
    ZONEINFO = "zoneinfo"


class MSIdentityClaimTypes:
    """Legacy Microsoft identity claim URIs still emitted by older tokens."""

    OBJECT_ID = "http://schemas.microsoft.com/identity/claims/objectidentifier"
    ROLE = "http://schemas.microsoft.com/ws/2008/06/identity/claims/role"
    SCOPE = "http://schemas.microsoft.com/identity/claims/scope"
    TENANT_ID = "http://schemas.microsoft.com/identity/claims/tenantid"
