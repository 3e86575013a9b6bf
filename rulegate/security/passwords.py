"""
Random password generation.

Usage:
    generate_password()                       # 12 chars, all classes
    generate_password(20, special=False)
    generate_password(rng=random.Random(42))  # deterministic, for tests
"""

import random
import secrets
import string

import structlog

from ..config import PasswordSettings
from ..exceptions import PasswordPolicyError

logger = structlog.get_logger(__name__)

UPPERCASE = string.ascii_uppercase
LOWERCASE = string.ascii_lowercase
DIGITS = string.digits
SPECIAL_CHARACTERS = "!@#$%^&*"

# Longest run of characters drawn from the same class
MAX_CLASS_RUN = 2


def generate_password(
    length: int | None = None,
    *,
    upper: bool = True,
    lower: bool = True,
    digits: bool = True,
    special: bool = True,
    rng: random.Random | None = None,
    settings: PasswordSettings | None = None,
) -> str:
    """
    Generate a random password.

    When more than one character class is enabled, no more than two
    consecutive characters come from the same class.

    Args:
        length: Password length (defaults to settings.default_length)
        upper: Include A-Z
        lower: Include a-z
        digits: Include 0-9
        special: Include !@#$%^&*
        rng: Random source (defaults to secrets.SystemRandom)
        settings: Length bounds (defaults to PasswordSettings())

    Raises:
        PasswordPolicyError: length out of bounds or no class enabled
    """
    settings = settings or PasswordSettings()
    if length is None:
        length = settings.default_length

    if not settings.min_length <= length <= settings.max_length:
        raise PasswordPolicyError(
            f"Password length must be between {settings.min_length} and {settings.max_length}.",
            details={"length": length},
        )

    classes = [
        alphabet
        for alphabet, enabled in (
            (UPPERCASE, upper),
            (LOWERCASE, lower),
            (DIGITS, digits),
            (SPECIAL_CHARACTERS, special),
        )
        if enabled
    ]
    if not classes:
        raise PasswordPolicyError("At least one character class needs to be included for password generation.")

    rng = rng or secrets.SystemRandom()
    characters = []
    previous: str | None = None
    run = 0

    for _ in range(length):
        candidates = classes
        if run >= MAX_CLASS_RUN and len(classes) > 1:
            candidates = [alphabet for alphabet in classes if alphabet is not previous]

        current = rng.choice(candidates)
        characters.append(rng.choice(current))

        run = run + 1 if current is previous else 1
        previous = current

    logger.debug("password_generated", length=length, classes=len(classes))
    return "".join(characters)
