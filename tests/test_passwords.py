"""
Tests for password generation.
"""

import random
import string

import pytest

from rulegate.config import PasswordSettings
from rulegate.exceptions import PasswordPolicyError
from rulegate.security import generate_password
from rulegate.security.passwords import SPECIAL_CHARACTERS


def character_class(char: str) -> str:
    if char in string.ascii_uppercase:
        return "upper"
    if char in string.ascii_lowercase:
        return "lower"
    if char in string.digits:
        return "digit"
    if char in SPECIAL_CHARACTERS:
        return "special"
    raise AssertionError(f"unexpected character {char!r}")


def longest_class_run(password: str) -> int:
    longest = run = 1
    for previous, current in zip(password, password[1:]):
        run = run + 1 if character_class(previous) == character_class(current) else 1
        longest = max(longest, run)
    return longest


def test_default_length():
    assert len(generate_password()) == 12


@pytest.mark.parametrize("length", [6, 20, 99])
def test_requested_length(length):
    assert len(generate_password(length)) == length


@pytest.mark.parametrize("length", [5, 100, 0])
def test_length_out_of_bounds(length):
    with pytest.raises(PasswordPolicyError):
        generate_password(length)


def test_requires_a_character_class():
    with pytest.raises(ValueError):
        generate_password(upper=False, lower=False, digits=False, special=False)


def test_no_more_than_two_consecutive_from_same_class():
    """Test class runs are capped at two characters."""
    rng = random.Random(1234)
    for _ in range(200):
        password = generate_password(40, rng=rng)
        assert longest_class_run(password) <= 2


def test_single_class():
    """Test a single enabled class fills the whole password."""
    password = generate_password(30, upper=False, lower=False, special=False, rng=random.Random(7))

    assert len(password) == 30
    assert password.isdigit()


def test_only_enabled_classes_used():
    rng = random.Random(99)
    password = generate_password(60, digits=False, special=False, rng=rng)

    assert {character_class(c) for c in password} <= {"upper", "lower"}


def test_seeded_rng_is_deterministic():
    assert generate_password(rng=random.Random(5)) == generate_password(rng=random.Random(5))


def test_custom_settings():
    settings = PasswordSettings(default_length=8, min_length=4, max_length=10)

    assert len(generate_password(settings=settings)) == 8
    assert len(generate_password(4, settings=settings)) == 4
    with pytest.raises(PasswordPolicyError):
        generate_password(11, settings=settings)
