"""Tests for unique business code generation."""

import re
from datetime import datetime

import pytest

from src.services.code_generator import generate_unique_code, random_token
from src.services.exceptions import CodeGenerationError, SystemicError

FIXED_TIME = datetime(2024, 3, 1, 12, 0, 0)
BASE_CODE = "PROJ_20240301120000_ABCD1234"


def _generate(known):
    return generate_unique_code(
        "PROJ", known, clock=lambda: FIXED_TIME, token_factory=lambda: "ABCD1234"
    )


def test_code_format():
    code = generate_unique_code("PROJ", set())
    assert re.fullmatch(r"PROJ_\d{14}_[0-9A-F]{8}", code)


def test_first_free_candidate_is_unsuffixed():
    assert _generate(set()) == BASE_CODE


def test_collision_appends_attempt_number():
    assert _generate({BASE_CODE}) == f"{BASE_CODE}_1"


def test_issued_code_is_recorded():
    known = set()
    first = _generate(known)
    second = _generate(known)

    assert first in known
    assert second == f"{BASE_CODE}_1"


def test_ninety_nine_collisions_still_succeed():
    known = {BASE_CODE} | {f"{BASE_CODE}_{n}" for n in range(1, 99)}

    assert _generate(known) == f"{BASE_CODE}_99"


def test_hundred_collisions_raise():
    known = {BASE_CODE} | {f"{BASE_CODE}_{n}" for n in range(1, 100)}

    with pytest.raises(CodeGenerationError) as exc_info:
        _generate(known)

    assert isinstance(exc_info.value, SystemicError)
    assert exc_info.value.attempts == 100
    assert "Unable to generate unique PROJ code after 100 attempts" in str(exc_info.value)


def test_random_token_shape():
    token = random_token()
    assert len(token) == 8
    assert token == token.upper()
