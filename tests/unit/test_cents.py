"""Tests for cents display formatting."""

import pytest

from src.sg_common.cents import cents_to_display


@pytest.mark.parametrize(
    ("cents", "expected"),
    [
        (0, "$0.00"),
        (5, "$0.05"),
        (6500, "$65.00"),
        (123456789, "$1,234,567.89"),
        (-1200, "-$12.00"),
    ],
)
def test_cents_to_display(cents: int, expected: str) -> None:
    assert cents_to_display(cents) == expected
