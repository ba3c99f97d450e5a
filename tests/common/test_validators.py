from __future__ import annotations

import pytest

from src.member_portal.member_portal.common.validators import require_rating
from src.member_portal.member_portal.core.exceptions import ValidationError


@pytest.mark.parametrize("raw,expected", [("1", 1), (" 5 ", 5), (3, 3)])
def test_require_rating_accepts_whole_numbers(raw, expected):
    assert require_rating(raw) == expected


@pytest.mark.parametrize("raw", ["²", "٣", "３", "⑤"])
def test_require_rating_rejects_non_ascii_digits(raw):
    with pytest.raises(ValidationError, match="Please provide a rating"):
        require_rating(raw)


@pytest.mark.parametrize("raw", ["0", "6", 0, 6])
def test_require_rating_out_of_range(raw):
    with pytest.raises(ValidationError, match="1 to 5"):
        require_rating(raw)
