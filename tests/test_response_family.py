"""Tests for response family classification."""

import pytest

from contract_fuzzer.response_family import (
    ResponseFamily,
    family_of,
    is_2xx,
    is_4xx,
    is_5xx,
    is_unimplemented,
    is_valid_code,
    matches_code_or_range,
)


class TestFamilyOf:
    """Test family_of."""

    @pytest.mark.parametrize(
        "code,family",
        [
            (100, ResponseFamily.ONEXX),
            (200, ResponseFamily.TWOXX),
            (302, ResponseFamily.THREEXX),
            (404, ResponseFamily.FOURXX),
            (500, ResponseFamily.FIVEXX),
            (599, ResponseFamily.FIVEXX),
        ],
    )
    def test_leading_digit(self, code, family):
        assert family_of(code) is family

    def test_string_values(self):
        assert family_of(404) == "4xx"
        assert family_of(200) == "2xx"
        assert family_of("422") is ResponseFamily.FOURXX

    @pytest.mark.parametrize("code", [999, 600, 99, 0, -404, "abc", None, "4XX", True])
    def test_out_of_range_falls_back(self, code):
        assert family_of(code) is ResponseFamily.ZEROXX


class TestPredicates:
    """Test family predicates."""

    def test_is_2xx(self):
        assert is_2xx(204)
        assert not is_2xx(404)

    def test_is_4xx(self):
        assert is_4xx(400)
        assert not is_4xx(500)

    def test_is_5xx(self):
        assert is_5xx(503)
        assert not is_5xx(999)

    def test_is_unimplemented(self):
        assert is_unimplemented(501)
        assert not is_unimplemented(500)

    def test_family_matches(self):
        assert ResponseFamily.FOURXX.matches(415)
        assert not ResponseFamily.FOURXX.matches(200)


class TestCodes:
    """Test code and range helpers."""

    def test_as_string(self):
        assert ResponseFamily.FOURXX.as_string() == "4XX"
        assert ResponseFamily.FOURXX.starting_digit == "4"

    def test_is_valid_code(self):
        assert is_valid_code("404")
        assert is_valid_code("4XX")
        assert not is_valid_code("40")
        assert not is_valid_code("X04")
        assert not is_valid_code(None)

    @pytest.mark.parametrize(
        "first,second,expected",
        [
            ("404", "404", True),
            ("4XX", "404", True),
            ("404", "4xx", True),
            ("2XX", "404", False),
            ("400", "404", False),
            ("4XX", "abc", False),
        ],
    )
    def test_matches_code_or_range(self, first, second, expected):
        assert matches_code_or_range(first, second) is expected
