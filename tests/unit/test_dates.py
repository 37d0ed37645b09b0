"""Unit tests for TMDb date parsing."""

from datetime import date

from movieapp.utils.dates import parse_release_date


class TestParseReleaseDate:
    def test_parses_iso_date(self) -> None:
        assert parse_release_date("1999-10-15") == date(1999, 10, 15)

    def test_ignores_surrounding_whitespace(self) -> None:
        assert parse_release_date(" 2024-12-25 ") == date(2024, 12, 25)

    def test_parses_datetime_prefix(self) -> None:
        assert parse_release_date("2024-12-25T00:00:00.000Z") == date(2024, 12, 25)

    def test_returns_none_for_none(self) -> None:
        assert parse_release_date(None) is None

    def test_returns_none_for_empty_string(self) -> None:
        assert parse_release_date("") is None

    def test_returns_none_for_blank_string(self) -> None:
        assert parse_release_date("   ") is None

    def test_returns_none_for_invalid_string(self) -> None:
        assert parse_release_date("not-a-date") is None

    def test_returns_none_for_impossible_date(self) -> None:
        assert parse_release_date("2024-02-30") is None

    def test_passes_dates_through(self) -> None:
        assert parse_release_date(date(2000, 1, 1)) == date(2000, 1, 1)
