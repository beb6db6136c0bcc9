"""Tests for DateNormalizer."""

from datetime import date, datetime

import pytest
import pytz

from search_framework.clients.search.normalizers.DateNormalizer import DateNormalizer


class TestDateNormalizer:
    """Tests for DateNormalizer."""

    @pytest.fixture
    def normalizer(self) -> DateNormalizer:
        return DateNormalizer()

    @pytest.mark.parametrize(
        "value, expected",
        [
            (60, "1970-01-01T00:01:00Z"),
            ("86400", "1970-01-02T00:00:00Z"),
            ("2024-03-01T10:00:00+02:00", "2024-03-01T08:00:00Z"),
            ("2024-03-01T10:00:00Z", "2024-03-01T10:00:00Z"),
            ("2024-03-01 10:00:00", "2024-03-01T10:00:00Z"),
            (date(2024, 3, 1), "2024-03-01T00:00:00Z"),
            (datetime(2024, 3, 1, 12, 30), "2024-03-01T12:30:00Z"),
        ],
    )
    def test_formats_in_utc(self, normalizer, value, expected) -> None:
        assert normalizer.normalize(value) == expected

    def test_aware_datetime_is_converted(self, normalizer) -> None:
        berlin = pytz.timezone("Europe/Berlin").localize(datetime(2024, 7, 1, 12, 0))

        assert normalizer.normalize(berlin) == "2024-07-01T10:00:00Z"

    def test_lists_normalized_per_element(self, normalizer) -> None:
        assert normalizer.normalize(["2024-03-01T10:00:00Z", 60]) == ["2024-03-01T10:00:00Z", "1970-01-01T00:01:00Z"]

    @pytest.mark.parametrize("value", ["", None, "not a date", True])
    def test_unparseable_values_unchanged(self, normalizer, value) -> None:
        assert normalizer.normalize(value) == value

    def test_custom_format(self) -> None:
        normalizer = DateNormalizer().set_date_format("%Y-%m-%d")

        assert normalizer.get_date_format() == "%Y-%m-%d"
        assert normalizer.normalize("2024-03-01T23:00:00-02:00") == "2024-03-02"

    @pytest.mark.parametrize("value", ["9780306406157", 10**20])
    def test_out_of_range_timestamps_unchanged(self, normalizer, value) -> None:
        """Test digits too large for a timestamp are left as they are."""
        assert normalizer.normalize(value) == value
