"""Tests for form-date normalization."""
from datetime import date, datetime

import pytest

from chapterhub.services.dates import to_chapter_date


class TestChapterDate:

    def test_plain_date_string(self):
        assert to_chapter_date("2025-02-01") == date(2025, 2, 1)

    def test_date_passes_through(self):
        assert to_chapter_date(date(2025, 2, 1)) == date(2025, 2, 1)

    def test_naive_datetime_keeps_its_date(self):
        assert to_chapter_date("2025-02-01T23:59:00") == date(2025, 2, 1)

    def test_aware_datetime_shifted_to_chapter_timezone(self):
        """The stored date can differ from the literal date prefix that was sent."""
        assert to_chapter_date("2025-03-02T03:00:00Z") == date(2025, 3, 1)
        assert to_chapter_date(datetime.fromisoformat("2025-03-02T03:00:00+00:00")) == date(2025, 3, 1)

    def test_garbage(self):
        with pytest.raises(ValueError):
            to_chapter_date("next tuesday")

    def test_out_of_range_is_value_error(self):
        with pytest.raises(ValueError, match="out of range"):
            to_chapter_date("0001-01-01T01:00:00+05:00")
