"""Tests for display formatting helpers."""

import pytest
from datetime import datetime, timedelta, timezone
from prwatcher.utils.formatting import normalize_hex_color, relative_time


NOW = datetime(2024, 3, 1, 12, 0, tzinfo=timezone.utc)


class TestNormalizeHexColor:
    """Test cases for normalize_hex_color function."""

    @pytest.mark.parametrize("color,expected", [
        ("d73a4a", (0xd7, 0x3a, 0x4a)),
        ("#0e8a16", (0x0e, 0x8a, 0x16)),
        ("fff", (255, 255, 255)),
        ("", (0, 0, 0)),
        ("zzzz", (0, 0, 0)),
        ("12345", (0, 0, 0)),
    ])
    def test_colors(self, color, expected):
        """Test valid colors parse and garbled ones render black."""
        assert normalize_hex_color(color) == expected


class TestRelativeTime:
    """Test cases for relative_time function."""

    def test_past(self):
        """Test past timestamps."""
        assert relative_time(NOW - timedelta(hours=3), NOW) == "3 hours ago"
        assert relative_time(NOW - timedelta(minutes=1), NOW) == "1 minute ago"
        assert relative_time(NOW - timedelta(days=2), NOW) == "2 days ago"

    def test_future(self):
        """Test future timestamps."""
        assert relative_time(NOW + timedelta(minutes=5), NOW) == "in 5 minutes"

    def test_now(self):
        """Test identical timestamps."""
        assert relative_time(NOW, NOW) == "now"
