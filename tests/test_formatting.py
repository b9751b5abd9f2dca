"""Tests for formatting helpers."""

from sessionkeeper.formatting import format_age, format_size, truncate


class TestFormatSize:
    def test_zero(self):
        assert format_size(0) == "0 B"

    def test_bytes(self):
        assert format_size(500) == "500 B"

    def test_just_below_kilobyte(self):
        assert format_size(1023) == "1023 B"

    def test_kilobytes(self):
        assert format_size(1024) == "1.0 KB"
        assert format_size(1500) == "1.5 KB"

    def test_megabytes(self):
        assert format_size(1024 * 1024) == "1.0 MB"

    def test_gigabytes(self):
        assert format_size(5 * 1024**3) == "5.0 GB"

    def test_terabytes_cap(self):
        assert format_size(2048 * 1024**4) == "2048.0 TB"

    def test_negative_clamped(self):
        assert format_size(-10) == "0 B"


class TestFormatAge:
    def test_today(self):
        assert format_age(0) == "today"

    def test_singular(self):
        assert format_age(1) == "1 day"

    def test_plural(self):
        assert format_age(40) == "40 days"


class TestTruncate:
    def test_short_text_unchanged(self):
        assert truncate("hello", 10) == "hello"

    def test_long_text_truncated(self):
        result = truncate("a" * 100, 10)
        assert result == "aaaaaaa..."
        assert len(result) == 10
