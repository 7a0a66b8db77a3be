"""Rate limit parsing tests."""

from barbooking.api.deps import parse_rate


def test_parse_rate_reads_count_and_window() -> None:
    assert parse_rate("20/minute", fallback=(1, 1)) == (20, 60)
    assert parse_rate(" 5 / Hours ", fallback=(1, 1)) == (5, 3600)


def test_parse_rate_falls_back_on_garbage() -> None:
    assert parse_rate("lots", fallback=(100, 60)) == (100, 60)
    assert parse_rate("ten/minute", fallback=(100, 60)) == (100, 60)
    assert parse_rate("10/fortnight", fallback=(100, 60)) == (10, 60)
