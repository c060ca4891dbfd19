"""Tests for the default key extractor."""

import pytest

from burst_aggregator.errors import KeyExtractionError
from burst_aggregator.extract import registrable_domain


@pytest.mark.parametrize(
    ("line", "expected"),
    [
        ("https://www.example.com/path?q=1", "example.com"),
        ("http://a.b.c.example.org", "example.org"),
        ("https://localhost:8080/", "localhost"),
        ("https://EXAMPLE.COM/x", "example.com"),
        ("  https://cdn.site.io/app.js  ", "site.io"),
        ("ftp://user:pw@files.host.net/pub", "host.net"),
    ],
)
def test_registrable_domain(line: str, expected: str) -> None:
    assert registrable_domain(line) == expected


@pytest.mark.parametrize("line", ["", "not a url", "example.com/path", "https:///nohost", "http://[::1"])
def test_registrable_domain_rejects_lines_without_hostname(line: str) -> None:
    with pytest.raises(KeyExtractionError):
        registrable_domain(line)
