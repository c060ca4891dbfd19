"""Default key extraction: URL line -> registrable domain."""

from urllib.parse import urlsplit

from burst_aggregator.errors import KeyExtractionError


def registrable_domain(line: str) -> str:
    """
    Return the last two labels of the URL's hostname.

    ``https://static.cdn.example.com/a.js`` maps to ``example.com``. Lines
    without a scheme and hostname raise KeyExtractionError.
    """
    try:
        hostname = urlsplit(line.strip()).hostname
    except ValueError as exc:
        raise KeyExtractionError(f"invalid URL: {line!r}") from exc

    if not hostname:
        raise KeyExtractionError(f"no hostname in line: {line!r}")

    return ".".join(hostname.split(".")[-2:])
