"""URL and path helpers shared by the validation rules."""

from urllib.parse import urlsplit


def normalize_path(path: str | None) -> str:
    """Strip leading and trailing slashes from a path fragment.

    Args:
        path: Path fragment such as a parent folder ("/en-us/hotel/")

    Returns:
        Path without surrounding slashes, empty string for None

    Examples:
        >>> normalize_path("/en-us/hotel/")
        'en-us/hotel'
        >>> normalize_path(None)
        ''
    """
    if not path:
        return ""

    return path.strip("/")


def check_url_syntax(url: str) -> None:
    """Check that a URL is absolute and syntactically well formed.

    Raises:
        ValueError: With a readable reason when the URL cannot be parsed
    """
    try:
        parts = urlsplit(url)
        # Accessing port validates it
        parts.port
    except ValueError as e:
        raise ValueError(f"Invalid URL: {e}") from e

    if not parts.scheme:
        raise ValueError(f"Invalid URL: missing scheme in {url!r}")
    if not parts.netloc or not parts.hostname:
        raise ValueError(f"Invalid URL: missing host in {url!r}")
    if any(ch.isspace() for ch in parts.netloc):
        raise ValueError(f"Invalid URL: whitespace in host {parts.netloc!r}")


def has_repeated_slashes(url: str) -> bool:
    """True when '//' appears anywhere besides the scheme delimiter."""
    return url.count("//") > 1


def expected_url(base_url: str, parent_path: str | None, additional_path: str | None = "") -> str:
    """Build the URL an entry is expected to have under a parent path.

    Examples:
        >>> expected_url("https://www.example.com", "/en-us/hotel/", "bali")
        'https://www.example.com/en-us/hotel/bali'
    """
    normalized_parent = normalize_path(parent_path)
    normalized_additional = normalize_path(additional_path)

    if normalized_additional:
        return f"{base_url}/{normalized_parent}/{normalized_additional}"
    return f"{base_url}/{normalized_parent}"
