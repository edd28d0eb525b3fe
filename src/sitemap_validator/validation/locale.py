"""Locale extraction from URL paths (e.g. "id-id", "en-us")."""

import re
from urllib.parse import urlsplit

LOCALE_SEGMENT = re.compile(r"[a-z]{2}-[a-z]{2}", re.IGNORECASE | re.ASCII)

# Sentinel hreflang value for the language-neutral alternate
X_DEFAULT = "x-default"


class LocaleExtractor:
    """Extracts the locale code carried by the first path segment of a URL."""

    def extract(self, url: str | None) -> str | None:
        """Return the lowercased locale of ``url`` or None when there is none.

        Never raises: unparseable URLs yield None.
        """
        if not url:
            return None

        try:
            path = urlsplit(url).path
        except ValueError:
            return None

        segments = [segment for segment in path.split("/") if segment.strip()]
        if segments and LOCALE_SEGMENT.fullmatch(segments[0]):
            return segments[0].lower()

        return None


_default_extractor = LocaleExtractor()


def extract_locale(url: str | None) -> str | None:
    """Module-level shortcut for :meth:`LocaleExtractor.extract`."""
    return _default_extractor.extract(url)
