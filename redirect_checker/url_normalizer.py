"""
1.0 URL Normalizer
Reduces URLs to a comparison-stable form before redirect targets are matched.
"""

from typing import Optional


def _is_root_path(url: str) -> bool:
    """True for "scheme://host/" where the trailing slash is the whole path."""
    if '://' not in url:
        return False
    after_scheme = url.split('://', 1)[1]
    return bool(after_scheme) and '/' not in after_scheme[:-1]


def normalize_url(url: Optional[str]) -> Optional[str]:
    """
    1.1 Strip trailing slashes from a URL.

    "https://example.com/page/" -> "https://example.com/page"
    "https://example.com/"      -> "https://example.com/"  (root path kept)
    "http:/"                    -> "http:/"  (would leave only the scheme)

    Empty or None input is returned unchanged. Stripping stops at the first
    string the guards protect, so normalize_url(normalize_url(x)) equals
    normalize_url(x).
    """
    if not url:
        return url

    normalized = url
    while len(normalized) > 1 and normalized.endswith('/'):
        if _is_root_path(normalized):
            break
        last_char_removed = normalized[:-1]
        if last_char_removed.endswith(':'):
            break
        normalized = last_char_removed
    return normalized


def urls_match(actual_url: str, expected_part: str) -> bool:
    """
    1.2 True if the reached URL contains the expected fragment.

    Both sides are normalized and lowercased first, so the check ignores
    case and trailing slashes.
    """
    normalized_actual = (normalize_url(actual_url) or '').lower()
    normalized_expected = (normalize_url(expected_part) or '').lower()
    return normalized_expected in normalized_actual
