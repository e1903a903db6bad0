# dpc_rankings/utils/misc_utils.py
import hashlib
from typing import Mapping
from urllib.parse import urlencode


def build_cache_key(url: str, params: Mapping[str, str]) -> str:
    """Generates a stable key for a request, independent of parameter order."""
    query = urlencode(sorted(params.items()))
    digest = hashlib.sha1(f"{url}?{query}".encode()).hexdigest()[:16]
    return f"wiki:{digest}"


def names_match(left: str, right: str) -> bool:
    """Case-insensitive comparison of two display names."""
    return left.lower() == right.lower()
