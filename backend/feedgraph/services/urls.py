# backend/feedgraph/services/urls.py
from __future__ import annotations

from urllib.parse import urlsplit, urlunsplit


def host_of(url: str) -> str:
    """Lower-cased host[:port] of `url`, "" if it cannot be parsed."""
    try:
        netloc = urlsplit(url).netloc
    except ValueError:
        return ""
    return netloc.rsplit("@", 1)[-1].lower()


def is_same_domain(a: str, b: str) -> bool:
    ha, hb = host_of(a), host_of(b)
    return bool(ha) and ha == hb


def normalize_to_feed_url(raw: str) -> str:
    """
    Collapse a cited URL to the site it most likely belongs to:
      - query string and fragment dropped
      - post-like paths (more than two '/') collapse to the site root
      - always exactly one trailing '/'

    https://blog.example.com/2024/01/post?x=1  ->  https://blog.example.com/
    https://example.com/blog                   ->  https://example.com/blog/
    """
    try:
        parts = urlsplit(raw)
    except ValueError:
        return raw
    path = parts.path
    if path.count("/") > 2:
        path = "/"
    url = urlunsplit((parts.scheme, parts.netloc, path, "", ""))
    return url.rstrip("/") + "/"
