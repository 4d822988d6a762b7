from urllib.parse import urlparse


def is_valid_url(value) -> bool:
    """
    True if `value` parses as an absolute URL (scheme + authority).
    No reachability check and no scheme allowlist.
    """
    if not isinstance(value, str):
        return False
    value = value.strip()
    if not value or any(ch.isspace() for ch in value):
        return False

    try:
        parsed = urlparse(value)
        parsed.port  # raises ValueError on a non-numeric or out-of-range port
    except ValueError:
        return False

    if not parsed.scheme:
        return False
    if parsed.netloc:
        return bool(parsed.hostname)
    # file:///path has an empty authority but is still absolute
    return parsed.scheme.lower() == "file" and parsed.path.startswith("/")
