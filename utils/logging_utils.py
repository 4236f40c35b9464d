from typing import Dict, Iterable


SECRET_KEYS = frozenset({"password", "refresh_token", "access_token", "token"})


def mask_value(value):
    """Obscure a value before it reaches a log line."""
    if not isinstance(value, str):
        return value
    if "@" in value:  # email
        name, _, domain = value.partition("@")
        return (name[:2] + "***@" + domain) if name else "***@" + domain
    if len(value) > 12:
        return value[:4] + "..." + value[-4:]
    return "***"


def sanitize_payload(payload: Dict, allowed_keys: Iterable[str]) -> Dict:
    """Return a filtered copy of payload with only allowed keys.

    Credentials are dropped even when allowed; strings are masked.
    """
    result = {}
    for key in allowed_keys:
        if key in payload and key not in SECRET_KEYS:
            result[key] = mask_value(payload[key])
    return result
