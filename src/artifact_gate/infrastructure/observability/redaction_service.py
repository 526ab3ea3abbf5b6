import re
from typing import Any

# (prefix)(secret) pairs; group 2 is replaced
SECRET_PATTERNS = [
    r"(Bearer\s+)([a-zA-Z0-9\-\._~+/=]+)",
    r"(token\s+)(gh[pousr]_[a-zA-Z0-9]+)",
    r"(Authorization:\s*)([a-zA-Z0-9\-\._~+/=]+)",
    r"(ZSESSIONID[\"']?\s*[:=]\s*[\"']?)([a-zA-Z0-9_\-]+)",
    r"(zsessionid\s+)([a-zA-Z0-9_\-]+)",
    r"(key=)([a-zA-Z0-9\-]+)",
    r"(password\s*[:=]\s*)(['\"]?[^\s'\"]+['\"]?)",
]

SENSITIVE_KEYS = {
    "authorization",
    "zsessionid",
    "api_key",
    "token",
    "password",
    "secret",
}


def redact_text(text: str) -> str:
    """Mask credentials embedded in ``text`` (error messages, raw payloads)."""
    if not text:
        return text

    redacted_text = text
    for pattern in SECRET_PATTERNS:
        redacted_text = re.sub(pattern, r"\1[REDACTED]", redacted_text, flags=re.IGNORECASE)
    return redacted_text


def redact_value(value: Any) -> Any:
    if isinstance(value, str):
        return redact_text(value)
    if isinstance(value, dict):
        return redact_dict(value)
    if isinstance(value, list):
        return [redact_value(item) for item in value]
    return value


def redact_dict(obj: dict[str, Any]) -> dict[str, Any]:
    """Redact sensitive keys and values in a dictionary (recursive)."""
    new_obj = {}
    for k, v in obj.items():
        key_lower = str(k).lower()
        if any(sensitive in key_lower for sensitive in SENSITIVE_KEYS):
            new_obj[k] = "[REDACTED]"
        else:
            new_obj[k] = redact_value(v)
    return new_obj
