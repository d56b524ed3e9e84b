import re
from collections.abc import Mapping
from typing import Any

PINCODE_PARAM = "pincode"

# [0-9] rather than \d so non-ASCII digits are rejected.
_PINCODE_PATTERN = re.compile(r"[0-9]{6}")


def extract_pincode(params: Mapping[str, Any]) -> str | None:
    """Return the first ``pincode`` value from query parameters, or None when absent.

    Non-string values from plain mappings are passed through ``str`` so they are
    validated like any query-string text.
    """
    getlist = getattr(params, "getlist", None)
    if getlist is not None:
        values = getlist(PINCODE_PARAM)
        value = values[0] if values else None
    else:
        value = params.get(PINCODE_PARAM)
        if isinstance(value, list | tuple):
            value = value[0] if value else None
    if value is None or isinstance(value, str):
        return value
    return str(value)


def is_valid_pincode(value: Any) -> bool:
    return isinstance(value, str) and _PINCODE_PATTERN.fullmatch(value) is not None
