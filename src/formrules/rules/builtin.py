"""Built-in validation rules.

Every rule is a plain function ``rule(value, field=None, params=()) -> bool``
so it can be called and tested on its own. ``BUILTIN_RULES`` pairs each
function with its registered name and default message template.

Available rules:
- required, alpha, numeric, digit, alphanumeric, alpha_dash
- email, uszip, usphone, creditcard, ssn, url, ipaddress, image
- size[n], between[lo,hi], min[n], max[n]
"""

from __future__ import annotations

import math
import re
from typing import TYPE_CHECKING, Any, Sequence

if TYPE_CHECKING:
    from formrules.registry import RuleRegistry


# =============================================================================
# Patterns
# =============================================================================

# Patterns are ASCII-only and matched against the whole value with fullmatch.

NON_BLANK_PATTERN = re.compile(r"\S")

ALPHA_PATTERN = re.compile(r"[a-zA-Z\s]+", re.ASCII)

NUMERIC_PATTERN = re.compile(r"-?\d+(\.\d+)?", re.ASCII)

DIGIT_PATTERN = re.compile(r"\d+", re.ASCII)

ALPHANUMERIC_PATTERN = re.compile(r"[a-zA-Z0-9]+", re.ASCII)

ALPHA_DASH_PATTERN = re.compile(r"[-a-zA-Z0-9_]+", re.ASCII)

EMAIL_PATTERN = re.compile(
    r"[a-zA-Z0-9_.\-]+(\+[a-zA-Z0-9]+)*@([a-zA-Z0-9\-]+\.)+[a-zA-Z0-9]{2,4}", re.ASCII
)

# 12345, 12345-6789 or 123456789
USZIP_PATTERN = re.compile(r"\d{5}(-?\d{4})?", re.ASCII)

USPHONE_PATTERN = re.compile(
    r"([0-9][ .-]?)?(\(?[0-9]{3}\)?|[0-9]{3})[ .-]?([0-9]{3}[ .-]?[0-9]{4}|[a-zA-Z0-9]{7})",
    re.ASCII,
)

# Visa, MasterCard, Discover, Amex, Diners Club, JCB
CREDITCARD_PATTERN = re.compile(
    r"(?:4[0-9]{12}(?:[0-9]{3})?"
    r"|5[1-5][0-9]{14}"
    r"|6(?:011|5[0-9][0-9])[0-9]{12}"
    r"|3[47][0-9]{13}"
    r"|3(?:0[0-5]|[68][0-9])[0-9]{11}"
    r"|(?:2131|1800|35\d{3})\d{11})",
    re.ASCII,
)

# Area 001-771 except 000, 666 and 734-749; group not 00; serial not 0000
SSN_PATTERN = re.compile(
    r"((?!000)(?!666)([0-6]\d{2}|7[0-2][0-9]|73[0-3]|7[5-6][0-9]|77[0-1]))"
    r"[\s-]"
    r"((?!00)\d{2})"
    r"[\s-]"
    r"((?!0000)\d{4})",
    re.ASCII,
)

# Prefix match: only the scheme and the start of the body are checked
URL_PATTERN = re.compile(
    r"^\b(https?|ftp|file)://[-A-Za-z0-9+&@#/%?=~_|!:,.;]*[-A-Za-z0-9+&@#/%=~_|]"
)

_OCTET = r"(\d|[1-9]\d|1\d\d|2[0-4]\d|25[0-5])"
IPADDRESS_PATTERN = re.compile(rf"{_OCTET}\.{_OCTET}\.{_OCTET}\.{_OCTET}", re.ASCII)

IMAGE_PATTERN = re.compile(r"\.(jpg|jpeg|png|gif|bmp)\Z", re.IGNORECASE | re.ASCII)


# =============================================================================
# Coercion helpers
# =============================================================================


def _to_number(value: str) -> float | None:
    """Coerce a raw value to a number, or None when it is not numeric.

    Blank strings, non-ASCII digits, NaN and infinities are not numeric.
    """
    if not isinstance(value, str) or not value.strip():
        return None
    if not value.isascii() or "_" in value:
        return None
    try:
        number = float(value)
    except ValueError:
        return None
    if not math.isfinite(number):
        return None
    return number


def _param(params: Sequence[str], index: int) -> float | None:
    """Numeric value of the parameter at ``index``, or None if missing or invalid."""
    if index >= len(params):
        return None
    return _to_number(params[index])


def _measure(value: str) -> float:
    """Numeric value if the value is numeric, otherwise its length."""
    number = _to_number(value)
    return len(value) if number is None else number


# =============================================================================
# Pattern Rules
# =============================================================================


def required(value: str, field: Any = None, params: Sequence[str] = ()) -> bool:
    return NON_BLANK_PATTERN.search(value) is not None


def alpha(value: str, field: Any = None, params: Sequence[str] = ()) -> bool:
    return ALPHA_PATTERN.fullmatch(value) is not None


def numeric(value: str, field: Any = None, params: Sequence[str] = ()) -> bool:
    return NUMERIC_PATTERN.fullmatch(value) is not None


def digit(value: str, field: Any = None, params: Sequence[str] = ()) -> bool:
    return DIGIT_PATTERN.fullmatch(value) is not None


def alphanumeric(value: str, field: Any = None, params: Sequence[str] = ()) -> bool:
    return ALPHANUMERIC_PATTERN.fullmatch(value) is not None


def alpha_dash(value: str, field: Any = None, params: Sequence[str] = ()) -> bool:
    return ALPHA_DASH_PATTERN.fullmatch(value) is not None


def email(value: str, field: Any = None, params: Sequence[str] = ()) -> bool:
    return EMAIL_PATTERN.fullmatch(value) is not None


def uszip(value: str, field: Any = None, params: Sequence[str] = ()) -> bool:
    return USZIP_PATTERN.fullmatch(value) is not None


def usphone(value: str, field: Any = None, params: Sequence[str] = ()) -> bool:
    return USPHONE_PATTERN.fullmatch(value) is not None


def creditcard(value: str, field: Any = None, params: Sequence[str] = ()) -> bool:
    return CREDITCARD_PATTERN.fullmatch(value) is not None


def ssn(value: str, field: Any = None, params: Sequence[str] = ()) -> bool:
    return SSN_PATTERN.fullmatch(value) is not None


def url(value: str, field: Any = None, params: Sequence[str] = ()) -> bool:
    return URL_PATTERN.match(value) is not None


def ipaddress(value: str, field: Any = None, params: Sequence[str] = ()) -> bool:
    return IPADDRESS_PATTERN.fullmatch(value) is not None


def image(value: str, field: Any = None, params: Sequence[str] = ()) -> bool:
    return IMAGE_PATTERN.search(value) is not None


# =============================================================================
# Parameterised Rules
# =============================================================================


def size(value: str, field: Any = None, params: Sequence[str] = ()) -> bool:
    """Value length is exactly params[0]."""
    expected = _param(params, 0)
    if expected is None:
        return False
    return len(value) == expected


def between(value: str, field: Any = None, params: Sequence[str] = ()) -> bool:
    """params[0] < value < params[1], exclusive on both ends.

    Numeric values compare by value, anything else by length.
    """
    low = _param(params, 0)
    high = _param(params, 1)
    if low is None or high is None:
        return False
    return low < _measure(value) < high


def min_(value: str, field: Any = None, params: Sequence[str] = ()) -> bool:
    """Numeric value (or length) is at least params[0], inclusive."""
    bound = _param(params, 0)
    if bound is None:
        return False
    return _measure(value) >= bound


def max_(value: str, field: Any = None, params: Sequence[str] = ()) -> bool:
    """Numeric value (or length) is at most params[0], inclusive."""
    bound = _param(params, 0)
    if bound is None:
        return False
    return _measure(value) <= bound


# =============================================================================
# Registration
# =============================================================================

BUILTIN_RULES: list[tuple[str, Any, str]] = [
    ("required", required, "{name} can not be blank"),
    ("alpha", alpha, "{name} should contain letters and spaces only"),
    ("numeric", numeric, "{name} should contain numbers only"),
    ("digit", digit, "{name} should contain digits only"),
    ("alphanumeric", alphanumeric, "{name} should contain letters and numbers only"),
    ("email", email, "{val} is not a valid email address"),
    ("uszip", uszip, "{val} is not a valid US zipcode"),
    ("usphone", usphone, "{val} is not a valid US phone number"),
    ("creditcard", creditcard, "{val} is not a valid credit card number"),
    ("ssn", ssn, "{val} is not a valid social security number"),
    (
        "alpha_dash",
        alpha_dash,
        "{name} must contain only letters, numbers, dashes or underscore characters.",
    ),
    ("size", size, "{name} must be exactly {param1} characters long."),
    ("between", between, "{name} must be between {param1} and {param2}."),
    ("min", min_, "{name} must be minimum {param1}."),
    ("max", max_, "{name} should not be more than {param1}."),
    ("url", url, "{val} is not a valid URL"),
    ("ipaddress", ipaddress, "{val} is not a valid IP address"),
    ("image", image, "{val} is not an image."),
]


def register_builtin_rules(registry: RuleRegistry) -> None:
    """Register all built-in rules with the given registry."""
    for name, predicate, message in BUILTIN_RULES:
        registry.register(name, predicate, message)
