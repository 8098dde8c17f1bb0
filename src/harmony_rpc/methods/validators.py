"""
Primitive argument checks for Harmony node RPC parameters.

Every check takes an arbitrary value and returns a bool. None of them raise,
whatever the input type, so composite validation can run all checks and
report every failure at once.
"""

from __future__ import annotations

import re
from typing import Any, Callable

ONE_ADDRESS_RE = re.compile(r"^one1[a-z0-9]{38}$")
HEX_ADDRESS_RE = re.compile(r"^0x[0-9a-fA-F]{40}$")
HEX_HASH_RE = re.compile(r"^0x[0-9a-fA-F]{64}$")
HEX_BLOB_RE = re.compile(r"^(0x|0X)?[0-9a-fA-F]+$")
STORAGE_SLOT_RE = re.compile(r"^0x[0-9a-fA-F]{1,64}$")
POSITIVE_INT_RE = re.compile(r"^[1-9][0-9]*$")
NON_NEGATIVE_INT_RE = re.compile(r"^[0-9]+$")

TX_TYPES = ("ALL", "SENT", "RECEIVED")
SORT_ORDERS = ("ASC", "DESC")

# Canonical boolean representation used by every flag parameter.
BOOL_FORMS = (True, False)

ALL_PAGES = -1

Check = Callable[[Any], bool]


def _matches(pattern: re.Pattern[str], value: Any) -> bool:
    return isinstance(value, str) and pattern.fullmatch(value) is not None


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def is_one_address(value: Any) -> bool:
    """Bech32-style account address: ``one1`` + 38 lowercase alphanumerics."""
    return _matches(ONE_ADDRESS_RE, value)


def is_hex_address(value: Any) -> bool:
    """``0x`` + 40 hex digits, any case."""
    return _matches(HEX_ADDRESS_RE, value)


def is_hex_hash(value: Any) -> bool:
    """``0x`` + 64 hex digits, any case."""
    return _matches(HEX_HASH_RE, value)


def is_hex_blob(value: Any) -> bool:
    """Variable-length hex with an optional ``0x``/``0X`` prefix."""
    return _matches(HEX_BLOB_RE, value)


def is_storage_slot(value: Any) -> bool:
    return _matches(STORAGE_SLOT_RE, value)


def is_positive_int(value: Any) -> bool:
    if _is_int(value):
        return value > 0
    return _matches(POSITIVE_INT_RE, value)


def is_non_negative_int(value: Any) -> bool:
    if _is_int(value):
        return value >= 0
    return _matches(NON_NEGATIVE_INT_RE, value)


def is_page_number(value: Any) -> bool:
    """One-based page number, or ``-1`` for all pages."""
    if _is_int(value) and value == ALL_PAGES:
        return True
    if value == str(ALL_PAGES):
        return True
    return is_positive_int(value)


def is_one_of(allowed: tuple[Any, ...]) -> Check:
    def check(value: Any) -> bool:
        return any(type(value) is type(item) and value == item for item in allowed)

    check.__name__ = f"is_one_of_{'_'.join(str(item) for item in allowed)}"
    return check


def is_bool_flag(forms: tuple[Any, Any] = BOOL_FORMS) -> Check:
    """Build a check accepting exactly the two literal forms given.

    Comparison is type-strict, so with the default forms ``1`` and ``0`` are
    rejected even though they compare equal to ``True`` and ``False``.
    """
    return is_one_of(tuple(forms))


is_tx_type = is_one_of(TX_TYPES)
is_sort_order = is_one_of(SORT_ORDERS)
is_flag = is_bool_flag()
