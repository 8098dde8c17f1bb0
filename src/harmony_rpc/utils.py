from __future__ import annotations

import re
from decimal import Decimal
from typing import Union

ATTO_PER_ONE = Decimal(10) ** 18

_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])|(?<=[A-Z])(?=[A-Z][a-z])")


def atto_to_one(value: Union[int, str, Decimal]) -> Decimal:
    """Convert an amount in atto (1e-18 ONE) to ONE.

    Accepts ints, decimal strings and ``0x`` hex strings as returned by the node.
    """
    if isinstance(value, str) and value.lower().startswith("0x"):
        value = int(value, 16)
    return Decimal(value) / ATTO_PER_ONE


def snake_case(name: str) -> str:
    """``getCXReceiptByHash`` -> ``get_cx_receipt_by_hash``."""
    return _CAMEL_BOUNDARY.sub("_", name).lower()


def python_name(rpc_method: str) -> str:
    """Strip the ``hmyv2_`` / ``net_`` namespace and snake-case the rest."""
    _, _, bare = rpc_method.partition("_")
    return snake_case(bare or rpc_method)
