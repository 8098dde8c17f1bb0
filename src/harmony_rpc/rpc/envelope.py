"""
JSON-RPC 2.0 request envelopes.

No validation happens here; callers that want it validate first.
"""

from __future__ import annotations

import json
from typing import Any, Optional, Sequence

JSONRPC_VERSION = "2.0"

# One request in flight per session, so the id is never used for correlation.
REQUEST_ID = 1


def build(method: str, params: Optional[Sequence[Any]] = None) -> dict[str, Any]:
    """Build a request envelope.

    Args:
        method: RPC method name (e.g., "hmyv2_getBalance")
        params: Already laid-out parameters

    Returns:
        Envelope dict; ``params`` is always a list, ``[]`` when there are none
    """
    return {
        "jsonrpc": JSONRPC_VERSION,
        "id": REQUEST_ID,
        "method": method,
        "params": list(params) if params else [],
    }


def encode(envelope: dict[str, Any]) -> str:
    return json.dumps(envelope, separators=(",", ":"))
