"""
HTTP transport for node requests.

One blocking POST per call, no retries. The outcome is one of three values so
an empty answer from the node is never mistaken for a network failure:

- ``RawResponse``: the node answered with a body (results and JSON-RPC error
  envelopes alike, passed through uninterpreted)
- ``EmptyResponse``: the node answered with an empty body
- ``TransportError``: the request never completed (refused, DNS, timeout,
  malformed URL, undecodable body)
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Optional, Union

import httpx
from loguru import logger

from ..errors import RpcTransportError

DEFAULT_TIMEOUT = 30.0
JSON_HEADERS = {"Content-Type": "application/json"}


@dataclass(frozen=True)
class RawResponse:
    """A node answer. ``body`` is the decoded text; ``content`` holds the exact bytes."""

    body: str
    status_code: int = 200
    content: bytes = field(default=b"", repr=False)

    ok = True
    empty = False

    def json(self) -> Any:
        """Decode the body. Convenience only; the client never does this itself."""
        return json.loads(self.body)

    def __str__(self) -> str:
        return self.body


@dataclass(frozen=True)
class EmptyResponse:
    status_code: int = 200

    ok = True
    empty = True

    def __str__(self) -> str:
        return ""


@dataclass(frozen=True)
class TransportError:
    url: str
    cause: BaseException = field(compare=False)

    ok = False
    empty = False

    @property
    def message(self) -> str:
        return f"{type(self.cause).__name__}: {self.cause}"

    def raise_for_error(self) -> None:
        raise RpcTransportError(
            f"Request to {self.url} failed: {self.message}", url=self.url, cause=self.cause
        ) from self.cause

    def __str__(self) -> str:
        return self.message


CallResult = Union[RawResponse, EmptyResponse, TransportError]


class HttpTransport:
    """POSTs JSON bodies with ``httpx``, opening a fresh client per call."""

    def __init__(
        self,
        timeout: float = DEFAULT_TIMEOUT,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        self.timeout = timeout
        self._transport = transport

    def send(self, url: str, body: str) -> CallResult:
        try:
            with httpx.Client(timeout=self.timeout, transport=self._transport) as client:
                response = client.post(url, content=body.encode("utf-8"), headers=JSON_HEADERS)
                content = response.content
        except (httpx.RequestError, httpx.InvalidURL) as exc:
            logger.warning("transport failure posting to {}: {}", url, exc)
            return TransportError(url=url, cause=exc)

        logger.debug("{} answered {} with {} bytes", url, response.status_code, len(content))
        if not content:
            return EmptyResponse(status_code=response.status_code)
        return RawResponse(body=response.text, status_code=response.status_code, content=content)
