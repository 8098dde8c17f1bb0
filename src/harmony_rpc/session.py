"""
Session - the client facade over the method registry.

A session is bound to one node endpoint for its whole life. It owns the error
accumulator that validation writes into, so one session serves one logical
unit of work and is never shared between threads.

For every registered method the session answers two attribute names::

    session.validate_get_balance("one1...")   # -> bool, diagnostics in get_errors()
    session.call_get_balance("one1...")       # -> RawResponse | EmptyResponse | TransportError

``call_*`` does not validate: a caller that skips ``validate_*`` sends whatever
it passed straight to the node. ``prepare`` / ``dispatch`` is the checked
alternative, where dispatch only accepts a ``ValidatedCall`` produced by a
passing validation.
"""

from __future__ import annotations

from dataclasses import dataclass, field
import weakref
from typing import Any, Iterator, Optional

from loguru import logger

from .config import ClientConfig, NodeTable, resolve_endpoint
from .methods.catalog import REGISTRY
from .methods.params import (
    MethodDescriptor,
    MethodRegistry,
    bind_arguments,
    build_params,
    validate_arguments,
)
from .rpc import envelope
from .rpc.transport import CallResult, HttpTransport

CLEAN = "clean"
DIRTY = "dirty"

_VALIDATE_PREFIX = "validate_"
_CALL_PREFIX = "call_"

_PREPARED_TOKEN = object()


class ErrorAccumulator:
    """Append-only list of diagnostic messages, cleared between requests."""

    def __init__(self) -> None:
        self._messages: list[str] = []

    def add(self, message: str) -> None:
        self._messages.append(message)

    def extend(self, messages: list[str]) -> None:
        self._messages.extend(messages)

    def clear(self) -> None:
        self._messages.clear()

    @property
    def messages(self) -> tuple[str, ...]:
        return tuple(self._messages)

    def __len__(self) -> int:
        return len(self._messages)

    def __bool__(self) -> bool:
        return bool(self._messages)

    def __iter__(self) -> Iterator[str]:
        return iter(tuple(self._messages))

    def __repr__(self) -> str:
        return f"ErrorAccumulator({self._messages!r})"


@dataclass(frozen=True, eq=False)
class ValidatedCall:
    """Arguments that passed validation, laid out and ready to send.

    Only ``Session.prepare`` can build one, and only the session that built it
    will dispatch it. Copies (``dataclasses.replace``) are not accepted.
    """

    descriptor: MethodDescriptor
    params: tuple[Any, ...]
    _token: object = field(default=None, repr=False, compare=False)

    def __post_init__(self) -> None:
        if self._token is not _PREPARED_TOKEN:
            raise TypeError("ValidatedCall instances are created by Session.prepare()")

    @property
    def method(self) -> str:
        return self.descriptor.rpc_method

    def envelope(self) -> dict[str, Any]:
        return envelope.build(self.descriptor.rpc_method, list(self.params))


class Session:
    """
    A client handle bound to one (network, shard) endpoint.

    Args:
        network: Network name from the node table (default: config value)
        shard: Shard index on that network (default: config value)
        nodes: Node table overriding the configured one
        max_page_size: Largest page size validation accepts
        default_page_size: Page size sent when a paged call gives none
        timeout: HTTP timeout in seconds
        config: Base configuration (default: ``ClientConfig()``)
        transport: Object with ``send(url, body) -> CallResult``
        registry: Method registry (default: every supported method)
    """

    def __init__(
        self,
        network: Optional[str] = None,
        shard: Optional[int] = None,
        *,
        nodes: Optional[NodeTable] = None,
        max_page_size: Optional[int] = None,
        default_page_size: Optional[int] = None,
        timeout: Optional[float] = None,
        config: Optional[ClientConfig] = None,
        transport: Optional[Any] = None,
        registry: Optional[MethodRegistry] = None,
    ) -> None:
        base = config or ClientConfig()
        overrides = {
            "nodes": nodes,
            "network": network,
            "shard": shard,
            "max_page_size": max_page_size,
            "default_page_size": default_page_size,
            "timeout": timeout,
        }
        settings = {
            "nodes": base.nodes,
            "network": base.network,
            "shard": base.shard,
            "max_page_size": base.max_page_size,
            "default_page_size": base.default_page_size,
            "timeout": base.timeout,
        }
        settings.update({key: value for key, value in overrides.items() if value is not None})
        self._config = ClientConfig(**settings)
        self._endpoint = resolve_endpoint(self._config.nodes, self._config.network, self._config.shard)
        self._transport = transport or HttpTransport(timeout=self._config.timeout)
        self._registry = registry or REGISTRY
        self.errors = ErrorAccumulator()
        self._issued: weakref.WeakSet[ValidatedCall] = weakref.WeakSet()
        logger.debug(
            "session bound to {} shard {} at {}", self._config.network, self._config.shard, self._endpoint
        )

    @classmethod
    def from_config(cls, config: ClientConfig, **kwargs: Any) -> "Session":
        return cls(config=config, **kwargs)

    # ============ Session info ============

    @property
    def endpoint(self) -> str:
        return self._endpoint

    @property
    def network(self) -> str:
        return self._config.network

    @property
    def shard(self) -> int:
        return self._config.shard

    @property
    def max_page_size(self) -> int:
        return self._config.max_page_size

    @property
    def default_page_size(self) -> int:
        return self._config.default_page_size

    @property
    def registry(self) -> MethodRegistry:
        return self._registry

    # ============ Error state ============

    @property
    def state(self) -> str:
        return DIRTY if self.errors else CLEAN

    @property
    def is_clean(self) -> bool:
        return not self.errors

    def get_errors(self) -> tuple[str, ...]:
        return self.errors.messages

    def reset(self) -> None:
        """Clear accumulated errors; endpoint and page settings are kept."""
        self.errors.clear()

    # ============ Validation & dispatch ============

    def describe(self, method: str) -> MethodDescriptor:
        return self._registry.get(method)

    def methods(self) -> list[MethodDescriptor]:
        return sorted(self._registry, key=lambda d: d.name)

    def validate(self, method: str, *args: Any, **kwargs: Any) -> bool:
        """Check arguments for ``method``; every failure is appended to ``errors``."""
        descriptor = self._registry.get(method)
        values = bind_arguments(descriptor, args, kwargs)
        problems = validate_arguments(descriptor, values, self._config.max_page_size)
        if problems:
            self.errors.extend(problems)
            logger.debug("{} rejected: {}", descriptor.rpc_method, "; ".join(problems))
            return False
        return True

    def build_request(self, method: str, *args: Any, **kwargs: Any) -> dict[str, Any]:
        """The envelope ``call`` would send, without sending it."""
        descriptor = self._registry.get(method)
        values = bind_arguments(descriptor, args, kwargs)
        params = build_params(descriptor, values, self._config.default_page_size)
        return envelope.build(descriptor.rpc_method, params)

    def call(self, method: str, *args: Any, **kwargs: Any) -> CallResult:
        """Send ``method`` with the given arguments as-is (no validation)."""
        return self._send(self.build_request(method, *args, **kwargs))

    def prepare(self, method: str, *args: Any, **kwargs: Any) -> Optional[ValidatedCall]:
        """Validate and, on success, return a call that ``dispatch`` accepts."""
        descriptor = self._registry.get(method)
        values = bind_arguments(descriptor, args, kwargs)
        if not self.validate(method, **values):
            return None
        params = build_params(descriptor, values, self._config.default_page_size)
        prepared = ValidatedCall(descriptor, tuple(params), _PREPARED_TOKEN)
        self._issued.add(prepared)
        return prepared

    def dispatch(self, validated: ValidatedCall) -> CallResult:
        if not isinstance(validated, ValidatedCall):
            raise TypeError(
                f"dispatch() requires a ValidatedCall from prepare(), got {type(validated).__name__}"
            )
        if validated not in self._issued:
            raise TypeError("dispatch() only accepts calls prepared by this session")
        return self._send(validated.envelope())

    def _send(self, request: dict[str, Any]) -> CallResult:
        logger.debug("-> {} {}", request["method"], self._endpoint)
        return self._transport.send(self._endpoint, envelope.encode(request))

    # ============ Per-method pairs ============

    def __getattr__(self, name: str) -> Any:
        if name.startswith("_"):
            raise AttributeError(name)
        for prefix, action in ((_VALIDATE_PREFIX, self.validate), (_CALL_PREFIX, self.call)):
            if name.startswith(prefix):
                method = name[len(prefix):]
                if method in self._registry:
                    descriptor = self._registry.get(method)
                    return _bound_method(action, descriptor, f"{prefix}{descriptor.name}")
        raise AttributeError(f"{type(self).__name__!r} object has no attribute {name!r}")

    def __dir__(self) -> list[str]:
        names = set(super().__dir__())
        for descriptor in self._registry:
            names.add(f"{_VALIDATE_PREFIX}{descriptor.name}")
            names.add(f"{_CALL_PREFIX}{descriptor.name}")
        return sorted(names)

    def __repr__(self) -> str:
        return f"Session(network={self.network!r}, shard={self.shard}, endpoint={self.endpoint!r})"


def _bound_method(action: Any, descriptor: MethodDescriptor, name: str) -> Any:
    def method(*args: Any, **kwargs: Any) -> Any:
        return action(descriptor.name, *args, **kwargs)

    method.__name__ = name
    method.__qualname__ = f"Session.{name}"
    method.__doc__ = f"{descriptor.signature()}: {descriptor.summary}"
    return method
