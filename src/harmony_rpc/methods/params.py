"""
Declarative method descriptors and the engine that interprets them.

A method is data: an RPC name plus an ordered tuple of ``ParamSpec``. One
generic engine binds caller arguments, validates them and lays them out into
the JSON-RPC ``params`` array, so adding a method never needs new code.

Layout: each parameter names the ``slot`` (index in the ``params`` array) it
lands in. Parameters with a ``key`` are collected into a JSON object at their
slot, which covers positional (``[addr, block]``), keyed
(``[{"address": ..., "pageIndex": ...}]``) and mixed
(``[block, {"fullTx": ...}]``) shapes.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Callable, Iterable, Iterator, Mapping, Optional

from ..errors import UnknownMethodError
from ..utils import python_name
from . import validators as v

_INT_TEXT_RE = re.compile(r"^-?[0-9]+$")


class _SessionPageSize:
    """Default marker resolved to the session's default page size at build time."""

    def __repr__(self) -> str:
        return "<session default page size>"


SESSION_PAGE_SIZE: Any = _SessionPageSize()


def _identity(value: Any) -> Any:
    return value


def as_int(value: Any) -> Any:
    """Coerce ints and integer text to ``int``; leave anything else untouched."""
    if isinstance(value, bool):
        return value
    if isinstance(value, int):
        return value
    if isinstance(value, str) and _INT_TEXT_RE.fullmatch(value):
        return int(value)
    return value


def page_index(page_number: Any) -> Any:
    """Convert a one-based page number to the node's zero-based page index.

    ``-1`` (all pages) passes through unchanged. Values that are not integers
    are returned as given.
    """
    number = as_int(page_number)
    if not isinstance(number, int) or isinstance(number, bool):
        return page_number
    if number == v.ALL_PAGES:
        return number
    return number - 1


@dataclass(frozen=True)
class ParamSpec:
    name: str
    check: v.Check
    rule: str
    required: bool = True
    slot: int = 0
    key: Optional[str] = None
    transform: Callable[[Any], Any] = _identity
    default: Any = None
    label: str = ""
    page_size: bool = False

    def __post_init__(self) -> None:
        if not self.label:
            object.__setattr__(self, "label", self.name.replace("_", " "))
        if self.required and self.default is not None:
            raise ValueError(f"required parameter {self.name!r} cannot have a default")

    def resolve_default(self, default_page_size: int) -> Any:
        if self.default is SESSION_PAGE_SIZE:
            return default_page_size
        return self.default

    def problems(self, value: Any, max_page_size: int) -> list[str]:
        if value is None:
            if self.required:
                return [f"{self.label}: value is required"]
            return []
        if not self.check(value):
            return [f"{self.label}: {self.rule}"]
        if self.page_size and int(value) > max_page_size:
            return [f"{self.label}: exceeds maximum page size of {max_page_size}"]
        return []


@dataclass(frozen=True)
class MethodDescriptor:
    rpc_method: str
    params: tuple[ParamSpec, ...] = ()
    section: str = ""
    summary: str = ""
    name: str = field(default="")

    def __post_init__(self) -> None:
        if not self.name:
            object.__setattr__(self, "name", python_name(self.rpc_method))
        names = [spec.name for spec in self.params]
        if len(set(names)) != len(names):
            raise ValueError(f"{self.rpc_method}: duplicate parameter names")
        keyed_slots = {spec.slot for spec in self.params if spec.key is not None}
        plain_slots = [spec.slot for spec in self.params if spec.key is None]
        if keyed_slots.intersection(plain_slots) or len(set(plain_slots)) != len(plain_slots):
            raise ValueError(f"{self.rpc_method}: conflicting parameter slots")
        used = keyed_slots.union(plain_slots)
        if used != set(range(len(used))):
            raise ValueError(f"{self.rpc_method}: parameter slots must be contiguous from 0")

    @property
    def param_names(self) -> tuple[str, ...]:
        return tuple(spec.name for spec in self.params)

    @property
    def slot_count(self) -> int:
        return len({spec.slot for spec in self.params})

    @property
    def style(self) -> str:
        """``none``, ``positional``, ``keyed`` or ``mixed``."""
        if not self.params:
            return "none"
        keyed = [spec.key is not None for spec in self.params]
        if not any(keyed):
            return "positional"
        if all(keyed) and self.slot_count == 1:
            return "keyed"
        return "mixed"

    def signature(self) -> str:
        parts = []
        for spec in self.params:
            parts.append(spec.name if spec.required else f"{spec.name}?")
        return f"{self.name}({', '.join(parts)})"


def bind_arguments(
    descriptor: MethodDescriptor, args: tuple[Any, ...], kwargs: Mapping[str, Any]
) -> dict[str, Any]:
    """Map positional and keyword arguments onto parameter names.

    Missing parameters are bound to ``None``. Surplus or unknown arguments are
    programming errors and raise ``TypeError``.
    """
    names = descriptor.param_names
    if len(args) > len(names):
        raise TypeError(
            f"{descriptor.name}() takes {len(names)} arguments but {len(args)} were given"
        )
    values = dict(zip(names, args))
    for key, value in kwargs.items():
        if key not in names:
            raise TypeError(f"{descriptor.name}() got an unexpected keyword argument {key!r}")
        if key in values:
            raise TypeError(f"{descriptor.name}() got multiple values for argument {key!r}")
        values[key] = value
    return {name: values.get(name) for name in names}


def validate_arguments(
    descriptor: MethodDescriptor, values: Mapping[str, Any], max_page_size: int
) -> list[str]:
    """Run every parameter check and return all diagnostics (empty when valid)."""
    problems: list[str] = []
    for spec in descriptor.params:
        problems.extend(spec.problems(values.get(spec.name), max_page_size))
    return problems


def build_params(
    descriptor: MethodDescriptor, values: Mapping[str, Any], default_page_size: int
) -> list[Any]:
    """Lay bound values out into the JSON-RPC ``params`` array.

    Defaults are filled for absent optional parameters. Keyed fields that are
    still ``None`` are left out of their object; positional slots keep ``None``.
    """
    slots: dict[int, Any] = {}
    for spec in descriptor.params:
        value = values.get(spec.name)
        if value is None:
            value = spec.resolve_default(default_page_size)
        if value is not None:
            value = spec.transform(value)
        if spec.key is None:
            slots[spec.slot] = value
            continue
        group = slots.setdefault(spec.slot, {})
        if value is not None:
            group[spec.key] = value
    return [slots[index] for index in range(descriptor.slot_count)]


class MethodRegistry:
    """Read-only lookup of descriptors by Python name or RPC method name."""

    def __init__(self, descriptors: Iterable[MethodDescriptor]) -> None:
        by_name: dict[str, MethodDescriptor] = {}
        by_rpc: dict[str, MethodDescriptor] = {}
        for descriptor in descriptors:
            if descriptor.name in by_name or descriptor.rpc_method in by_rpc:
                raise ValueError(f"duplicate method registration: {descriptor.rpc_method}")
            by_name[descriptor.name] = descriptor
            by_rpc[descriptor.rpc_method] = descriptor
        self._by_name = MappingProxyType(by_name)
        self._by_rpc = MappingProxyType(by_rpc)

    def get(self, method: str) -> MethodDescriptor:
        descriptor = self._by_name.get(method) or self._by_rpc.get(method)
        if descriptor is None:
            raise UnknownMethodError(f"Unsupported method: {method}")
        return descriptor

    def __contains__(self, method: object) -> bool:
        return method in self._by_name or method in self._by_rpc

    def __iter__(self) -> Iterator[MethodDescriptor]:
        return iter(self._by_name.values())

    def __len__(self) -> int:
        return len(self._by_name)

    def names(self) -> list[str]:
        return sorted(self._by_name)

    def sections(self) -> list[str]:
        return sorted({descriptor.section for descriptor in self})

    def in_section(self, section: str) -> list[MethodDescriptor]:
        return [descriptor for descriptor in self if descriptor.section == section]


# ---------------------------------------------------------------------------
# Parameter kinds
# ---------------------------------------------------------------------------

ONE_ADDRESS_RULE = "must be a one1 address (one1 followed by 38 lowercase alphanumeric characters)"
HEX_ADDRESS_RULE = "must be a hex address (0x followed by 40 hex digits)"
HEX_HASH_RULE = "must be a hash (0x followed by 64 hex digits)"
HEX_BLOB_RULE = "must be hex (optional 0x prefix followed by hex digits)"
STORAGE_SLOT_RULE = "must be a storage location (0x followed by 1 to 64 hex digits)"
POSITIVE_INT_RULE = "must be a positive integer"
NON_NEGATIVE_INT_RULE = "must be a non-negative integer"
PAGE_NUMBER_RULE = "must be a positive integer or -1 for all pages"
BOOL_RULE = "must be True or False"


def one_address(name: str, **options: Any) -> ParamSpec:
    return ParamSpec(name, v.is_one_address, ONE_ADDRESS_RULE, **options)


def hex_address(name: str, **options: Any) -> ParamSpec:
    return ParamSpec(name, v.is_hex_address, HEX_ADDRESS_RULE, **options)


def hex_hash(name: str, **options: Any) -> ParamSpec:
    return ParamSpec(name, v.is_hex_hash, HEX_HASH_RULE, **options)


def hex_blob(name: str, **options: Any) -> ParamSpec:
    return ParamSpec(name, v.is_hex_blob, HEX_BLOB_RULE, **options)


def storage_slot(name: str, **options: Any) -> ParamSpec:
    return ParamSpec(name, v.is_storage_slot, STORAGE_SLOT_RULE, **options)


def positive_int(name: str, **options: Any) -> ParamSpec:
    return ParamSpec(name, v.is_positive_int, POSITIVE_INT_RULE, transform=as_int, **options)


def non_negative_int(name: str, **options: Any) -> ParamSpec:
    return ParamSpec(name, v.is_non_negative_int, NON_NEGATIVE_INT_RULE, transform=as_int, **options)


def page_number(name: str = "page_number", **options: Any) -> ParamSpec:
    return ParamSpec(name, v.is_page_number, PAGE_NUMBER_RULE, transform=page_index, **options)


def page_size(name: str = "page_size", **options: Any) -> ParamSpec:
    options.setdefault("required", False)
    options.setdefault("default", SESSION_PAGE_SIZE)
    return ParamSpec(
        name, v.is_positive_int, POSITIVE_INT_RULE, transform=as_int, page_size=True, **options
    )


def flag(name: str, **options: Any) -> ParamSpec:
    options.setdefault("required", False)
    options.setdefault("default", False)
    return ParamSpec(name, v.is_flag, BOOL_RULE, **options)


def one_of(name: str, allowed: tuple[Any, ...], **options: Any) -> ParamSpec:
    rule = f"must be one of {', '.join(str(item) for item in allowed)}"
    return ParamSpec(name, v.is_one_of(allowed), rule, **options)
