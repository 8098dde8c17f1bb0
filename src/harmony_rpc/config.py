"""
Client configuration: node endpoint table and session defaults.

Settings come from the environment, optionally seeded from
``~/.harmony-rpc/.env``:

- HARMONY_NETWORK            network name from the node table (default: mainnet)
- HARMONY_SHARD              shard index on that network (default: 0)
- HARMONY_DEFAULT_PAGE_SIZE  page size used when a paged method gets none (default: 10)
- HARMONY_MAX_PAGE_SIZE      largest page size a caller may request (default: 100)
- HARMONY_TIMEOUT            HTTP timeout in seconds (default: 30)
- HARMONY_NODES_FILE         JSON file with extra networks / shard URLs

A nodes file maps network names to shard-index -> URL objects::

    {"customnet": {"0": "https://localhost:10443", "1": "https://192.168.50.4:65447/"}}

Its entries are merged over the built-in table, so a file may add networks or
replace official endpoints with private nodes.
"""

from __future__ import annotations

import json
import os
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Any, Mapping, Optional

import jsonschema
from dotenv import load_dotenv
from jsonschema import FormatChecker

from .errors import ConfigError

HARMONY_RPC_DIR = Path.home() / ".harmony-rpc"
HARMONY_RPC_ENV = HARMONY_RPC_DIR / ".env"

NodeTable = Mapping[str, Mapping[int, str]]

DEFAULT_NODES: NodeTable = MappingProxyType(
    {
        "mainnet": MappingProxyType(
            {
                0: "https://a.api.s0.t.hmny.io/",
                1: "https://rpc.s1.t.hmny.io/",
                2: "https://rpc.s2.t.hmny.io/",
                3: "https://rpc.s3.t.hmny.io/",
            }
        ),
        "testnet": MappingProxyType(
            {
                0: "https://rpc.s0.b.hmny.io/",
                1: "https://rpc.s1.b.hmny.io/",
                2: "https://rpc.s2.b.hmny.io/",
                3: "https://rpc.s3.b.hmny.io/",
            }
        ),
    }
)

DEFAULT_NETWORK = "mainnet"
DEFAULT_SHARD = 0
DEFAULT_PAGE_SIZE = 10
MAX_PAGE_SIZE = 100
DEFAULT_TIMEOUT = 30.0

NODE_TABLE_SCHEMA: dict[str, Any] = {
    "$schema": "https://json-schema.org/draft/2020-12/schema",
    "type": "object",
    "minProperties": 1,
    "additionalProperties": {
        "type": "object",
        "minProperties": 1,
        "propertyNames": {"pattern": "^[0-9]+$"},
        "additionalProperties": {"type": "string", "format": "uri", "pattern": "^https?://"},
    },
}


def resolve_endpoint(nodes: NodeTable, network: str, shard: int) -> str:
    """Look up the URL serving ``shard`` on ``network``."""
    shards = nodes.get(network)
    if shards is None:
        known = ", ".join(sorted(nodes)) or "none"
        raise ConfigError(f"Unknown network {network!r} (configured: {known})")
    url = shards.get(shard)
    if not url:
        known = ", ".join(str(index) for index in sorted(shards)) or "none"
        raise ConfigError(f"Shard {shard} is not configured for {network} (configured: {known})")
    return url


def load_node_table(path: Path) -> dict[str, dict[int, str]]:
    """Read and schema-check a JSON nodes file."""
    try:
        with path.open("r", encoding="utf-8") as f:
            payload = json.load(f)
    except FileNotFoundError:
        raise ConfigError(f"Nodes file not found: {path}") from None
    except json.JSONDecodeError as exc:
        raise ConfigError(f"Nodes file is not valid JSON: {path}: {exc}") from None

    validator_cls = jsonschema.validators.validator_for(NODE_TABLE_SCHEMA)
    validator = validator_cls(NODE_TABLE_SCHEMA, format_checker=FormatChecker())
    errors = sorted(validator.iter_errors(payload), key=lambda e: list(e.path))
    if errors:
        raise ConfigError(
            f"Nodes file failed validation: {path}",
            errors=[_format_schema_error(err) for err in errors],
        )
    return {
        network: {int(shard): url for shard, url in shards.items()}
        for network, shards in payload.items()
    }


def merge_node_tables(base: NodeTable, extra: NodeTable) -> dict[str, dict[int, str]]:
    merged = {network: dict(shards) for network, shards in base.items()}
    for network, shards in extra.items():
        merged.setdefault(network, {}).update(shards)
    return merged


def _format_schema_error(error: jsonschema.ValidationError) -> str:
    location = "/".join(str(part) for part in error.path) or "<root>"
    return f"{location}: {error.message}"


@dataclass(frozen=True)
class ClientConfig:
    nodes: NodeTable = field(default_factory=lambda: DEFAULT_NODES)
    network: str = DEFAULT_NETWORK
    shard: int = DEFAULT_SHARD
    default_page_size: int = DEFAULT_PAGE_SIZE
    max_page_size: int = MAX_PAGE_SIZE
    timeout: float = DEFAULT_TIMEOUT

    def __post_init__(self) -> None:
        if self.max_page_size < 1:
            raise ConfigError(f"max_page_size must be positive, got {self.max_page_size}")
        if not 0 < self.default_page_size <= self.max_page_size:
            raise ConfigError(
                f"default_page_size must be between 1 and {self.max_page_size}, "
                f"got {self.default_page_size}"
            )
        if self.timeout <= 0:
            raise ConfigError(f"timeout must be positive, got {self.timeout}")

    def endpoint(self) -> str:
        return resolve_endpoint(self.nodes, self.network, self.shard)


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise ConfigError(f"{name} must be an integer, got {raw!r}") from None


def _env_float(name: str, default: float) -> float:
    raw = os.environ.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError:
        raise ConfigError(f"{name} must be a number, got {raw!r}") from None


def load_config(env_path: Optional[Path] = None, **overrides: Any) -> ClientConfig:
    """
    Build a ClientConfig from the environment.

    Args:
        env_path: Path to a .env file (default: ~/.harmony-rpc/.env)
        **overrides: Explicit values that win over the environment; ``None``
            values are ignored

    Returns:
        The resolved configuration

    Raises:
        ConfigError: If a setting is malformed
    """
    env_path = env_path or HARMONY_RPC_ENV
    if env_path.exists():
        load_dotenv(env_path, override=False)

    nodes: NodeTable = DEFAULT_NODES
    nodes_file = os.environ.get("HARMONY_NODES_FILE")
    if nodes_file:
        nodes = merge_node_tables(DEFAULT_NODES, load_node_table(Path(nodes_file).expanduser()))

    settings: dict[str, Any] = {
        "nodes": nodes,
        "network": os.environ.get("HARMONY_NETWORK") or DEFAULT_NETWORK,
        "shard": _env_int("HARMONY_SHARD", DEFAULT_SHARD),
        "default_page_size": _env_int("HARMONY_DEFAULT_PAGE_SIZE", DEFAULT_PAGE_SIZE),
        "max_page_size": _env_int("HARMONY_MAX_PAGE_SIZE", MAX_PAGE_SIZE),
        "timeout": _env_float("HARMONY_TIMEOUT", DEFAULT_TIMEOUT),
    }
    settings.update({key: value for key, value in overrides.items() if value is not None})
    return ClientConfig(**settings)
