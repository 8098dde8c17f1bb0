__all__ = [
    # Session
    "Session",
    "ErrorAccumulator",
    "ValidatedCall",
    # Configuration
    "ClientConfig",
    "DEFAULT_NODES",
    "load_config",
    "load_node_table",
    "resolve_endpoint",
    # Methods
    "MethodDescriptor",
    "MethodRegistry",
    "ParamSpec",
    "REGISTRY",
    # Wire
    "CallResult",
    "EmptyResponse",
    "HttpTransport",
    "RawResponse",
    "TransportError",
    "build_envelope",
    # Errors
    "HarmonyRpcError",
    "ConfigError",
    "RpcTransportError",
    "UnknownMethodError",
    # Helpers
    "atto_to_one",
]

from loguru import logger

from .config import DEFAULT_NODES, ClientConfig, load_config, load_node_table, resolve_endpoint
from .errors import ConfigError, HarmonyRpcError, RpcTransportError, UnknownMethodError
from .methods.catalog import REGISTRY
from .methods.params import MethodDescriptor, MethodRegistry, ParamSpec
from .rpc.envelope import build as build_envelope
from .rpc.transport import CallResult, EmptyResponse, HttpTransport, RawResponse, TransportError
from .session import ErrorAccumulator, Session, ValidatedCall
from .utils import atto_to_one

# Library logging stays silent unless an application opts in.
logger.disable("harmony_rpc")
