from __future__ import annotations


class HarmonyRpcError(RuntimeError):
    exit_code: int = 1


class ConfigError(HarmonyRpcError, ValueError):
    exit_code = 2

    def __init__(self, message: str, errors: list[str] | None = None) -> None:
        super().__init__(message)
        self.errors = errors or []


class UnknownMethodError(HarmonyRpcError, LookupError):
    exit_code = 3


class RpcTransportError(HarmonyRpcError):
    """The HTTP round trip to the node could not be completed."""

    exit_code = 4

    def __init__(self, message: str, url: str = "", cause: BaseException | None = None) -> None:
        super().__init__(message)
        self.url = url
        self.cause = cause
