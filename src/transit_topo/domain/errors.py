"""Error taxonomy shared by the read and write paths."""

from __future__ import annotations

from dataclasses import dataclass


class TransitTopoError(RuntimeError):
    """Base class for errors raised while reconciling lines."""


class SchemaError(TransitTopoError):
    """Raised when a remote payload does not match the expected shape."""


class TransportError(TransitTopoError):
    """Raised when an HTTP call fails (network error or non-2xx status)."""


class NotFoundError(TransitTopoError):
    """Raised when the producer cannot be resolved to any label."""


@dataclass(slots=True, frozen=True)
class ApiMessage:
    name: str
    parameters: tuple[str, ...] = ()


class ApiError(TransitTopoError):
    """Raised when the write API rejects a request with an error payload."""

    def __init__(self, code: str, info: str, messages: tuple[ApiMessage, ...] = ()) -> None:
        super().__init__(f"{code}: {info}")
        self.code = code
        self.info = info
        self.messages = messages

    def describe(self) -> str:
        """Return the error with its machine-readable messages appended."""

        if not self.messages:
            return str(self)
        details = "; ".join(
            f"{message.name}({', '.join(message.parameters)})" for message in self.messages
        )
        return f"{self} [{details}]"
