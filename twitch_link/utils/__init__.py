"""Utility helpers for HTTP transport and error types."""

from .errors import ContractViolation, DecodeError, NotFoundError, TransportError, TwitchLinkError
from .http_client import HttpClient

__all__ = ["HttpClient", "TwitchLinkError", "TransportError", "NotFoundError", "DecodeError", "ContractViolation"]
