from __future__ import annotations

import re
from typing import Any, Optional

import requests
from mcp.shared.exceptions import McpError
from mcp.types import (
    INTERNAL_ERROR,
    INVALID_PARAMS,
    INVALID_REQUEST,
    METHOD_NOT_FOUND,
    ErrorData,
)


class ConfigError(RuntimeError):
    """Startup configuration is missing or invalid."""


# Protocol-level errors. These reach the client as JSON-RPC errors, never as
# tool results.

def invalid_request(message: str) -> McpError:
    return McpError(ErrorData(code=INVALID_REQUEST, message=message))


def method_not_found(message: str) -> McpError:
    return McpError(ErrorData(code=METHOD_NOT_FOUND, message=message))


def invalid_params(message: str) -> McpError:
    return McpError(ErrorData(code=INVALID_PARAMS, message=message))


def internal_error(message: str) -> McpError:
    return McpError(ErrorData(code=INTERNAL_ERROR, message=message))


def upstream_error_message(
    exc: requests.RequestException,
    field: str,
    skip_empty: bool = True,
) -> str:
    """Best human-readable reason for a failed upstream call.

    Prefers ``field`` from the JSON error body (Google uses ``error_message``,
    RapidAPI providers use ``message``), falling back to the exception text
    with the ``key`` query parameter masked.
    With ``skip_empty=False`` an empty-string body message is kept as is.
    """
    response: Optional[requests.Response] = getattr(exc, "response", None)
    if response is not None:
        try:
            body: Any = response.json()
        except ValueError:
            body = None
        if isinstance(body, dict):
            value = body.get(field)
            if value is not None and (value or not skip_empty):
                return str(value)
    return redact_secrets(str(exc))


_KEY_PARAM = re.compile(r"([?&]key=)[^&\s'\")]+")


def redact_secrets(text: str) -> str:
    """Mask the ``key`` query parameter in URLs that requests puts into its messages."""
    return _KEY_PARAM.sub(r"\1***", text)
