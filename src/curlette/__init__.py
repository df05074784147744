__version__ = "0.1.0"

from .args import RequestSpec, parse_args
from .config import ClientConfig
from .errors import (
    BuildError,
    CurletteError,
    InvalidURLError,
    LoggingConfigError,
    UnsupportedMethodError,
)
from .request import SUPPORTED_METHODS, PreparedCall, build_request, send_request
from .response import render_response, trace_request, trace_response

__all__ = [
    "BuildError",
    "ClientConfig",
    "CurletteError",
    "InvalidURLError",
    "LoggingConfigError",
    "PreparedCall",
    "RequestSpec",
    "SUPPORTED_METHODS",
    "UnsupportedMethodError",
    "build_request",
    "parse_args",
    "render_response",
    "send_request",
    "trace_request",
    "trace_response",
]
