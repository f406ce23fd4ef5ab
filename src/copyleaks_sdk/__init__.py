"""Python SDK for the Copyleaks plagiarism-detection API."""

from ._version import __version__
from .api import CopyleaksApi
from .client import CopyleaksClient
from .config import CopyleaksConfig
from .exceptions import (
    CopyleaksAPIError,
    CopyleaksAuthError,
    CopyleaksConfigError,
    CopyleaksError,
    CopyleaksNetworkError,
    CopyleaksProtocolError,
    CopyleaksRateLimitError,
    CopyleaksResponseError,
    CopyleaksTimeoutError,
    CopyleaksValidationError,
)
from .headers import compose_headers
from .models import AccessToken, ProcessInfo, ProcessStatus, ScanResult
from .multipart import encode_file_body
from .request_options import RequestOptions

__all__ = [
    "__version__",
    "AccessToken",
    "CopyleaksAPIError",
    "CopyleaksApi",
    "CopyleaksAuthError",
    "CopyleaksClient",
    "CopyleaksConfig",
    "CopyleaksConfigError",
    "CopyleaksError",
    "CopyleaksNetworkError",
    "CopyleaksProtocolError",
    "CopyleaksRateLimitError",
    "CopyleaksResponseError",
    "CopyleaksTimeoutError",
    "CopyleaksValidationError",
    "ProcessInfo",
    "ProcessStatus",
    "RequestOptions",
    "ScanResult",
    "compose_headers",
    "encode_file_body",
]
