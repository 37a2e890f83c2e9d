"""Foundation layer: configuration and error model shared by every module."""

from .config import FetchbatchSettings, LoggingSettings, RuntimeSettings, clear_settings_cache, get_settings
from .errors import ContractViolation, ErrorCode, FetchError, MissingKeyError, ResourceContractError

__all__ = [
    # Config
    "FetchbatchSettings", "RuntimeSettings", "LoggingSettings", "get_settings", "clear_settings_cache",
    # Errors
    "ErrorCode", "FetchError", "MissingKeyError", "ResourceContractError", "ContractViolation",
]
