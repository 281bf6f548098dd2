"""Core types shared by every layer."""

from .config import DeployConfig, load_config_file
from .errors import ErrorCode
from .result import Err, Ok, Result

__all__ = [
    # config
    "DeployConfig",
    "load_config_file",
    # errors
    "ErrorCode",
    # result
    "Err",
    "Ok",
    "Result",
]
