from weid.accessor import WeIdAccessor
from weid.config import WeIdConfig, load_config
from weid.error_code import ErrorCode
from weid.response import ResponseData, TransactionInfo
from weid.service import WeIdService

__all__ = [
    "ErrorCode",
    "ResponseData",
    "TransactionInfo",
    "WeIdAccessor",
    "WeIdConfig",
    "WeIdService",
    "load_config",
]
