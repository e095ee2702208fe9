"""Exceptions raised by ledger engines and codecs, each carrying an ErrorCode."""

from weid.error_code import ErrorCode


class WeIdError(Exception):
    default_error_code = ErrorCode.UNKNOW_ERROR

    def __init__(self, message: str | None = None, error_code: ErrorCode | None = None):
        self.error_code = error_code or self.default_error_code
        super().__init__(message or self.error_code.message)


class PrivateKeyIllegalError(WeIdError):
    default_error_code = ErrorCode.WEID_PRIVATEKEY_INVALID


class LoadContractError(WeIdError):
    default_error_code = ErrorCode.LOAD_CONTRACT_FAILED


class DocumentConflictError(WeIdError):
    default_error_code = ErrorCode.WEID_DOCUMENT_CONFLICT


class TransactionError(WeIdError):
    default_error_code = ErrorCode.TRANSACTION_EXECUTE_ERROR
