from dataclasses import asdict, dataclass
from typing import Any, Generic, TypeVar, Union

from weid.error_code import ErrorCode

T = TypeVar("T")


@dataclass(frozen=True)
class TransactionInfo:
    transaction_hash: str
    block_hash: str | None = None
    block_number: int | None = None
    transaction_index: int | None = None


@dataclass
class ResponseData(Generic[T]):
    """Uniform result envelope returned by every service operation."""

    result: T | None = None
    error: ErrorCode = ErrorCode.SUCCESS
    transaction_info: TransactionInfo | None = None

    @property
    def error_code(self) -> int:
        return self.error.code

    @property
    def error_message(self) -> str:
        return self.error.message

    @property
    def is_success(self) -> bool:
        return self.error is ErrorCode.SUCCESS

    def to_dict(self) -> dict[str, Any]:
        result = self.result
        if hasattr(result, "model_dump"):
            result = result.model_dump(by_alias=True)
        return {
            "result": result,
            "errorCode": self.error_code,
            "errorMessage": self.error_message,
            "transactionInfo": asdict(self.transaction_info) if self.transaction_info else None,
        }


@dataclass(frozen=True)
class Ok(Generic[T]):
    value: T


@dataclass(frozen=True)
class Err:
    error: ErrorCode

    def to_response(self, result: Any = None) -> ResponseData:
        return ResponseData(result, self.error)


Result = Union[Ok[T], Err]
