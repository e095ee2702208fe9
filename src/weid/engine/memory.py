"""In-memory ledger engine used for local runs and tests."""

import logging
import threading
import time
from dataclasses import dataclass

from weid.engine.base import LedgerEngine
from weid.error_code import ErrorCode
from weid.exceptions import DocumentConflictError, PrivateKeyIllegalError
from weid.models import AuthenticationProperty, WeIdDocument, WeIdDocumentMetadata
from weid.response import ResponseData, TransactionInfo
from weid.validators import is_private_key_length_valid
from weid.weid_utils import (
    convert_weid_to_address,
    default_id,
    hash_hex,
    public_key_from_private,
    to_multibase,
)

LOGGER = logging.getLogger(__name__)


@dataclass
class _Record:
    document: WeIdDocument
    metadata: WeIdDocumentMetadata


class InMemoryLedgerEngine(LedgerEngine):
    """Ledger engine keeping documents in process memory.

    Writes are serialized by a lock and must be signed by a private key whose
    public key is one of the document's current authentication keys.
    """

    def __init__(self):
        self._records: dict[str, _Record] = {}
        self._order: list[str] = []
        self._block_number = 0
        self._lock = threading.RLock()

    def _next_transaction(self, operation: str, address: str) -> TransactionInfo:
        self._block_number += 1
        block_hash = "0x" + hash_hex(f"block:{self._block_number}")
        return TransactionInfo(
            transaction_hash="0x" + hash_hex(f"{operation}:{address}:{self._block_number}"),
            block_hash=block_hash,
            block_number=self._block_number,
            transaction_index=0,
        )

    @staticmethod
    def _signer_multibase(private_key: str) -> str:
        if not is_private_key_length_valid(private_key):
            raise PrivateKeyIllegalError()
        return to_multibase(public_key_from_private(private_key))

    def create_weid(self, weid: str, public_key: str, private_key: str) -> ResponseData[bool]:
        self._signer_multibase(private_key)
        address = convert_weid_to_address(weid)
        public_key_multibase = to_multibase(public_key)
        document = WeIdDocument(
            id=weid,
            authentication=[
                AuthenticationProperty(
                    id=default_id(weid, public_key_multibase, "keys-"),
                    controller=weid,
                    publicKeyMultibase=public_key_multibase,
                )
            ],
        )
        with self._lock:
            if address in self._records:
                return ResponseData(False, ErrorCode.WEID_ALREADY_EXIST)
            now = int(time.time())
            self._records[address] = _Record(
                document, WeIdDocumentMetadata(created=now, updated=now)
            )
            self._order.append(weid)
            transaction_info = self._next_transaction("create", address)
        LOGGER.info("Created %s in block %s", weid, transaction_info.block_number)
        return ResponseData(True, ErrorCode.SUCCESS, transaction_info)

    def _record(self, weid: str) -> _Record | None:
        return self._records.get(convert_weid_to_address(weid))

    def get_weid_document(self, weid: str) -> ResponseData[WeIdDocument]:
        with self._lock:
            record = self._record(weid)
            if record is None:
                return ResponseData(None, ErrorCode.WEID_DOES_NOT_EXIST)
            return ResponseData(record.document.model_copy(deep=True))

    def get_weid_document_metadata(self, weid: str) -> ResponseData[WeIdDocumentMetadata]:
        with self._lock:
            record = self._record(weid)
            if record is None:
                return ResponseData(None, ErrorCode.WEID_DOES_NOT_EXIST)
            return ResponseData(record.metadata.model_copy())

    def is_weid_exist(self, weid: str) -> ResponseData[bool]:
        with self._lock:
            return ResponseData(self._record(weid) is not None)

    def is_deactivated(self, weid: str) -> ResponseData[bool]:
        with self._lock:
            record = self._record(weid)
            return ResponseData(record is not None and record.metadata.deactivated)

    def _authorize(self, record: _Record, private_key: str) -> ErrorCode:
        signer = self._signer_multibase(private_key)
        if record.metadata.deactivated:
            return ErrorCode.WEID_HAS_BEEN_DEACTIVATED
        keys = {auth.publicKeyMultibase for auth in record.document.authentication}
        if signer not in keys:
            return ErrorCode.WEID_PRIVATEKEY_DOES_NOT_MATCH
        return ErrorCode.SUCCESS

    def update_weid(
        self,
        document: WeIdDocument,
        address: str,
        private_key: str,
        expected_fingerprint: str | None = None,
    ) -> ResponseData[bool]:
        with self._lock:
            record = self._records.get(address)
            if record is None:
                return ResponseData(False, ErrorCode.WEID_DOES_NOT_EXIST)
            error = self._authorize(record, private_key)
            if error is not ErrorCode.SUCCESS:
                return ResponseData(False, error)
            if (
                expected_fingerprint is not None
                and record.document.fingerprint() != expected_fingerprint
            ):
                raise DocumentConflictError(f"Document at {address} changed since it was read")
            record.document = document.model_copy(deep=True)
            record.metadata.updated = int(time.time())
            record.metadata.versionId += 1
            transaction_info = self._next_transaction("update", address)
        return ResponseData(True, ErrorCode.SUCCESS, transaction_info)

    def deactivate_weid(self, weid: str, private_key: str) -> ResponseData[bool]:
        address = convert_weid_to_address(weid)
        with self._lock:
            record = self._records.get(address)
            if record is None:
                return ResponseData(False, ErrorCode.WEID_DOES_NOT_EXIST)
            error = self._authorize(record, private_key)
            if error is not ErrorCode.SUCCESS:
                return ResponseData(False, error)
            record.metadata.deactivated = True
            record.metadata.updated = int(time.time())
            transaction_info = self._next_transaction("deactivate", address)
        LOGGER.info("Deactivated %s", weid)
        return ResponseData(True, ErrorCode.SUCCESS, transaction_info)

    def get_weid_list(self, first: int, last: int) -> ResponseData[list[str]]:
        if first < 0 or last < first:
            return ResponseData(None, ErrorCode.ILLEGAL_INPUT)
        with self._lock:
            return ResponseData(self._order[first : last + 1])

    def get_weid_count(self) -> ResponseData[int]:
        with self._lock:
            return ResponseData(len(self._order))
