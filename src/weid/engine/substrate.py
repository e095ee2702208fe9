"""Ledger engine backed by a Substrate node running the WeId pallet."""

import logging

from substrateinterface import SubstrateInterface

from weid.config import WeIdConfig
from weid.did_resolver import document_from_chain, metadata_from_chain
from weid.engine.base import LedgerEngine
from weid.error_code import ErrorCode
from weid.exceptions import DocumentConflictError, PrivateKeyIllegalError
from weid.models import WeIdDocument, WeIdDocumentMetadata
from weid.response import ResponseData
from weid.substrate_client import (
    build_create_weid_payload,
    build_update_weid_payload,
    create_substrate,
    create_weid,
    rpc_result,
    sign_payload,
    update_weid,
)
from weid.tx_logger import log_receipt, receipt_succeeded, transaction_info
from weid.validators import is_private_key_length_valid
from weid.weid_utils import convert_weid_to_address, public_key_to_bytes

LOGGER = logging.getLogger(__name__)

PALLET_ERRORS = {
    "WeIdAlreadyExists": ErrorCode.WEID_ALREADY_EXIST,
    "WeIdNotFound": ErrorCode.WEID_DOES_NOT_EXIST,
    "WeIdDeactivated": ErrorCode.WEID_HAS_BEEN_DEACTIVATED,
    "BadSignature": ErrorCode.WEID_PRIVATEKEY_DOES_NOT_MATCH,
}


def _pallet_error_name(receipt) -> str | None:
    error = getattr(receipt, "error_message", None)
    if isinstance(error, dict):
        return error.get("name")
    return None


class SubstrateLedgerEngine(LedgerEngine):
    def __init__(self, substrate: SubstrateInterface, account):
        self.substrate = substrate
        self.account = account

    @classmethod
    def from_config(cls, config: WeIdConfig, account) -> "SubstrateLedgerEngine":
        return cls(create_substrate(config.rpc_url), account)

    @staticmethod
    def _sign(private_key: str, payload: bytes) -> bytes:
        if not is_private_key_length_valid(private_key):
            raise PrivateKeyIllegalError()
        return sign_payload(private_key, payload)

    def _outcome(self, receipt) -> ResponseData[bool]:
        log_receipt(receipt)
        info = transaction_info(receipt)
        if receipt_succeeded(receipt):
            return ResponseData(True, ErrorCode.SUCCESS, info)
        name = _pallet_error_name(receipt)
        if name == "DocumentConflict":
            raise DocumentConflictError(f"Extrinsic {receipt.extrinsic_hash} lost an update race")
        return ResponseData(False, PALLET_ERRORS.get(name, ErrorCode.TRANSACTION_EXECUTE_ERROR), info)

    def create_weid(self, weid: str, public_key: str, private_key: str) -> ResponseData[bool]:
        address_bytes = convert_weid_to_address(weid).encode("utf-8")
        public_key_bytes = public_key_to_bytes(public_key)
        signature = self._sign(
            private_key, build_create_weid_payload(address_bytes, public_key_bytes)
        )
        receipt = create_weid(
            self.substrate, self.account, address_bytes, public_key_bytes, signature
        )
        return self._outcome(receipt)

    def update_weid(
        self,
        document: WeIdDocument,
        address: str,
        private_key: str,
        expected_fingerprint: str | None = None,
    ) -> ResponseData[bool]:
        address_bytes = address.encode("utf-8")
        document_json = document.model_dump_json().encode("utf-8")
        fingerprint = (expected_fingerprint or "").encode("ascii")
        signature = self._sign(
            private_key, build_update_weid_payload(address_bytes, document_json, fingerprint)
        )
        receipt = update_weid(
            self.substrate, self.account, address_bytes, document_json, fingerprint, signature
        )
        return self._outcome(receipt)

    def get_weid_document(self, weid: str) -> ResponseData[WeIdDocument]:
        details = rpc_result(self.substrate, "weid_getDocument", [weid])
        if not details:
            return ResponseData(None, ErrorCode.WEID_DOES_NOT_EXIST)
        return ResponseData(document_from_chain(weid, details))

    def get_weid_document_metadata(self, weid: str) -> ResponseData[WeIdDocumentMetadata]:
        details = rpc_result(self.substrate, "weid_getDocumentMetadata", [weid])
        if not details:
            return ResponseData(None, ErrorCode.WEID_DOES_NOT_EXIST)
        return ResponseData(metadata_from_chain(details))

    def is_weid_exist(self, weid: str) -> ResponseData[bool]:
        details = rpc_result(self.substrate, "weid_getDocumentMetadata", [weid])
        return ResponseData(bool(details))

    def is_deactivated(self, weid: str) -> ResponseData[bool]:
        details = rpc_result(self.substrate, "weid_getDocumentMetadata", [weid])
        return ResponseData(bool(details) and bool(details.get("deactivated", False)))

    def get_weid_list(self, first: int, last: int) -> ResponseData[list[str]]:
        weids = rpc_result(self.substrate, "weid_getWeIdList", [first, last])
        if weids is None:
            LOGGER.error("weid_getWeIdList returned no result for [%s, %s]", first, last)
            return ResponseData(None, ErrorCode.TRANSACTION_EXECUTE_ERROR)
        return ResponseData([str(weid) for weid in weids])

    def get_weid_count(self) -> ResponseData[int]:
        count = rpc_result(self.substrate, "weid_getWeIdCount", [])
        if count is None:
            LOGGER.error("weid_getWeIdCount returned no result")
            return ResponseData(None, ErrorCode.TRANSACTION_EXECUTE_ERROR)
        return ResponseData(int(count))
