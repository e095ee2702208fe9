"""Read path: document fetches and existence/deactivation queries."""

import json
import logging

from weid.config import WeIdConfig
from weid.engine.base import LedgerEngine
from weid.error_code import ErrorCode
from weid.exceptions import WeIdError
from weid.models import WeIdDocument, WeIdDocumentMetadata
from weid.response import ResponseData
from weid.validators import to_canonical_weid

LOGGER = logging.getLogger(__name__)

WEID_DOC_PROTOCOL_VERSION = "https://github.com/WeBankFinTech/WeIdentity/blob/master/context/v1"


class WeIdAccessor:
    """Queries the ledger engine for WeIdentity DID documents.

    Nothing is cached: every call consults the engine. Faults raised by the
    engine are logged and returned in the envelope, never raised. DIDs reach
    the engine in canonical form for the configured chain, and a DID naming
    another chain is WEID_INVALID.
    """

    def __init__(self, engine: LedgerEngine, config: WeIdConfig | None = None):
        self.engine = engine
        self.config = config or WeIdConfig()

    def _call_engine(self, operation: str, call, *args, failed=None) -> ResponseData:
        try:
            return call(*args)
        except WeIdError as err:
            LOGGER.error("[%s] ledger engine failed: %s", operation, err)
            return ResponseData(failed, err.error_code)
        except Exception:
            LOGGER.exception("[%s] ledger engine failed with exception.", operation)
            return ResponseData(failed, ErrorCode.UNKNOW_ERROR)

    def canonical_weid(self, weid) -> str | None:
        """The stored spelling of weid on the configured chain, None if it has none."""
        return to_canonical_weid(weid, self.config.chain_id)

    def get_weid_document(self, weid: str) -> ResponseData[WeIdDocument]:
        canonical = self.canonical_weid(weid)
        if canonical is None:
            LOGGER.error("Input weId : %s is invalid.", weid)
            return ResponseData(None, ErrorCode.WEID_INVALID)
        return self._call_engine("getWeIdDocument", self.engine.get_weid_document, canonical)

    def get_weid_document_metadata(self, weid: str) -> ResponseData[WeIdDocumentMetadata]:
        canonical = self.canonical_weid(weid)
        if canonical is None:
            LOGGER.error("Input weId : %s is invalid.", weid)
            return ResponseData(None, ErrorCode.WEID_INVALID)
        return self._call_engine(
            "getWeIdDocumentMetadata", self.engine.get_weid_document_metadata, canonical
        )

    def get_weid_document_json(self, weid: str) -> ResponseData[str]:
        """Pretty-printed document JSON with the protocol context as its first field."""
        response = self.get_weid_document(weid)
        if response.result is None:
            return ResponseData(None, response.error)
        body = {"@context": WEID_DOC_PROTOCOL_VERSION}
        body.update(response.result.model_dump(by_alias=True))
        return ResponseData(json.dumps(body, indent=4), response.error)

    def is_weid_exist(self, weid: str) -> ResponseData[bool]:
        canonical = self.canonical_weid(weid)
        if canonical is None:
            LOGGER.error("[isWeIdExist] check weid failed. weid : %s is invalid.", weid)
            return ResponseData(False, ErrorCode.WEID_INVALID)
        return self._call_engine("isWeIdExist", self.engine.is_weid_exist, canonical, failed=False)

    def is_deactivated(self, weid: str) -> ResponseData[bool]:
        canonical = self.canonical_weid(weid)
        if canonical is None:
            LOGGER.error("[isDeactivated] check weid failed. weid : %s is invalid.", weid)
            return ResponseData(False, ErrorCode.WEID_INVALID)
        return self._call_engine(
            "isDeactivated", self.engine.is_deactivated, canonical, failed=False
        )
