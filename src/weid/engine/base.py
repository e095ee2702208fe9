"""Ledger engine contract consumed by the WeId service."""

from abc import ABC, abstractmethod

from weid.models import WeIdDocument, WeIdDocumentMetadata
from weid.response import ResponseData


class LedgerEngine(ABC):
    """Durable store of WeIdentity DID documents keyed by address.

    Implementations report expected outcomes through ResponseData and raise
    WeIdError subclasses for faults: PrivateKeyIllegalError when a key cannot
    sign, DocumentConflictError when a compare-and-swap update finds the stored
    document changed since it was read.
    """

    @abstractmethod
    def create_weid(self, weid: str, public_key: str, private_key: str) -> ResponseData[bool]:
        """Create the document for weid, seeded with public_key as authentication."""

    @abstractmethod
    def get_weid_document(self, weid: str) -> ResponseData[WeIdDocument]:
        """Fetch the current document."""

    @abstractmethod
    def get_weid_document_metadata(self, weid: str) -> ResponseData[WeIdDocumentMetadata]:
        """Fetch the document metadata."""

    @abstractmethod
    def is_weid_exist(self, weid: str) -> ResponseData[bool]:
        """Check whether a document exists."""

    @abstractmethod
    def is_deactivated(self, weid: str) -> ResponseData[bool]:
        """Check whether a document has been deactivated."""

    @abstractmethod
    def update_weid(
        self,
        document: WeIdDocument,
        address: str,
        private_key: str,
        expected_fingerprint: str | None = None,
    ) -> ResponseData[bool]:
        """Replace the stored document if its fingerprint equals expected_fingerprint."""

    @abstractmethod
    def get_weid_list(self, first: int, last: int) -> ResponseData[list[str]]:
        """List DIDs by creation index, first and last inclusive."""

    @abstractmethod
    def get_weid_count(self) -> ResponseData[int]:
        """Count created DIDs."""
