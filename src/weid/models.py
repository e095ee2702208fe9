"""WeIdentity DID document, metadata and request/response models."""

import hashlib
import json

from pydantic import BaseModel, ConfigDict, Field


class AuthenticationProperty(BaseModel):
    """Authentication method of a WeIdentity DID document."""

    id: str
    controller: str
    publicKeyMultibase: str


class ServiceProperty(BaseModel):
    """Service endpoint of a WeIdentity DID document."""

    id: str
    type: str
    serviceEndpoint: str


class WeIdDocument(BaseModel):
    """WeIdentity DID document."""

    model_config = ConfigDict(extra="allow")

    id: str
    authentication: list[AuthenticationProperty] = Field(default_factory=list)
    service: list[ServiceProperty] = Field(default_factory=list)

    def fingerprint(self) -> str:
        """Digest of the canonical JSON form, used for compare-and-swap updates."""
        canonical = json.dumps(self.model_dump(), sort_keys=True, separators=(",", ":"))
        return hashlib.blake2b(canonical.encode("utf-8"), digest_size=32).hexdigest()


class WeIdDocumentMetadata(BaseModel):
    """Ledger-owned metadata of a WeIdentity DID document."""

    created: int
    updated: int
    deactivated: bool = False
    versionId: int = 1


class WeIdPrivateKey(BaseModel):
    private_key: str


class WeIdPublicKey(BaseModel):
    public_key: str


class CreateWeIdArgs(BaseModel):
    weid_private_key: WeIdPrivateKey | None = None
    public_key: str | None = None


class AuthenticationArgs(BaseModel):
    id: str | None = None
    controller: str | None = None
    public_key: str | None = None


class ServiceArgs(BaseModel):
    id: str | None = None
    type: str | None = None
    service_endpoint: str | None = None


class CreateWeIdDataResult(BaseModel):
    weid: str
    user_weid_public_key: WeIdPublicKey
    user_weid_private_key: WeIdPrivateKey


class WeIdListResult(BaseModel):
    weid_list: list[str | None] = Field(default_factory=list)
    error_code_list: list[int] = Field(default_factory=list)
