"""Document transforms for authentication and service changes.

Each function returns Ok(new_document) or Err(error) and leaves its input
document untouched.
"""

import logging

from weid.error_code import ErrorCode
from weid.models import AuthenticationProperty, ServiceProperty, WeIdDocument
from weid.response import Err, Ok, Result

LOGGER = logging.getLogger(__name__)


def append_authentication(
    document: WeIdDocument, authentication: AuthenticationProperty
) -> Result[WeIdDocument]:
    for existing in document.authentication:
        if existing.publicKeyMultibase == authentication.publicKeyMultibase:
            return Err(ErrorCode.AUTHENTICATION_PUBLIC_KEY_MULTIBASE_EXISTS)
        if existing.id == authentication.id:
            return Err(ErrorCode.AUTHENTICATION_METHOD_ID_EXISTS)
    updated = document.model_copy(deep=True)
    updated.authentication.append(authentication)
    return Ok(updated)


def _find(entries, attribute: str, value: str | None) -> int | None:
    if not value:
        return None
    for index, entry in enumerate(entries):
        if getattr(entry, attribute) == value:
            return index
    return None


def remove_authentication(
    document: WeIdDocument,
    public_key_multibase: str | None = None,
    method_id: str | None = None,
) -> Result[WeIdDocument]:
    """Remove the first entry matching the key, or failing that the id."""
    index = _find(document.authentication, "publicKeyMultibase", public_key_multibase)
    if index is None:
        index = _find(document.authentication, "id", method_id)
    if index is None:
        return Err(ErrorCode.AUTHENTICATION_METHOD_NOT_EXISTS)
    updated = document.model_copy(deep=True)
    del updated.authentication[index]
    return Ok(updated)


def append_service(
    document: WeIdDocument, service: ServiceProperty, id_is_default: bool = False
) -> Result[WeIdDocument]:
    collides = _find(document.service, "id", service.id) is not None
    if collides and not id_is_default:
        return Err(ErrorCode.SERVICE_METHOD_ID_EXISTS)
    if collides:
        # default ids are appended even when they collide
        LOGGER.warning("Default service id %s already present in %s", service.id, document.id)
    updated = document.model_copy(deep=True)
    updated.service.append(service)
    return Ok(updated)
