from weid.models import (
    AuthenticationProperty,
    ServiceProperty,
    WeIdDocument,
    WeIdDocumentMetadata,
)


def _text(value) -> str:
    if isinstance(value, str):
        return value
    return bytes(value).decode("utf-8", errors="replace")


def document_from_chain(weid: str, details: dict) -> WeIdDocument:
    authentication = []
    for item in details.get("authentication", []):
        authentication.append(
            AuthenticationProperty(
                id=_text(item["id"]),
                controller=_text(item.get("controller") or weid),
                publicKeyMultibase=_text(item["public_key_multibase"]),
            )
        )
    services = []
    for service in details.get("services", []):
        services.append(
            ServiceProperty(
                id=_text(service["id"]),
                type=_text(service["service_type"]),
                serviceEndpoint=_text(service["endpoint"]),
            )
        )
    return WeIdDocument(id=weid, authentication=authentication, service=services)


def metadata_from_chain(details: dict) -> WeIdDocumentMetadata:
    return WeIdDocumentMetadata(
        created=details.get("created", 0),
        updated=details.get("updated", 0),
        deactivated=bool(details.get("deactivated", False)),
        versionId=details.get("version", 1),
    )
