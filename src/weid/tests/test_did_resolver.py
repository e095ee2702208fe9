from weid.did_resolver import document_from_chain, metadata_from_chain

WEID = "did:weid:1:0x" + "22" * 20


def test_document_from_byte_arrays():
    details = {
        "authentication": [
            {"id": list(b"did#keys-1"), "public_key_multibase": list(b"zAbc")},
        ],
        "services": [
            {
                "id": list(b"did#svc"),
                "service_type": list(b"DIDComm"),
                "endpoint": "https://example.com",
            }
        ],
    }
    document = document_from_chain(WEID, details)
    assert document.id == WEID
    assert document.authentication[0].controller == WEID
    assert document.authentication[0].publicKeyMultibase == "zAbc"
    assert document.service[0].type == "DIDComm"
    assert document.service[0].serviceEndpoint == "https://example.com"


def test_empty_details():
    document = document_from_chain(WEID, {})
    assert document.authentication == []
    assert document.service == []


def test_metadata_defaults():
    metadata = metadata_from_chain({"created": 10, "updated": 12})
    assert metadata.deactivated is False
    assert metadata.versionId == 1
    assert metadata.updated == 12
