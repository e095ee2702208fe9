import ssl

from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.asymmetric import ec
from substrateinterface import SubstrateInterface

from weid.weid_utils import load_private_key

WEID_CREATE_PREFIX = b"WEID_CREATE"
WEID_UPDATE_PREFIX = b"WEID_UPDATE"


def _scale_compact_u32(value: int) -> bytes:
    if value < 1 << 6:
        return bytes([(value << 2) & 0xFF])
    if value < 1 << 14:
        encoded = (value << 2) | 0b01
        return encoded.to_bytes(2, "little")
    if value < 1 << 30:
        encoded = (value << 2) | 0b10
        return encoded.to_bytes(4, "little")
    raise ValueError("Compact SCALE length too large")


def _scale_vec_u8(data: bytes) -> bytes:
    return _scale_compact_u32(len(data)) + data


def build_create_weid_payload(address: bytes, public_key: bytes) -> bytes:
    return WEID_CREATE_PREFIX + _scale_vec_u8(address) + _scale_vec_u8(public_key)


def build_update_weid_payload(address: bytes, document_json: bytes, fingerprint: bytes) -> bytes:
    return (
        WEID_UPDATE_PREFIX
        + _scale_vec_u8(address)
        + _scale_vec_u8(document_json)
        + _scale_vec_u8(fingerprint)
    )


def sign_payload(private_key: str, payload: bytes) -> bytes:
    return load_private_key(private_key).sign(payload, ec.ECDSA(hashes.SHA256()))


def create_substrate(url: str) -> SubstrateInterface:
    return SubstrateInterface(
        url=url,
        ws_options={"sslopt": {"cert_reqs": ssl.CERT_NONE}},
    )


def get_free_balance(substrate: SubstrateInterface, address: str) -> int:
    account_info = substrate.query("System", "Account", [address])
    return account_info.value["data"]["free"]


def create_weid(
    substrate: SubstrateInterface,
    account,
    address: bytes,
    public_key: bytes,
    did_signature: bytes,
):
    call = substrate.compose_call(
        call_module="WeId",
        call_function="create_weid",
        call_params={
            "address": address,
            "public_key": public_key,
            "did_signature": did_signature,
        },
    )
    extrinsic = substrate.create_signed_extrinsic(call=call, keypair=account)
    return substrate.submit_extrinsic(extrinsic, wait_for_inclusion=True)


def update_weid(
    substrate: SubstrateInterface,
    account,
    address: bytes,
    document_json: bytes,
    expected_fingerprint: bytes,
    did_signature: bytes,
):
    call = substrate.compose_call(
        call_module="WeId",
        call_function="update_weid",
        call_params={
            "address": address,
            "document": document_json,
            "expected_fingerprint": expected_fingerprint,
            "did_signature": did_signature,
        },
    )
    extrinsic = substrate.create_signed_extrinsic(call=call, keypair=account)
    return substrate.submit_extrinsic(extrinsic, wait_for_inclusion=True)


def rpc_result(substrate: SubstrateInterface, method: str, params: list):
    response = substrate.rpc_request(method, params)
    if not isinstance(response, dict):
        return None
    return response.get("result")
