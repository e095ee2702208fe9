import base64
import binascii
import hashlib

import base58
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import ec

WEID_PREFIX = "did:weid:"
WEID_ADDRESS_PREFIX = b"WEID_ADDRESS"
PUBLIC_KEY_LENGTH = 64
# decimal digits of the largest 64-byte value and of the group order
MAX_PUBLIC_KEY_DIGITS = 155
MAX_PRIVATE_KEY_DIGITS = 78
SECP256K1_ORDER = 0xFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFEBAAEDCE6AF48A03BBFD25E8CD0364141


def is_decimal(value: str) -> bool:
    return isinstance(value, str) and value.isascii() and value.isdigit()


def hash_hex(value: str) -> str:
    return hashlib.blake2b(value.encode("utf-8"), digest_size=32).hexdigest()


def default_id(weid: str, seed: str, prefix: str = "") -> str:
    """Deterministic method id for authentication and service entries."""
    return f"{weid}#{prefix}{hash_hex(seed)}"


def public_key_to_bytes(public_key: str) -> bytes:
    """Decode a decimal or base64 public key into raw X || Y bytes.

    Base64 input must decode to 64 bytes, or 65 bytes with a leading 0x04.
    """
    if is_decimal(public_key):
        if len(public_key) > MAX_PUBLIC_KEY_DIGITS:
            raise ValueError("Public key is longer than 64 bytes")
        value = int(public_key)
        if value.bit_length() > PUBLIC_KEY_LENGTH * 8:
            raise ValueError("Public key is longer than 64 bytes")
        return value.to_bytes(PUBLIC_KEY_LENGTH, "big")
    try:
        raw = base64.b64decode(public_key, validate=True)
    except (binascii.Error, TypeError, ValueError) as exc:
        raise ValueError("Public key is neither decimal nor base64") from exc
    if len(raw) == PUBLIC_KEY_LENGTH + 1 and raw[0] == 0x04:
        raw = raw[1:]
    if len(raw) != PUBLIC_KEY_LENGTH:
        raise ValueError("Public key must be 64 bytes")
    return raw


def _raw_public_key(key: ec.EllipticCurvePublicKey) -> bytes:
    encoded = key.public_bytes(
        serialization.Encoding.X962,
        serialization.PublicFormat.UncompressedPoint,
    )
    return encoded[1:]


def _encode_public_key(key: ec.EllipticCurvePublicKey) -> str:
    return str(int.from_bytes(_raw_public_key(key), "big"))


def load_public_key(public_key: str) -> ec.EllipticCurvePublicKey:
    raw = public_key_to_bytes(public_key)
    return ec.EllipticCurvePublicKey.from_encoded_point(ec.SECP256K1(), b"\x04" + raw)


def load_private_key(private_key: int | str) -> ec.EllipticCurvePrivateKey:
    return ec.derive_private_key(int(private_key), ec.SECP256K1())


def generate_keypair() -> tuple[str, str]:
    key = ec.generate_private_key(ec.SECP256K1())
    private_key = str(key.private_numbers().private_value)
    return private_key, _encode_public_key(key.public_key())


def public_key_from_private(private_key: int | str) -> str:
    return _encode_public_key(load_private_key(private_key).public_key())


def is_keypair_match(private_key: int | str, public_key: str) -> bool:
    try:
        expected = _raw_public_key(load_private_key(private_key).public_key())
        return public_key_to_bytes(public_key) == expected
    except (TypeError, ValueError):
        return False


def to_multibase(public_key: str) -> str:
    return "z" + base58.b58encode(public_key_to_bytes(public_key)).decode("ascii")


def public_key_to_address(public_key: str) -> str:
    raw = _raw_public_key(load_public_key(public_key))
    return "0x" + hashlib.blake2b(WEID_ADDRESS_PREFIX + raw, digest_size=20).hexdigest()


def convert_address_to_weid(address: str, chain_id: int) -> str:
    return f"{WEID_PREFIX}{chain_id}:{address}"


def convert_weid_to_address(weid: str) -> str:
    return weid.rsplit(":", 1)[-1]


def convert_public_key_to_weid(public_key: str, chain_id: int) -> str | None:
    try:
        address = public_key_to_address(public_key)
    except (TypeError, ValueError):
        return None
    return convert_address_to_weid(address, chain_id)
