"""Pure checks applied before any ledger call."""

import re

from weid.models import AuthenticationArgs, ServiceArgs, WeIdPrivateKey
from weid.weid_utils import (
    MAX_PRIVATE_KEY_DIGITS,
    SECP256K1_ORDER,
    convert_address_to_weid,
    is_decimal,
    public_key_to_bytes,
)

WEID_PATTERN = re.compile(r"^did:weid:(?:(\d+):)?(0x[0-9a-fA-F]{40})$")


def is_weid_valid(weid) -> bool:
    return isinstance(weid, str) and WEID_PATTERN.match(weid) is not None


def to_canonical_weid(weid, chain_id: int) -> str | None:
    """Return the one spelling of weid for chain_id, or None.

    A missing chain segment means the local chain; a different chain id is
    rejected. Addresses are lower-cased.
    """
    match = WEID_PATTERN.match(weid) if isinstance(weid, str) else None
    if match is None:
        return None
    chain, address = match.groups()
    if chain is not None and chain != str(chain_id):
        return None
    return convert_address_to_weid(address.lower(), chain_id)


def is_private_key_valid(private_key) -> bool:
    return isinstance(private_key, WeIdPrivateKey) and is_decimal(private_key.private_key)


def is_private_key_length_valid(private_key) -> bool:
    if not is_decimal(private_key) or len(private_key) > MAX_PRIVATE_KEY_DIGITS:
        return False
    return 0 < int(private_key) < SECP256K1_ORDER


def is_public_key_string_valid(public_key) -> bool:
    # decimal big integer or base64, 64 bytes once decoded
    try:
        public_key_to_bytes(public_key)
    except ValueError:
        return False
    return True


def is_blank(value) -> bool:
    return value is None or not str(value).strip()


def verify_authentication_args(args, require_public_key: bool = True) -> bool:
    if not isinstance(args, AuthenticationArgs):
        return False
    if is_blank(args.public_key):
        return not require_public_key and not is_blank(args.id)
    return is_public_key_string_valid(args.public_key)


def verify_service_args(args) -> bool:
    return (
        isinstance(args, ServiceArgs)
        and not is_blank(args.type)
        and not is_blank(args.service_endpoint)
    )
