import base64

import pytest

from weid.models import AuthenticationArgs, ServiceArgs, WeIdPrivateKey
from weid.validators import (
    is_private_key_length_valid,
    is_private_key_valid,
    is_public_key_string_valid,
    is_weid_valid,
    to_canonical_weid,
    verify_authentication_args,
    verify_service_args,
)
from weid.weid_utils import SECP256K1_ORDER

ADDRESS = "0x" + "aB" * 20


@pytest.mark.parametrize(
    "weid, expected",
    [
        (f"did:weid:1:{ADDRESS}", True),
        (f"did:weid:{ADDRESS}", True),
        (f"did:weid:101:{ADDRESS}", True),
        (f"did:weid:1:{ADDRESS}00", False),
        ("did:weid:1:0xzz" + "00" * 19, False),
        (f"did:other:1:{ADDRESS}", False),
        ("", False),
        (None, False),
        (123, False),
    ],
)
def test_is_weid_valid(weid, expected):
    assert is_weid_valid(weid) is expected


@pytest.mark.parametrize(
    "weid, expected",
    [
        (f"did:weid:1:{ADDRESS}", f"did:weid:1:{ADDRESS.lower()}"),
        (f"did:weid:{ADDRESS}", f"did:weid:1:{ADDRESS.lower()}"),
        (f"did:weid:7:{ADDRESS}", None),
        (f"did:weid:01:{ADDRESS}", None),
        ("did:weid:1:nope", None),
        (None, None),
    ],
)
def test_to_canonical_weid(weid, expected):
    assert to_canonical_weid(weid, 1) == expected


@pytest.mark.parametrize(
    "private_key, expected",
    [
        (WeIdPrivateKey(private_key="12345"), True),
        (WeIdPrivateKey(private_key=""), False),
        (WeIdPrivateKey(private_key="0xabc"), False),
        (None, False),
        ("12345", False),
    ],
)
def test_is_private_key_valid(private_key, expected):
    assert is_private_key_valid(private_key) is expected


@pytest.mark.parametrize(
    "value, expected",
    [
        ("1", True),
        (str(SECP256K1_ORDER - 1), True),
        ("0", False),
        (str(SECP256K1_ORDER), False),
        ("0" * 100 + "1", False),
        ("1" * 5000, False),
        ("abc", False),
        ("", False),
    ],
)
def test_is_private_key_length_valid(value, expected):
    assert is_private_key_length_valid(value) is expected


@pytest.mark.parametrize(
    "value, expected",
    [
        ("1234567890", True),
        (base64.b64encode(bytes(64)).decode(), True),
        (base64.b64encode(b"\x04" + bytes(64)).decode(), True),
        (str(2**512 - 1), True),
        (str(2**512), False),
        ("1" * 5000, False),
        (base64.b64encode(b"\x02" + bytes(32)).decode(), False),
        (base64.b64encode(b"\x00" + bytes(64)).decode(), False),
        (base64.b64encode(b"public key bytes").decode(), False),
        ("not base64!", False),
        ("", False),
        (None, False),
    ],
)
def test_is_public_key_string_valid(value, expected):
    assert is_public_key_string_valid(value) is expected


class TestVerifyAuthenticationArgs:
    def test_public_key_required_by_default(self):
        assert not verify_authentication_args(AuthenticationArgs(id="did#keys-1"))
        assert verify_authentication_args(AuthenticationArgs(public_key="123"))

    def test_id_is_enough_when_key_optional(self):
        args = AuthenticationArgs(id="did#keys-1")
        assert verify_authentication_args(args, require_public_key=False)
        assert not verify_authentication_args(AuthenticationArgs(), require_public_key=False)

    def test_malformed_public_key(self):
        args = AuthenticationArgs(id="did#keys-1", public_key="bad key!")
        assert not verify_authentication_args(args, require_public_key=False)

    def test_none(self):
        assert not verify_authentication_args(None)


@pytest.mark.parametrize(
    "args, expected",
    [
        (ServiceArgs(type="DIDComm", service_endpoint="https://example.com"), True),
        (ServiceArgs(type=" ", service_endpoint="https://example.com"), False),
        (ServiceArgs(type="DIDComm"), False),
        (None, False),
    ],
)
def test_verify_service_args(args, expected):
    assert verify_service_args(args) is expected
