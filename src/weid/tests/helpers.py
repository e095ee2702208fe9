import base64


def to_base64(public_key: str) -> str:
    return base64.b64encode(int(public_key).to_bytes(64, "big")).decode("ascii")
