from enum import Enum


class ErrorCode(Enum):
    SUCCESS = (0, "success")

    WEID_INVALID = (100101, "the WeIdentity DID is invalid.")
    WEID_PUBLICKEY_INVALID = (100102, "the public key is invalid.")
    WEID_PRIVATEKEY_INVALID = (100103, "the private key is invalid.")
    WEID_DOES_NOT_EXIST = (100104, "the WeIdentity DID does not exist.")
    WEID_PUBLICKEY_AND_PRIVATEKEY_NOT_MATCHED = (
        100105,
        "the public key and private key do not match.",
    )
    WEID_PRIVATEKEY_DOES_NOT_MATCH = (
        100106,
        "the private key does not match any authentication key of the WeIdentity DID.",
    )
    WEID_KEYPAIR_CREATE_FAILED = (100107, "create key pair failed.")
    WEID_PUBLIC_KEY_NOT_EXIST = (100108, "no WeIdentity DID is registered for the public key.")
    WEID_HAS_BEEN_DEACTIVATED = (100109, "the WeIdentity DID has been deactivated.")
    WEID_DOCUMENT_CONFLICT = (
        100110,
        "the WeIdentity DID document was modified concurrently, reload and retry.",
    )
    WEID_ALREADY_EXIST = (100901, "the WeIdentity DID already exists.")

    AUTHENTICATION_METHOD_ID_EXISTS = (100201, "an authentication method with this id exists.")
    AUTHENTICATION_PUBLIC_KEY_MULTIBASE_EXISTS = (
        100202,
        "an authentication method with this public key exists.",
    )
    AUTHENTICATION_METHOD_NOT_EXISTS = (100203, "the authentication method does not exist.")
    SERVICE_METHOD_ID_EXISTS = (100204, "a service with this id exists.")

    LOAD_CONTRACT_FAILED = (160002, "load contract failed.")
    UNKNOW_ERROR = (160003, "unknown error, please check the error log.")
    ILLEGAL_INPUT = (160004, "input parameter is illegal.")
    TRANSACTION_EXECUTE_ERROR = (160008, "the transaction failed to execute on chain.")

    def __init__(self, code: int, message: str):
        self.code = code
        self.message = message

    @classmethod
    def get_type_by_error_code(cls, code: int) -> "ErrorCode":
        for member in cls:
            if member.code == code:
                return member
        return cls.UNKNOW_ERROR
