"""Service operations on WeIdentity DIDs: creation, authentication and services."""

import concurrent.futures
import logging
from functools import partial

from weid.accessor import WeIdAccessor
from weid.error_code import ErrorCode
from weid.models import (
    AuthenticationArgs,
    AuthenticationProperty,
    CreateWeIdArgs,
    CreateWeIdDataResult,
    ServiceArgs,
    ServiceProperty,
    WeIdListResult,
    WeIdPrivateKey,
    WeIdPublicKey,
)
from weid.mutations import append_authentication, append_service, remove_authentication
from weid.response import Err, Ok, ResponseData, Result
from weid.validators import (
    is_blank,
    is_private_key_length_valid,
    is_private_key_valid,
    is_public_key_string_valid,
    verify_authentication_args,
    verify_service_args,
)
from weid.weid_utils import (
    convert_public_key_to_weid,
    convert_weid_to_address,
    default_id,
    generate_keypair,
    is_keypair_match,
    to_multibase,
)

LOGGER = logging.getLogger(__name__)


class WeIdService(WeIdAccessor):
    """Creates WeIdentity DIDs and mutates their documents.

    Mutations read the current document, apply a transform and write the full
    document back with the fingerprint of the version they read, so a
    concurrent writer surfaces as WEID_DOCUMENT_CONFLICT instead of a lost
    update. Existence and deactivation are re-checked on every call.
    """

    def create_weid(self) -> ResponseData[CreateWeIdDataResult]:
        """Create a WeIdentity DID with a freshly generated key pair."""
        try:
            private_key, public_key = generate_keypair()
        except Exception:
            LOGGER.exception("Create weId failed.")
            return ResponseData(None, ErrorCode.WEID_KEYPAIR_CREATE_FAILED)
        weid = convert_public_key_to_weid(public_key, self.config.chain_id)
        if weid is None:
            LOGGER.error("Create weId failed, generated public key is unusable.")
            return ResponseData(None, ErrorCode.WEID_KEYPAIR_CREATE_FAILED)
        response = self._process_create_weid(weid, public_key, private_key)
        if not response.is_success:
            LOGGER.error(
                "[createWeId] Create weId failed. error message is :%s", response.error_message
            )
            return ResponseData(None, response.error, response.transaction_info)
        result = CreateWeIdDataResult(
            weid=weid,
            user_weid_public_key=WeIdPublicKey(public_key=public_key),
            user_weid_private_key=WeIdPrivateKey(private_key=private_key),
        )
        return ResponseData(result, response.error, response.transaction_info)

    def create_weid_with_args(self, args: CreateWeIdArgs) -> ResponseData[str]:
        """Create a WeIdentity DID for a caller supplied key pair."""
        if args is None:
            LOGGER.error("[createWeId]: input parameter createWeIdArgs is null.")
            return ResponseData(None, ErrorCode.ILLEGAL_INPUT)
        private_key = args.weid_private_key
        if not is_private_key_valid(private_key) or not is_private_key_length_valid(
            private_key.private_key
        ):
            return ResponseData(None, ErrorCode.WEID_PRIVATEKEY_INVALID)
        public_key = args.public_key
        if is_blank(public_key) or not is_public_key_string_valid(public_key):
            return ResponseData(None, ErrorCode.WEID_PUBLICKEY_INVALID)
        if not is_keypair_match(private_key.private_key, public_key):
            return ResponseData(None, ErrorCode.WEID_PUBLICKEY_AND_PRIVATEKEY_NOT_MATCHED)

        weid = convert_public_key_to_weid(public_key, self.config.chain_id)
        if weid is None:
            return ResponseData(None, ErrorCode.WEID_PUBLICKEY_INVALID)
        exists = self.is_weid_exist(weid)
        if not exists.is_success:
            return ResponseData(None, exists.error)
        if exists.result:
            LOGGER.error("[createWeId]: create weid failed, the weid :%s is already exist", weid)
            return ResponseData(None, ErrorCode.WEID_ALREADY_EXIST)

        response = self._process_create_weid(weid, public_key, private_key.private_key)
        if not response.is_success:
            LOGGER.error(
                "[createWeId]: create weid failed. error message is :%s, public key is %s",
                response.error_message,
                public_key,
            )
            return ResponseData(None, response.error, response.transaction_info)
        return ResponseData(weid, response.error, response.transaction_info)

    def _process_create_weid(
        self, weid: str, public_key: str, private_key: str
    ) -> ResponseData[bool]:
        return self._call_engine(
            "createWeId",
            self.engine.create_weid,
            weid,
            public_key,
            private_key,
            failed=False,
        )

    def _require_active(self, weid: str, operation: str) -> Result[str]:
        exists = self.is_weid_exist(weid)
        if not exists.is_success:
            return Err(exists.error)
        if not exists.result:
            LOGGER.error("[%s]: failed, the weid :%s does not exist", operation, weid)
            return Err(ErrorCode.WEID_DOES_NOT_EXIST)
        deactivated = self.is_deactivated(weid)
        if not deactivated.is_success:
            return Err(deactivated.error)
        if deactivated.result:
            LOGGER.error("[%s]: failed, the weid :%s has been deactivated", operation, weid)
            return Err(ErrorCode.WEID_HAS_BEEN_DEACTIVATED)
        return Ok(weid)

    def _mutate(self, operation: str, weid: str, private_key: str, transform) -> ResponseData[bool]:
        loaded = self.get_weid_document(weid)
        if loaded.result is None:
            return ResponseData(False, loaded.error)
        current = loaded.result
        outcome = transform(current)
        if isinstance(outcome, Err):
            LOGGER.error("[%s]: failed for %s: %s", operation, weid, outcome.error.message)
            return outcome.to_response(False)
        return self._call_engine(
            operation,
            self.engine.update_weid,
            outcome.value,
            convert_weid_to_address(weid),
            private_key,
            current.fingerprint(),
            failed=False,
        )

    def _precheck(
        self, operation: str, weid: str, args_valid: bool, private_key
    ) -> Result[str]:
        if not args_valid:
            LOGGER.error("[%s]: input parameter is illegal.", operation)
            return Err(ErrorCode.ILLEGAL_INPUT)
        if not is_private_key_valid(private_key):
            return Err(ErrorCode.WEID_PRIVATEKEY_INVALID)
        canonical = self.canonical_weid(weid)
        if canonical is None:
            LOGGER.error("[%s] failed, weid : %s is invalid.", operation, weid)
            return Err(ErrorCode.WEID_INVALID)
        return self._require_active(canonical, operation)

    def set_authentication(
        self, weid: str, args: AuthenticationArgs, private_key: WeIdPrivateKey
    ) -> ResponseData[bool]:
        checked = self._precheck(
            "setAuthentication", weid, verify_authentication_args(args), private_key
        )
        if isinstance(checked, Err):
            return checked.to_response(False)
        weid = checked.value

        controller = weid if is_blank(args.controller) else self.canonical_weid(args.controller)
        if controller is None:
            LOGGER.error("[setAuthentication]: controller : %s is invalid.", args.controller)
            return ResponseData(False, ErrorCode.WEID_INVALID)
        checked = self._require_active(controller, "setAuthentication")
        if isinstance(checked, Err):
            return checked.to_response(False)

        public_key_multibase = to_multibase(args.public_key)
        authentication = AuthenticationProperty(
            id=default_id(weid, public_key_multibase, "keys-") if is_blank(args.id) else args.id,
            controller=controller,
            publicKeyMultibase=public_key_multibase,
        )
        return self._mutate(
            "setAuthentication",
            weid,
            private_key.private_key,
            partial(append_authentication, authentication=authentication),
        )

    def revoke_authentication(
        self, weid: str, args: AuthenticationArgs, private_key: WeIdPrivateKey
    ) -> ResponseData[bool]:
        """Remove an authentication method by public key, falling back to its id."""
        checked = self._precheck(
            "revokeAuthentication",
            weid,
            verify_authentication_args(args, require_public_key=False),
            private_key,
        )
        if isinstance(checked, Err):
            return checked.to_response(False)
        weid = checked.value

        public_key_multibase = None if is_blank(args.public_key) else to_multibase(args.public_key)
        return self._mutate(
            "revokeAuthentication",
            weid,
            private_key.private_key,
            partial(
                remove_authentication,
                public_key_multibase=public_key_multibase,
                method_id=None if is_blank(args.id) else args.id,
            ),
        )

    def set_service(
        self, weid: str, args: ServiceArgs, private_key: WeIdPrivateKey
    ) -> ResponseData[bool]:
        checked = self._precheck("setService", weid, verify_service_args(args), private_key)
        if isinstance(checked, Err):
            return checked.to_response(False)
        weid = checked.value

        id_is_default = is_blank(args.id)
        service = ServiceProperty(
            id=default_id(weid, args.service_endpoint) if id_is_default else args.id,
            type=args.type,
            serviceEndpoint=args.service_endpoint,
        )
        return self._mutate(
            "setService",
            weid,
            private_key.private_key,
            partial(append_service, service=service, id_is_default=id_is_default),
        )

    def get_weid_list(self, first: int, last: int) -> ResponseData[list[str]]:
        LOGGER.info(
            "[getWeIdList] begin get weIdList, first index = %s, last index = %s", first, last
        )
        try:
            return self.engine.get_weid_list(first, last)
        except Exception:
            LOGGER.exception("[getWeIdList] get weIdList failed with exception.")
            return ResponseData(None, ErrorCode.UNKNOW_ERROR)

    def get_weid_count(self) -> ResponseData[int]:
        try:
            return self.engine.get_weid_count()
        except Exception:
            LOGGER.exception("[getWeIdCount] get weIdCount failed with exception.")
            return ResponseData(None, ErrorCode.UNKNOW_ERROR)

    def _lookup_public_key(self, public_key: WeIdPublicKey) -> tuple[str | None, ErrorCode]:
        value = getattr(public_key, "public_key", None)
        weid = convert_public_key_to_weid(value, self.config.chain_id) if value else None
        if weid is None:
            return None, ErrorCode.WEID_PUBLICKEY_INVALID
        exists = self.is_weid_exist(weid)
        if not exists.is_success:
            return None, exists.error
        if exists.result:
            return weid, ErrorCode.SUCCESS
        return None, ErrorCode.WEID_PUBLIC_KEY_NOT_EXIST

    def get_weid_list_by_pub_key_list(
        self, pub_key_list: list[WeIdPublicKey]
    ) -> ResponseData[WeIdListResult]:
        """Resolve each public key to its registered DID, aligned with the input."""
        if not pub_key_list:
            return ResponseData(None, ErrorCode.ILLEGAL_INPUT)
        if self.config.lookup_workers > 1:
            with concurrent.futures.ThreadPoolExecutor(
                max_workers=self.config.lookup_workers
            ) as executor:
                outcomes = list(executor.map(self._lookup_public_key, pub_key_list))
        else:
            outcomes = [self._lookup_public_key(public_key) for public_key in pub_key_list]
        result = WeIdListResult(
            weid_list=[weid for weid, _ in outcomes],
            error_code_list=[error.code for _, error in outcomes],
        )
        return ResponseData(result)
