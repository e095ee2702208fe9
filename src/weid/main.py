import argparse
import json
import os
from getpass import getpass

from substrateinterface import Keypair

from weid.config import load_config
from weid.engine.memory import InMemoryLedgerEngine
from weid.engine.substrate import SubstrateLedgerEngine
from weid.models import AuthenticationArgs, ServiceArgs, WeIdPublicKey
from weid.response import ResponseData
from weid.service import WeIdService
from weid.substrate_client import get_free_balance
from weid.weid_utils import generate_keypair

LOG_OK = "✅"
LOG_WARN = "⚠️"
LOG_DID = "🪪"
LOG_TX = "🧾"
LOG_STEP = "➡️"
DEFAULT_SERVICE_TYPE = "ExampleService"
DEFAULT_SERVICE_ENDPOINT = "https://example.com"


def load_account(json_path: str) -> Keypair:
    with open(json_path, "r", encoding="utf-8") as f:
        account_json = json.load(f)

    password = os.getenv("ACCOUNT_PASSWORD")
    if not password:
        password = getpass("Account password: ")

    try:
        return Keypair.create_from_encrypted_json(account_json, password)
    except Exception as exc:
        raise RuntimeError("Failed to load account from JSON") from exc


def report(step: str, response: ResponseData) -> ResponseData:
    if response.is_success:
        print(f"{LOG_OK} {step}")
    else:
        print(f"{LOG_WARN} {step} failed: [{response.error_code}] {response.error_message}")
    info = response.transaction_info
    if info:
        print(f"{LOG_TX} Transaction hash: {info.transaction_hash}")
        if info.block_hash:
            print(f"{LOG_TX} Block hash: {info.block_hash}")
    return response


def build_engine(args, config):
    if args.engine == "memory":
        return InMemoryLedgerEngine()
    account_json_path = args.account_json or config.account_json
    if not account_json_path:
        raise SystemExit("Provide --account-json or set ACCOUNT_JSON in .env")
    print(f"{LOG_STEP} Step: load account")
    account = load_account(account_json_path)
    print(f"{LOG_OK} Loaded account: {account.ss58_address}")
    engine = SubstrateLedgerEngine.from_config(config, account)
    print(f"Free balance: {get_free_balance(engine.substrate, account.ss58_address)}")
    return engine


def main() -> None:
    print(f"{LOG_STEP} Step: load config")
    config = load_config()
    parser = argparse.ArgumentParser(description="WeIdentity DID document demo client")
    parser.add_argument("--engine", choices=["memory", "substrate"], default="memory")
    parser.add_argument(
        "--account-json",
        required=False,
        help="Path to polkadot-js account JSON file (substrate engine only)",
    )
    args = parser.parse_args()

    service = WeIdService(build_engine(args, config), config)

    print(f"{LOG_STEP} Step: create WeID")
    created = report("Create WeID", service.create_weid())
    if not created.is_success:
        raise SystemExit("WeID create failed")
    weid = created.result.weid
    private_key = created.result.user_weid_private_key
    print(f"{LOG_DID} WeID: {weid}")

    print(f"{LOG_STEP} Step: add authentication key")
    _, secondary_public_key = generate_keypair()
    report(
        "Set authentication",
        service.set_authentication(
            weid, AuthenticationArgs(public_key=secondary_public_key), private_key
        ),
    )

    print(f"{LOG_STEP} Step: add service")
    report(
        "Set service",
        service.set_service(
            weid,
            ServiceArgs(type=DEFAULT_SERVICE_TYPE, service_endpoint=DEFAULT_SERVICE_ENDPOINT),
            private_key,
        ),
    )

    print(f"{LOG_STEP} Step: resolve WeID document")
    document = report("Resolve document", service.get_weid_document_json(weid))
    if document.result:
        print(f"{LOG_DID} WeID document:")
        print(document.result)

    print(f"{LOG_STEP} Step: revoke authentication key")
    report(
        "Revoke authentication",
        service.revoke_authentication(
            weid, AuthenticationArgs(public_key=secondary_public_key), private_key
        ),
    )

    print(f"{LOG_STEP} Step: look up WeIDs by public key")
    lookup = report(
        "Lookup",
        service.get_weid_list_by_pub_key_list(
            [
                created.result.user_weid_public_key,
                WeIdPublicKey(public_key=secondary_public_key),
            ]
        ),
    )
    if lookup.result:
        for found, code in zip(lookup.result.weid_list, lookup.result.error_code_list):
            print(f"{LOG_DID} {found} ({code})")

    count = report("Count", service.get_weid_count())
    print(f"WeID count: {count.result}")

    print(f"{LOG_OK} Done.")


if __name__ == "__main__":
    main()
