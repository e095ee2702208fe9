"""Load configuration parameters."""

from dataclasses import dataclass
from os import getenv

from dotenv import load_dotenv

DEFAULT_RPC_URL = "ws://127.0.0.1:9944"
DEFAULT_CHAIN_ID = 1


class ConfigError(ValueError):
    """Raised when an environment variable holds an unusable value."""

    def __init__(self, var: str, env: str):
        """Initializer."""
        super().__init__(f"Invalid {var} specified; set environment variable {env}")


@dataclass(frozen=True)
class WeIdConfig:
    """Configuration threaded into ledger engines and the WeId service."""

    chain_id: int = DEFAULT_CHAIN_ID
    rpc_url: str = DEFAULT_RPC_URL
    account_json: str | None = None
    lookup_workers: int = 1

    @classmethod
    def from_env(cls) -> "WeIdConfig":
        chain_id = _int_from_env("chain_id", "WEID_CHAIN_ID", DEFAULT_CHAIN_ID)
        if chain_id < 0:
            raise ConfigError("chain_id", "WEID_CHAIN_ID")
        lookup_workers = _int_from_env("lookup_workers", "WEID_LOOKUP_WORKERS", 1)
        if lookup_workers < 1:
            raise ConfigError("lookup_workers", "WEID_LOOKUP_WORKERS")
        return cls(
            chain_id=chain_id,
            rpc_url=getenv("WEID_RPC_URL") or DEFAULT_RPC_URL,
            account_json=getenv("ACCOUNT_JSON") or None,
            lookup_workers=lookup_workers,
        )


def _int_from_env(var: str, env: str, default: int) -> int:
    value = getenv(env)
    if not value:
        return default
    try:
        return int(value)
    except ValueError as exc:
        raise ConfigError(var, env) from exc


def load_config(env_file: str | None = None) -> WeIdConfig:
    load_dotenv(env_file)
    return WeIdConfig.from_env()
