import pytest

from weid.config import DEFAULT_RPC_URL, ConfigError, WeIdConfig, load_config

ENV_VARS = ("WEID_CHAIN_ID", "WEID_RPC_URL", "ACCOUNT_JSON", "WEID_LOOKUP_WORKERS")


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for var in ENV_VARS:
        # set first so teardown also removes values loaded from a .env file
        monkeypatch.setenv(var, "placeholder")
        monkeypatch.delenv(var)


def test_defaults():
    config = WeIdConfig.from_env()
    assert config == WeIdConfig()
    assert config.rpc_url == DEFAULT_RPC_URL
    assert config.account_json is None


def test_from_env(monkeypatch):
    monkeypatch.setenv("WEID_CHAIN_ID", "101")
    monkeypatch.setenv("WEID_RPC_URL", "wss://node.example:9945")
    monkeypatch.setenv("ACCOUNT_JSON", "/tmp/account.json")
    monkeypatch.setenv("WEID_LOOKUP_WORKERS", "8")
    config = WeIdConfig.from_env()
    assert config.chain_id == 101
    assert config.rpc_url == "wss://node.example:9945"
    assert config.account_json == "/tmp/account.json"
    assert config.lookup_workers == 8


@pytest.mark.parametrize(
    "var, value",
    [
        ("WEID_CHAIN_ID", "abc"),
        ("WEID_CHAIN_ID", "-1"),
        ("WEID_LOOKUP_WORKERS", "0"),
    ],
)
def test_invalid_values(monkeypatch, var, value):
    monkeypatch.setenv(var, value)
    with pytest.raises(ConfigError, match=var):
        WeIdConfig.from_env()


def test_load_config_reads_env_file(tmp_path):
    env_file = tmp_path / ".env"
    env_file.write_text("WEID_CHAIN_ID=5\nWEID_LOOKUP_WORKERS=2\n")
    config = load_config(str(env_file))
    assert config.chain_id == 5
    assert config.lookup_workers == 2
