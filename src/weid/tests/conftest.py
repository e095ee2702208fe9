from unittest.mock import MagicMock

import pytest

from weid.config import WeIdConfig
from weid.engine.memory import InMemoryLedgerEngine
from weid.models import CreateWeIdArgs, WeIdPrivateKey
from weid.service import WeIdService
from weid.weid_utils import generate_keypair


@pytest.fixture
def config():
    return WeIdConfig(chain_id=1)


@pytest.fixture
def ledger():
    return InMemoryLedgerEngine()


@pytest.fixture
def engine(ledger):
    # spy that still delegates to the in-memory ledger
    return MagicMock(wraps=ledger)


@pytest.fixture
def service(engine, config):
    return WeIdService(engine, config)


@pytest.fixture
def keypair():
    return generate_keypair()


@pytest.fixture
def create_weid(service):
    def _create():
        private_key, public_key = generate_keypair()
        response = service.create_weid_with_args(
            CreateWeIdArgs(
                weid_private_key=WeIdPrivateKey(private_key=private_key),
                public_key=public_key,
            )
        )
        assert response.is_success, response.error_message
        return response.result, WeIdPrivateKey(private_key=private_key), public_key

    return _create
