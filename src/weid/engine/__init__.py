from weid.engine.base import LedgerEngine
from weid.engine.memory import InMemoryLedgerEngine

__all__ = ["LedgerEngine", "InMemoryLedgerEngine"]
