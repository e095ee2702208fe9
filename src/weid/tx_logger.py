import logging

from weid.response import TransactionInfo

LOGGER = logging.getLogger(__name__)


def receipt_succeeded(receipt) -> bool:
    is_success = getattr(receipt, "is_success", None)
    if is_success is None:
        is_success = getattr(receipt, "success", False)
    return bool(is_success)


def transaction_info(receipt) -> TransactionInfo:
    return TransactionInfo(
        transaction_hash=receipt.extrinsic_hash,
        block_hash=getattr(receipt, "block_hash", None),
        block_number=getattr(receipt, "block_number", None),
        transaction_index=getattr(receipt, "extrinsic_idx", None),
    )


def log_receipt(receipt) -> None:
    LOGGER.info("Extrinsic hash: %s", receipt.extrinsic_hash)
    if getattr(receipt, "block_hash", None):
        LOGGER.info("Block hash: %s", receipt.block_hash)
    if getattr(receipt, "finalized_hash", None):
        LOGGER.info("Finalized hash: %s", receipt.finalized_hash)
    if not receipt_succeeded(receipt):
        LOGGER.error("Extrinsic %s failed: %s", receipt.extrinsic_hash, receipt.error_message)
    for event in getattr(receipt, "triggered_events", None) or []:
        module = event.value.get("module_id")
        name = event.value.get("event_id")
        LOGGER.debug("Event: %s.%s %s", module, name, event.params)
