"""examples/stdlib_handler_usage.py - Route stdlib logging through cloudslog.

Existing code that logs with ``logging.getLogger(__name__)`` can produce the
same Cloud Logging JSON lines by attaching CloudLoggingHandler. Exceptions
logged with ``exc_info`` keep their traceback in the message, which Error
Reporting picks up.

Run:
    python examples/stdlib_handler_usage.py
"""

import logging

import cloudslog
from cloudslog import CloudLoggingHandler

cloudslog.setup("local", cloudslog.with_log_level("info"))

root = logging.getLogger()
root.setLevel(logging.DEBUG)
root.addHandler(CloudLoggingHandler())

logger = logging.getLogger("order_service")


def place_order(order_id: int, qty: int) -> None:
    logger.debug("validating order %d", order_id)  # below INFO: dropped
    logger.info("order received: order_id=%d qty=%d", order_id, qty)
    if qty <= 0:
        raise ValueError(f"invalid quantity: {qty}")


if __name__ == "__main__":
    place_order(1001, 3)
    try:
        place_order(1002, 0)
    except ValueError:
        logger.exception("order 1002 rejected")
