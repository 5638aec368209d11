"""Payments bounded context: recording how customers pay for their orders.

A payment is taken against a pending order for exactly the order total.
Cash settles at once; cards wait for the processor and wallet or bank
transfers wait for a status update. Administrators issue refunds.
"""

import structlog
from protean.domain import Domain

from shared.logging import configure_logging

configure_logging(log_dir="logs", log_file_prefix="storefront")

payments = Domain(name="payments")

logger = structlog.get_logger(__name__)
