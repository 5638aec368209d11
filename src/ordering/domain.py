"""Ordering bounded context: shopping carts and placed orders.

Carts are short-lived per-user line-item lists that expire after a period of
inactivity. Orders are priced server-side and numbered ``DH<n>``.
"""

import structlog
from protean.domain import Domain

from shared.logging import configure_logging

configure_logging(log_dir="logs", log_file_prefix="storefront")

ordering = Domain(name="ordering")

logger = structlog.get_logger(__name__)
