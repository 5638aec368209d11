"""Identity bounded context: storefront accounts and sign-in.

Customers register with a ten-digit phone number; administrators manage the
menu, orders and customer accounts. Bearer tokens are issued here and
verified by the gateway and the other services.
"""

from protean.domain import Domain

from shared.logging import configure_logging, get_logger

configure_logging(log_dir="logs", log_file_prefix="storefront")

logger = get_logger(__name__)

identity = Domain(name="identity")
