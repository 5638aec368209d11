"""Catalogue bounded context: the menu of dishes, their prices and stock."""

from protean.domain import Domain

from shared.logging import configure_logging, get_logger

configure_logging(log_dir="logs", log_file_prefix="storefront")

logger = get_logger(__name__)

catalogue = Domain(name="catalogue")
