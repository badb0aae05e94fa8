"""Storefront domain — composition root.

A single bounded context holds identity, catalogue, cart and ordering: the
cart and checkout read catalogue prices inside the same unit of work, so
they share one domain and one database provider.
"""

from protean.domain import Domain

from storefront.utils.logging import configure_logging, get_logger

configure_logging()

logger = get_logger(__name__)

storefront = Domain(name="storefront")
