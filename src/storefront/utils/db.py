"""Database lifecycle helpers: provider configuration, schema setup/teardown, pool disposal."""

from protean.domain import Domain
from sqlalchemy import create_engine

from storefront.utils.logging import get_logger

logger = get_logger(__name__)

_SQL_PROVIDERS = ("sqlite", "postgresql")

# Query sets return at most 100 rows unless an explicit limit is given
SCAN_LIMIT = 10_000


def configure_database(domain: Domain, database_url: str | None) -> None:
    """Point the domain's default provider at ``database_url``.

    Must run before ``domain.init()``. Without a URL the domain keeps its
    in-memory provider, which is what tests and local demos use.
    """
    if not database_url:
        return

    provider = "sqlite" if database_url.startswith("sqlite") else "postgresql"
    domain.config["databases"]["default"] = {
        "provider": provider,
        "database_uri": database_url,
    }
    logger.info("Database provider configured", provider=provider)


def _sql_providers(domain: Domain):
    for _, provider in domain.providers.items():
        if provider.conn_info["provider"] in _SQL_PROVIDERS:
            yield provider


def setup_db(domain: Domain) -> None:
    """Create tables for every aggregate and entity of the domain."""
    with domain.domain_context():
        for provider in _sql_providers(domain):
            engine = create_engine(provider.conn_info["database_uri"])

            # Touching ``_dao`` registers each element's model with SQLAlchemy metadata
            for _, record in domain.registry.aggregates.items():
                if record.cls.meta_.provider == provider.name:
                    domain.repository_for(record.cls)._dao  # noqa: B018

            for _, record in domain.registry.entities.items():
                if record.cls.meta_.provider == provider.name:
                    domain.repository_for(record.cls)._dao  # noqa: B018

            provider._metadata.create_all(engine)
            engine.dispose()


def drop_db(domain: Domain) -> None:
    """Drop every table created by ``setup_db``."""
    with domain.domain_context():
        for provider in _sql_providers(domain):
            engine = create_engine(provider.conn_info["database_uri"])
            provider._metadata.drop_all(engine)
            engine.dispose()


def close_connections(domain: Domain) -> None:
    """Release pooled connections held by SQL providers at shutdown."""
    for provider in _sql_providers(domain):
        provider._engine.dispose()
        logger.info("Connection pool disposed", provider=provider.name)
