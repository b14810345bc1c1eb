from protean.domain import Domain
from sqlalchemy import create_engine


def setup_db(domain: Domain):
    """Setup database schema"""
    with domain.domain_context():
        for _, provider in domain.providers.items():
            if provider.conn_info["provider"] in ("sqlite", "postgresql"):
                engine = create_engine(provider.conn_info["database_uri"])

                # Accessing `_dao` forces each aggregate and entity to be
                #   registered with the provider's SQLAlchemy metadata.
                for _, aggregate_record in domain.registry.aggregates.items():
                    if aggregate_record.cls.meta_.provider == provider.name:
                        domain.repository_for(aggregate_record.cls)._dao  # noqa: B018

                for _, entity_record in domain.registry.entities.items():
                    if entity_record.cls.meta_.provider == provider.name:
                        domain.repository_for(entity_record.cls)._dao  # noqa: B018

                # Outbox tables are registered as internal repositories
                if hasattr(domain, "_outbox_repos") and provider.name in domain._outbox_repos:
                    domain._outbox_repos[provider.name]._dao  # noqa: B018

                provider._metadata.create_all(engine)


def drop_db(domain: Domain):
    """Drop database schema"""
    with domain.domain_context():
        for _, provider in domain.providers.items():
            if provider.conn_info["provider"] in ("sqlite", "postgresql"):
                engine = create_engine(provider.conn_info["database_uri"])
                provider._metadata.drop_all(engine)


def reset_data(domain: Domain):
    """Wipe every provider and the event store, keeping the schema in place."""
    with domain.domain_context():
        for _, provider in domain.providers.items():
            provider._data_reset()

        domain.event_store.store._data_reset()
