"""Construction of the configured document store backend."""

import structlog

from prompt_universe.config import Settings, settings
from prompt_universe.core.database import create_engine, create_session_factory
from prompt_universe.core.documents.base import DocumentStore


logger = structlog.get_logger()


def create_document_store(config: Settings = settings) -> DocumentStore:
    """Build the store selected by ``document_backend``."""
    if config.document_backend == "firestore":
        # Imported lazily so the SQL backend does not load the Google SDK
        from prompt_universe.core.documents.firestore import FirestoreDocumentStore

        logger.info(
            "document_store_configured",
            backend="firestore",
            project_id=config.firestore_project_id,
        )
        return FirestoreDocumentStore.from_settings(
            config.firestore_project_id, config.firestore_database
        )

    from prompt_universe.core.documents.sql import SqlDocumentStore

    engine = create_engine(config.async_database_url)
    logger.info("document_store_configured", backend="sql")
    return SqlDocumentStore(create_session_factory(engine), engine)
