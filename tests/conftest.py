"""Pytest configuration and shared fixtures."""

from collections.abc import AsyncGenerator
from pathlib import Path

import httpx
import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.pool import NullPool

from prompt_universe.api.dependencies import get_document_store, get_http_client
from prompt_universe.core.constants import COLLECTION_LLM_CONNECTIONS
from prompt_universe.core.database import create_session_factory
from prompt_universe.core.documents.sql import SqlDocumentStore
from prompt_universe.core.llm import LlmConnection
from prompt_universe.main import create_app
from tests.factories.connection import LlmConnectionFactory
from tests.fakes import FakeLLM


# ============================================================
# Document store
# ============================================================


@pytest.fixture
async def store(tmp_path: Path) -> AsyncGenerator[SqlDocumentStore, None]:
    """SQL document store on a throwaway SQLite file."""
    engine = create_async_engine(
        f"sqlite+aiosqlite:///{tmp_path / 'documents.db'}",
        poolclass=NullPool,
        echo=False,
    )
    document_store = SqlDocumentStore(create_session_factory(engine), engine)
    await document_store.create_schema()

    yield document_store

    await document_store.close()


# ============================================================
# Generation API
# ============================================================


@pytest.fixture
def fake_llm() -> FakeLLM:
    return FakeLLM()


@pytest.fixture
async def http_client(fake_llm: FakeLLM) -> AsyncGenerator[httpx.AsyncClient, None]:
    async with httpx.AsyncClient(transport=httpx.MockTransport(fake_llm.handler)) as client:
        yield client


@pytest.fixture
async def connection(store: SqlDocumentStore) -> LlmConnection:
    """An active universal Google connection."""
    llm_connection = LlmConnectionFactory.build(provider="google", priority=10)
    await store.set(
        COLLECTION_LLM_CONNECTIONS, llm_connection.id, llm_connection.to_document()
    )
    return llm_connection


# ============================================================
# Application
# ============================================================


@pytest.fixture
async def app(store: SqlDocumentStore, http_client: httpx.AsyncClient):
    """Create test application instance."""
    application = create_app()

    application.dependency_overrides[get_document_store] = lambda: store
    application.dependency_overrides[get_http_client] = lambda: http_client

    yield application

    application.dependency_overrides.clear()


@pytest.fixture
async def client(app) -> AsyncGenerator[AsyncClient, None]:
    """Provide async HTTP client for API testing."""
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as client:
        yield client


@pytest.fixture
def anyio_backend() -> str:
    """Specify the async backend for anyio."""
    return "asyncio"
