"""Shared API dependencies.

The document store and HTTP client are created once in the application
lifespan and kept on ``app.state``; flows receive them through these
dependencies so tests can swap them via ``dependency_overrides``.
"""

from typing import Annotated

import httpx
from fastapi import Depends, Request

from prompt_universe.core.documents import DocumentStore
from prompt_universe.core.llm import ModelGateway, PromptMetadataAnalyzer


def get_document_store(request: Request) -> DocumentStore:
    """Get the application's document store."""
    return request.app.state.store


def get_http_client(request: Request) -> httpx.AsyncClient:
    """Get the shared outbound HTTP client."""
    return request.app.state.http_client


# Type aliases for injected clients
Store = Annotated[DocumentStore, Depends(get_document_store)]
HttpClient = Annotated[httpx.AsyncClient, Depends(get_http_client)]


def get_model_gateway(store: Store, http_client: HttpClient) -> ModelGateway:
    """Build a gateway over the injected store and HTTP client."""
    return ModelGateway(store, http_client)


Gateway = Annotated[ModelGateway, Depends(get_model_gateway)]


def get_metadata_analyzer(gateway: Gateway) -> PromptMetadataAnalyzer:
    return PromptMetadataAnalyzer(gateway)


Analyzer = Annotated[PromptMetadataAnalyzer, Depends(get_metadata_analyzer)]
