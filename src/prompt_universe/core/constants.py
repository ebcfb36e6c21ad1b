"""Application-wide constants.

This module defines constants used throughout the application
to avoid magic numbers and ensure consistency.
"""

# String field lengths
MAX_NAME_LENGTH = 255
MAX_DESCRIPTION_LENGTH = 2000
MAX_COLLECTION_PATH_LENGTH = 512
MAX_DOCUMENT_ID_LENGTH = 128

# Generated document ids
DOCUMENT_ID_BYTES = 15  # 20 url-safe characters, same length as Firestore ids

# LLM connections
MIN_CONNECTION_PRIORITY = 1
MAX_CONNECTION_PRIORITY = 100
DEFAULT_CONNECTION_PRIORITY = 50

# Prompt execution
DEFAULT_LLM_TEMPERATURE = 0.7
METADATA_ANALYSIS_TEMPERATURE = 0.2
DEFAULT_LLM_TIMEOUT_SECONDS = 120.0

# Local frontends allowed by CORS in development
DEV_CORS_ORIGINS = ("http://localhost:3000", "http://localhost:9002")

# API keys
API_KEY_PREFIX = "sk"
API_KEY_SECRET_BYTES = 24

# Collections
COLLECTION_TENANTS = "tenants"
COLLECTION_USERS = "users"
COLLECTION_PROMPTS = "prompts"
COLLECTION_EXPERT_DOMAINS = "expert_domains"
COLLECTION_LLM_CONNECTIONS = "llm_connections"
COLLECTION_TOKEN_ALLOCATIONS = "token_allocations"
COLLECTION_SOFTWARE_ASSETS = "software_assets"
COLLECTION_PROCUREMENT_ITEMS = "procurement_items"
COLLECTION_ORDERS = "orders"
COLLECTION_DEMANDS = "demands"

# Tenant sub-collections
SUBCOLLECTION_ROLES = "roles"
SUBCOLLECTION_DEPARTMENTS = "departments"
SUBCOLLECTION_POSITIONS = "positions"
SUBCOLLECTION_API_KEYS = "api_keys"


def tenant_collection(tenant_id: str, name: str) -> str:
    """Build the path of a collection nested under a tenant document."""
    return f"{COLLECTION_TENANTS}/{tenant_id}/{name}"
