"""API keys module - tenant API credentials."""

from prompt_universe.modules.api_keys.routes import router


# Module metadata
__module_info__ = {
    "name": "api_keys",
    "version": "1.0.0",
    "description": "Issue and revoke tenant API keys",
    "dependencies": ["tenants"],
}

__all__ = ["router"]
