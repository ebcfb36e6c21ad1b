"""Tenants module - company accounts on the platform."""

from prompt_universe.modules.tenants.routes import router


# Module metadata
__module_info__ = {
    "name": "tenants",
    "version": "1.0.0",
    "description": "Tenant management and tenant dashboards",
    "dependencies": ["users", "organization", "procurement"],
}

__all__ = ["router"]
