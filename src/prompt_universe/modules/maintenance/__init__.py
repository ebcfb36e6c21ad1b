"""Maintenance module - database consistency scans and cleanup."""

from prompt_universe.modules.maintenance.routes import router


# Module metadata
__module_info__ = {
    "name": "maintenance",
    "version": "1.0.0",
    "description": "Orphaned and incomplete record scans",
    "dependencies": ["tenants", "users", "procurement"],
}

__all__ = ["router"]
