"""Organization module - tenant roles, departments and positions."""

from prompt_universe.modules.organization.routes import router


# Module metadata
__module_info__ = {
    "name": "organization",
    "version": "1.0.0",
    "description": "Tenant-scoped roles and org structure",
    "dependencies": ["tenants"],
}

__all__ = ["router"]
