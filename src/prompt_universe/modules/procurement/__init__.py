"""Procurement module - service catalog and tenant orders."""

from prompt_universe.modules.procurement.routes import router


# Module metadata
__module_info__ = {
    "name": "procurement",
    "version": "1.0.0",
    "description": "Service catalog and order lifecycle",
    "dependencies": ["tenants"],
}

__all__ = ["router"]
