"""Demands module - the demand pool marketplace."""

from prompt_universe.modules.demands.routes import router


# Module metadata
__module_info__ = {
    "name": "demands",
    "version": "1.0.0",
    "description": "Demand pool postings",
    "dependencies": [],
}

__all__ = ["router"]
