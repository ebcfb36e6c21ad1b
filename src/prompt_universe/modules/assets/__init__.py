"""Assets module - model connections, token allocations and software licenses."""

from prompt_universe.modules.assets.routes import router


# Module metadata
__module_info__ = {
    "name": "assets",
    "version": "1.0.0",
    "description": "Platform asset registry",
    "dependencies": [],
}

__all__ = ["router"]
