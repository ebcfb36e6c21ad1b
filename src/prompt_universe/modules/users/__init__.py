"""Users module - platform users and tenant members."""

from prompt_universe.modules.users.routes import router


# Module metadata
__module_info__ = {
    "name": "users",
    "version": "1.0.0",
    "description": "User records, registration and tenant membership",
    "dependencies": [],
}

__all__ = ["router"]
