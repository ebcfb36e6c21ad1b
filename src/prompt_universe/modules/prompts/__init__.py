"""Prompts module - prompt library, execution and metadata analysis."""

from prompt_universe.modules.prompts.routes import router


# Module metadata
__module_info__ = {
    "name": "prompts",
    "version": "1.0.0",
    "description": "Prompt library, execution and metadata analysis",
    "dependencies": ["assets"],
}

__all__ = ["router"]
