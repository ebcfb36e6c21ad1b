"""Feature modules, discovered at startup.

Each module package exposes a ``router`` and a ``__module_info__`` dict
naming the module, its version and the modules whose collections it
reads.
"""

from dataclasses import dataclass
from importlib import import_module
from pathlib import Path

import structlog
from fastapi import APIRouter


logger = structlog.get_logger()


@dataclass(frozen=True)
class ModuleInfo:
    name: str
    version: str
    description: str
    dependencies: tuple[str, ...]
    router: APIRouter


def discover_modules() -> list[ModuleInfo]:
    """Import every module package and collect its router and metadata.

    A module that fails to import, or that depends on a module which is
    not installed, stops startup.
    """
    modules: list[ModuleInfo] = []
    for path in sorted(Path(__file__).parent.iterdir()):
        if not path.is_dir() or path.name.startswith("_"):
            continue
        package = import_module(f"{__name__}.{path.name}")
        router = getattr(package, "router", None)
        if router is None:
            continue
        meta = getattr(package, "__module_info__", {})
        modules.append(
            ModuleInfo(
                name=meta.get("name", path.name),
                version=meta.get("version", "0.0.0"),
                description=meta.get("description", ""),
                dependencies=tuple(meta.get("dependencies", ())),
                router=router,
            )
        )

    installed = {module.name for module in modules}
    for module in modules:
        missing = sorted(set(module.dependencies) - installed)
        if missing:
            raise RuntimeError(
                f"Module '{module.name}' depends on missing modules: {', '.join(missing)}"
            )

    logger.debug("modules_discovered", modules=sorted(installed))
    return modules
