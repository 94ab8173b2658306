# core/schema_registry.py
from __future__ import annotations
from typing import Dict, List
import pkgutil
import importlib
import logging
import sys
from pathlib import Path

from core.resources import ResourceSpec

log = logging.getLogger(__name__)

# Registry: resource key -> spec
_REGISTRY: Dict[str, ResourceSpec] = {}


def register(spec: ResourceSpec) -> ResourceSpec:
    """
    Registers a resource spec under its key.
    Schema modules call this at import time; re-registering a key replaces it.
    """
    if not isinstance(spec, ResourceSpec):
        raise TypeError("register() expects a ResourceSpec")
    _REGISTRY[spec.key] = spec
    return spec


def get(key: str) -> ResourceSpec:
    if key not in _REGISTRY:
        auto_discover()
    try:
        return _REGISTRY[key]
    except KeyError:
        raise KeyError(f"Unknown resource: {key}") from None


def all_specs() -> List[ResourceSpec]:
    return list(_REGISTRY.values())


def auto_discover(
    start_path: str | Path | None = None,
    root_package: str | None = None
):
    """
    Dynamically imports all modules in a directory to trigger register() calls.

    :param start_path: The directory to scan (defaults to the bundled "schemas").
    :param root_package: The parent package name (optional).
    """
    if start_path is None:
        start_path = Path(__file__).resolve().parent.parent / "schemas"
    if isinstance(start_path, str):
        start_path = Path(start_path)

    if not start_path.is_dir():
        log.warning("Schema auto_discover: %s is not a directory. Skipping.", start_path)
        return

    if root_package:
        base_import_name = f"{root_package}.{start_path.name}"
    else:
        parent_dir = str(start_path.parent.resolve())
        if parent_dir not in sys.path:
            sys.path.insert(0, parent_dir)
        base_import_name = start_path.name

    for _, module_name, is_pkg in pkgutil.walk_packages(
        path=[str(start_path)],
        prefix=f"{base_import_name}."
    ):
        if is_pkg or not module_name.endswith("_schema"):
            continue
        importlib.import_module(module_name)
        log.debug("Discovered schema module %s", module_name)
