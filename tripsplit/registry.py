from __future__ import annotations

from pathlib import Path
from typing import Any, Dict

import structlog
import yaml

from tripsplit import settings

logger = structlog.get_logger(__name__)


def _normalize_module(
    data: Dict[str, Any],
    *,
    source: str,
    path: Path | None = None,
) -> Dict[str, Any] | None:
    name = data.get("name")
    if not name:
        return None

    slug = data.get("slug") or name.replace("_", "-")
    mount = data.get("mount") or f"/{slug}"
    if not mount.startswith("/"):
        mount = "/" + mount
    public = data.get("public")
    if public is None:
        public = True

    normalized = {**data}
    normalized.update(
        {
            "name": name,
            "slug": slug,
            "mount": mount,
            "public": bool(public),
            "source": source,
        }
    )

    if path is not None:
        normalized["path"] = path

    return normalized


def load_filesystem_modules(modules_path: Path | None = None) -> Dict[str, Dict[str, Any]]:
    modules_path = modules_path or settings.modules_path()
    modules: Dict[str, Dict[str, Any]] = {}
    if not modules_path.exists():
        return modules

    for module_dir in sorted(modules_path.iterdir()):
        manifest = module_dir / "module.yaml"
        if not module_dir.is_dir() or not manifest.exists():
            continue
        try:
            with open(manifest, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError:
            logger.exception("manifest_invalid", module=module_dir.name)
            continue
        if not isinstance(data, dict):
            continue
        normalized = _normalize_module(data, source="filesystem", path=module_dir)
        if normalized:
            modules[normalized["name"]] = normalized
    return modules


def load_modules(modules_path: Path | None = None) -> Dict[str, Dict[str, Any]]:
    return load_filesystem_modules(modules_path)


def build_mount_map(modules: Dict[str, Dict[str, Any]]) -> Dict[str, str]:
    return {meta["mount"].rstrip("/") or "/": meta["name"] for meta in modules.values()}
