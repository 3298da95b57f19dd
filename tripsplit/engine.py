from __future__ import annotations

from importlib import import_module
from pathlib import Path
from typing import Any, Dict, List

import structlog
from fastapi import FastAPI

from tripsplit.errors import ValidationNormalizeMiddleware
from tripsplit.registry import build_mount_map, load_modules
from tripsplit.requestlog import attach_request_log

logger = structlog.get_logger(__name__)


def import_attr(path: str) -> Any:
    if ":" not in path:
        raise ValueError(f"Invalid entrypoint '{path}'. Expected module:attr.")
    module_path, attr = path.split(":", 1)
    module = import_module(module_path)
    return getattr(module, attr)


def describe_modules(modules: Dict[str, Dict[str, Any]]) -> List[Dict[str, Any]]:
    listed = [
        {
            "name": meta["name"],
            "title": meta.get("title") or meta["name"],
            "description": meta.get("description") or "",
            "category": meta.get("category") or "Other",
            "mount": meta["mount"],
        }
        for meta in modules.values()
        if meta.get("public", True)
    ]
    listed.sort(key=lambda item: item["title"])
    return listed


def build_app(modules_path: Path | None = None) -> FastAPI:
    app = FastAPI(title="Tripsplit")
    modules = load_modules(modules_path)

    @app.get("/")
    def index():
        return {"modules": describe_modules(modules)}

    for meta in modules.values():
        entrypoints = meta.get("entrypoints") or {}
        api_entry = entrypoints.get("api")
        if not api_entry:
            continue

        try:
            subapp = import_attr(api_entry)
        except Exception:
            logger.exception("module_import_failed", module=meta["name"], entrypoint=api_entry)
            continue

        app.mount(meta["mount"], subapp)
        logger.info("module_mounted", module=meta["name"], mount=meta["mount"])

    app.add_middleware(ValidationNormalizeMiddleware)
    attach_request_log(app, build_mount_map(modules))
    return app
