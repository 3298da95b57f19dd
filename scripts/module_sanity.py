#!/usr/bin/env python3
from __future__ import annotations

from pathlib import Path
import sys

import yaml

ROOT_DIR = Path(__file__).resolve().parents[1]
REQUIRED_FIELDS = ("title", "description", "category")


def _mount_from(name: str, raw: str | None) -> str:
    mount = raw or f"/{name.replace('_', '-')}"
    if not mount.startswith("/"):
        mount = "/" + mount
    if mount != "/" and mount.endswith("/"):
        mount = mount.rstrip("/")
    return mount


def check_manifests(modules_dir: Path) -> list[str]:
    errors: list[str] = []
    mounts: dict[str, str] = {}
    names: set[str] = set()

    for module_dir in sorted(modules_dir.iterdir()):
        manifest = module_dir / "module.yaml"
        if not module_dir.is_dir() or not manifest.exists():
            continue
        try:
            data = yaml.safe_load(manifest.read_text(encoding="utf-8")) or {}
        except yaml.YAMLError as exc:
            errors.append(f"{module_dir.name}: invalid YAML ({exc})")
            continue

        name = str(data.get("name") or "").strip() or module_dir.name
        if name in names:
            errors.append(f"{module_dir.name}: duplicate name '{name}'")
        names.add(name)

        for field in REQUIRED_FIELDS:
            if not str(data.get(field) or "").strip():
                errors.append(f"{module_dir.name}: missing {field}")

        public = data.get("public")
        if public is None:
            public = True
        entrypoints = data.get("entrypoints") or {}
        api = entrypoints.get("api") if isinstance(entrypoints, dict) else None
        if public:
            if not api:
                errors.append(f"{module_dir.name}: missing entrypoints.api")
            elif ":" not in str(api):
                errors.append(f"{module_dir.name}: entrypoints.api must be module:app")

        mount = _mount_from(name, data.get("mount"))
        if mount == "/":
            errors.append(f"{module_dir.name}: mount '/' is reserved")
        if " " in mount:
            errors.append(f"{module_dir.name}: mount contains spaces")
        if mount in mounts:
            errors.append(f"{module_dir.name}: mount '{mount}' duplicates {mounts[mount]}")
        else:
            mounts[mount] = name

    return errors


def main() -> int:
    errors = check_manifests(ROOT_DIR / "modules")
    if errors:
        print("Module sanity check failed:\n")
        for issue in errors:
            print(f"- {issue}")
        return 1

    print("Module sanity check passed.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
