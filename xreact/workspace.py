"""Write path shared by every setup stage.

A ``Workspace`` wraps the project directory. Stages never touch the
filesystem directly: files go through ``write_text``/``render_stage`` and
``package.json`` through ``merge_package_json`` so the run can report which
files a later stage rewrote and which script keys were overridden.
"""

from __future__ import annotations

import copy
import hashlib
import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Iterable, Mapping

from jinja2 import Environment, FileSystemLoader, StrictUndefined

from .config import templates_root
from .exceptions import StageError

PACKAGE_JSON = "package.json"


@dataclass(frozen=True)
class Conflict:
    section: str
    key: str
    previous: Any
    value: Any
    stage: str

    def describe(self) -> str:
        return f"{self.section}.{self.key}: {self.previous!r} -> {self.value!r} ({self.stage})"


def merge_section(document: dict, section: str, values: dict) -> tuple[dict, list[tuple[str, Any, Any]]]:
    """Return a copy of ``document`` with ``values`` merged into ``document[section]``.

    Existing keys keep their position, new keys are appended, and the incoming
    value wins on collision. Each collision with a different value is returned
    as ``(key, previous, value)``.
    """
    merged = copy.deepcopy(document)
    current = merged.get(section)
    if not isinstance(current, dict):
        current = {}
    collisions = []
    for key, value in values.items():
        if key in current and current[key] != value:
            collisions.append((key, current[key], value))
        current[key] = value
    merged[section] = current
    return merged, collisions


def fingerprint(content: str) -> str:
    return hashlib.sha256(content.encode("utf-8")).hexdigest()


def _iter_template_files(base: Path) -> Iterable[Path]:
    if not base.exists():
        return []
    return sorted(path for path in base.rglob("*.j2") if path.is_file())


class Workspace:
    def __init__(self, root: Path, use_typescript: bool) -> None:
        self.root = root
        self.use_typescript = use_typescript
        self.written: list[Path] = []
        self.rewritten: list[Path] = []
        self.conflicts: list[Conflict] = []
        self.kept: list[Path] = []
        self._owners: dict[Path, str] = {}
        self._fingerprints: dict[Path, str] = {}
        self._env = Environment(
            loader=FileSystemLoader(str(templates_root())),
            undefined=StrictUndefined,
            autoescape=False,
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
        )

    @property
    def js_ext(self) -> str:
        return "ts" if self.use_typescript else "js"

    @property
    def jsx_ext(self) -> str:
        return "tsx" if self.use_typescript else "jsx"

    @property
    def language(self) -> str:
        return "typescript" if self.use_typescript else "javascript"

    def template_context(self) -> dict[str, Any]:
        return {
            "use_typescript": self.use_typescript,
            "js_ext": self.js_ext,
            "jsx_ext": self.jsx_ext,
            "app_file": f"App.{self.jsx_ext}",
        }

    def path(self, relative: str | Path) -> Path:
        return self.root / relative

    def exists(self, relative: str | Path) -> bool:
        return self.path(relative).exists()

    def read_text(self, relative: str | Path) -> str:
        return self.path(relative).read_text(encoding="utf-8")

    def write_text(self, relative: str | Path, content: str, stage: str, generated: bool = True) -> Path:
        """Write a project file. ``generated=False`` marks content that still belongs to the user."""
        relative = Path(relative)
        destination = self.path(relative)
        destination.parent.mkdir(parents=True, exist_ok=True)
        destination.write_text(content, encoding="utf-8")

        owner = self._owners.get(relative)
        if owner is not None and owner != stage and relative not in self.rewritten:
            self.rewritten.append(relative)
        self._owners[relative] = stage
        if generated:
            self._fingerprints[relative] = fingerprint(content)
        else:
            self._fingerprints.pop(relative, None)
        if relative not in self.written:
            self.written.append(relative)
        return destination

    def track(self, files: Mapping[str, Mapping[str, Any]]) -> None:
        """Take over files recorded by an earlier run that still hold the content written then.

        ``files`` maps a project-relative path to ``{"stage": ..., "sha256": ...}``
        as stored in the project marker.
        """
        for name, entry in files.items():
            relative = Path(name)
            digest = entry.get("sha256")
            if not self.exists(relative) or fingerprint(self.read_text(relative)) != digest:
                continue
            self._fingerprints[relative] = digest
            if entry.get("stage"):
                self._owners[relative] = entry["stage"]

    def adopt(self, relative: str | Path) -> None:
        """Treat a file another tool just created as generated, without taking ownership of it."""
        relative = Path(relative)
        if self.exists(relative):
            self._fingerprints[relative] = fingerprint(self.read_text(relative))

    def is_generated(self, relative: str | Path) -> bool:
        """True when the file is missing or still holds the content a run wrote or adopted."""
        relative = Path(relative)
        if not self.exists(relative):
            return True
        recorded = self._fingerprints.get(relative)
        return recorded is not None and recorded == fingerprint(self.read_text(relative))

    def keep(self, relative: str | Path) -> None:
        relative = Path(relative)
        if relative not in self.kept:
            self.kept.append(relative)

    def tracked_files(self) -> dict[str, dict[str, Any]]:
        return {
            relative.as_posix(): {"stage": self._owners.get(relative), "sha256": digest}
            for relative, digest in sorted(self._fingerprints.items())
        }

    def write_json(self, relative: str | Path, payload: dict, stage: str) -> Path:
        return self.write_text(relative, json.dumps(payload, indent=2) + "\n", stage)

    def remove(self, relative: str | Path) -> bool:
        target = self.path(relative)
        if not target.exists():
            return False
        target.unlink()
        return True

    def render(self, template_name: str, context: dict[str, Any] | None = None) -> str:
        values = self.template_context()
        values.update(context or {})
        return self._env.get_template(template_name).render(**values)

    def _destination_for(self, relative: Path) -> Path:
        parts = []
        for part in relative.parts:
            if part.startswith("dot-"):
                part = "." + part[len("dot-"):]
            parts.append(part.replace("__jsx__", self.jsx_ext).replace("__js__", self.js_ext))
        destination = Path(*parts)
        return destination.with_name(destination.name[: -len(".j2")])

    def render_stage(self, stage: str, context: dict[str, Any] | None = None) -> list[Path]:
        """Render ``templates/<stage>/_shared`` and the language scope into the project."""
        generated = []
        for scope in ("_shared", self.language):
            source_root = templates_root() / stage / scope
            for template_path in _iter_template_files(source_root):
                destination = self._destination_for(template_path.relative_to(source_root))
                template_name = template_path.relative_to(templates_root()).as_posix()
                generated.append(self.write_text(destination, self.render(template_name, context), stage))
        return generated

    def read_package_json(self) -> dict:
        path = self.path(PACKAGE_JSON)
        if not path.exists():
            raise StageError(f"Missing {PACKAGE_JSON} in project directory: {self.root}")
        return json.loads(path.read_text(encoding="utf-8"))

    def merge_package_json(self, section: str, values: dict, stage: str) -> list[Conflict]:
        document, collisions = merge_section(self.read_package_json(), section, values)
        self.path(PACKAGE_JSON).write_text(json.dumps(document, indent=2) + "\n", encoding="utf-8")
        conflicts = [Conflict(section, key, previous, value, stage) for key, previous, value in collisions]
        self.conflicts.extend(conflicts)
        return conflicts
