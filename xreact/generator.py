"""Run the setup stages against a new or an existing project directory."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path

import yaml

from .config import APP_NAME_PATTERN, MARKER_FILE, STAGE_ORDER, TSCONFIG_FILE
from .console import console, warn
from .exceptions import ValidationError
from .runner import CommandRunner
from .stages import STAGES
from .workspace import PACKAGE_JSON, Conflict, Workspace


@dataclass(frozen=True)
class ProjectConfig:
    app_name: str
    use_typescript: bool = True
    use_tailwind: bool = True
    use_react_router: bool = False
    use_rtk_query: bool = False
    use_prettier: bool = False
    use_eslint: bool = False
    use_husky: bool = False

    @property
    def language(self) -> str:
        return "typescript" if self.use_typescript else "javascript"

    def enabled_stages(self) -> tuple[str, ...]:
        flags = {
            "base": True,
            "tailwind": self.use_tailwind,
            "router": self.use_react_router,
            "rtk_query": self.use_rtk_query,
            "prettier": self.use_prettier,
            "eslint": self.use_eslint,
            "husky": self.use_husky,
        }
        return tuple(stage for stage in STAGE_ORDER if flags[stage])


@dataclass(frozen=True)
class GenerationReport:
    project_dir: Path
    stages: tuple[str, ...]
    files: tuple[str, ...]
    rewritten: tuple[str, ...]
    kept: tuple[str, ...]
    conflicts: tuple[Conflict, ...]


def validate_app_name(name: str, parent_dir: Path) -> str | None:
    """Return an error message for an unusable app name, or None when it is fine."""
    if not name.strip():
        return "App name cannot be empty"
    if not APP_NAME_PATTERN.fullmatch(name):
        return "App name can only contain lowercase letters, numbers, and hyphens"
    if (parent_dir / name).exists():
        return "A directory with this name already exists"
    return None


def detect_typescript(project_dir: Path) -> bool:
    return (project_dir / TSCONFIG_FILE).exists()


def normalize_stage_name(stage: str) -> str:
    return stage.strip().lower().replace("-", "_")


def _read_marker(project_dir: Path) -> dict:
    marker = project_dir / MARKER_FILE
    if not marker.exists():
        return {}
    return yaml.safe_load(marker.read_text(encoding="utf-8")) or {}


def _write_marker(workspace: Workspace, app_name: str, stages: tuple[str, ...]) -> None:
    """Record the applied stages and the fingerprint of every generated file."""
    data = _read_marker(workspace.root)
    files = dict(data.get("files") or {})
    for relative in workspace.written:
        files.pop(relative.as_posix(), None)
    files.update(workspace.tracked_files())

    applied = list(data.get("stages") or [])
    applied.extend(stage for stage in stages if stage not in applied)
    metadata = {
        "name": data.get("name", app_name),
        "language": workspace.language,
        "stages": applied,
        "created_at": data.get("created_at", datetime.now(timezone.utc).isoformat()),
        "files": files,
    }
    (workspace.root / MARKER_FILE).write_text(yaml.safe_dump(metadata, sort_keys=False), encoding="utf-8")


def _report(workspace: Workspace, stages: tuple[str, ...]) -> GenerationReport:
    for conflict in workspace.conflicts:
        warn(f"package.json override {conflict.describe()}")
    return GenerationReport(
        project_dir=workspace.root,
        stages=stages,
        files=tuple(path.as_posix() for path in workspace.written),
        rewritten=tuple(path.as_posix() for path in workspace.rewritten),
        kept=tuple(path.as_posix() for path in workspace.kept),
        conflicts=tuple(workspace.conflicts),
    )


def generate_project(config: ProjectConfig, parent_dir: Path, runner: CommandRunner | None = None) -> GenerationReport:
    error = validate_app_name(config.app_name, parent_dir)
    if error:
        raise ValidationError(f"{error}: {config.app_name!r}")

    runner = runner or CommandRunner()
    workspace = Workspace(parent_dir / config.app_name, config.use_typescript)
    stages = config.enabled_stages()
    for stage in stages:
        STAGES[stage](workspace, runner)

    _write_marker(workspace, config.app_name, stages)

    console.print(f"\n[bold green]✨ Success! Your new app \"{config.app_name}\" is ready.[/bold green]")
    console.print("\nTo get started, run the following commands:")
    console.print(f"[cyan]  cd {config.app_name}[/cyan]")
    console.print("[cyan]  npm run dev[/cyan]")
    return _report(workspace, stages)


def add_stage(stage: str, project_dir: Path, runner: CommandRunner | None = None) -> GenerationReport:
    """Apply a single stage to an existing project in ``project_dir``.

    Files an earlier run generated and the user has not edited since are
    treated as generated again; everything else is patched or kept.
    """
    name = normalize_stage_name(stage)
    if name not in STAGES or name == "base":
        raise ValidationError(f"Unknown stage: {stage}")

    root = project_dir.resolve()
    if not root.is_dir():
        raise ValidationError(f"Project directory does not exist: {root}")
    if not (root / PACKAGE_JSON).exists():
        raise ValidationError(f"Missing {PACKAGE_JSON} in project directory: {root}")

    workspace = Workspace(root, detect_typescript(root))
    workspace.track(_read_marker(root).get("files") or {})
    STAGES[name](workspace, runner or CommandRunner())

    _write_marker(workspace, root.name, (name,))
    return _report(workspace, (name,))
