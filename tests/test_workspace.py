import json
from pathlib import Path

import pytest

from xreact.exceptions import StageError
from xreact.stages.base import package_scripts
from xreact.stages.eslint import eslint_scripts
from xreact.stages.prettier import PRETTIER_SCRIPTS
from xreact.workspace import Workspace, fingerprint, merge_section


def _package(project: Path) -> dict:
    return json.loads((project / "package.json").read_text(encoding="utf-8"))


def test_merge_section_preserves_other_keys_and_reports_collisions():
    document = {"name": "demo", "scripts": {"dev": "vite", "lint": "eslint ."}}

    merged, collisions = merge_section(document, "scripts", {"lint": "eslint src", "format": "prettier"})

    assert merged["name"] == "demo"
    assert list(merged["scripts"]) == ["dev", "lint", "format"]
    assert merged["scripts"]["lint"] == "eslint src"
    assert collisions == [("lint", "eslint .", "eslint src")]
    assert document["scripts"]["lint"] == "eslint ."


def test_merge_section_creates_missing_section():
    merged, collisions = merge_section({"name": "demo"}, "lint-staged", {"*.ts": ["eslint --fix"]})

    assert merged["lint-staged"] == {"*.ts": ["eslint --fix"]}
    assert collisions == []


def test_distinct_script_keys_from_two_stages_are_kept(ts_project: Path):
    workspace = Workspace(ts_project, use_typescript=True)

    workspace.merge_package_json("scripts", PRETTIER_SCRIPTS, "prettier")
    workspace.merge_package_json("scripts", {"lint:fix": "eslint . --fix"}, "eslint")

    scripts = _package(ts_project)["scripts"]
    assert "format" in scripts
    assert "format:check" in scripts
    assert scripts["lint:fix"] == "eslint . --fix"
    assert scripts["dev"] == "vite"
    assert workspace.conflicts == []


def test_later_stage_wins_on_same_script_key(ts_project: Path):
    workspace = Workspace(ts_project, use_typescript=True)

    workspace.merge_package_json("scripts", package_scripts(True), "base")
    workspace.merge_package_json("scripts", {"lint": "eslint src --max-warnings 0"}, "eslint")

    assert _package(ts_project)["scripts"]["lint"] == "eslint src --max-warnings 0"
    last = workspace.conflicts[-1]
    assert last.key == "lint"
    assert last.stage == "eslint"
    assert last.previous == package_scripts(True)["lint"]


def test_eslint_scripts_follow_language():
    assert "--ext ts,tsx" in eslint_scripts(True)["lint"]
    assert "--ext js,jsx" in eslint_scripts(False)["lint:fix"]


def test_read_package_json_requires_file(tmp_path: Path):
    workspace = Workspace(tmp_path, use_typescript=False)

    with pytest.raises(StageError):
        workspace.read_package_json()


def test_render_stage_maps_dot_prefix_and_extensions(js_project: Path):
    workspace = Workspace(js_project, use_typescript=False)

    workspace.render_stage("prettier")
    workspace.render_stage("router")

    assert (js_project / ".prettierignore").exists()
    assert (js_project / "src" / "navigation" / "index.jsx").exists()
    assert Path(".prettierignore") in workspace.written


def test_rewrite_by_another_stage_is_tracked(ts_project: Path):
    workspace = Workspace(ts_project, use_typescript=True)

    workspace.write_text("src/App.tsx", "first", "tailwind")
    workspace.write_text("src/App.tsx", "again", "tailwind")
    assert workspace.rewritten == []

    workspace.write_text("src/App.tsx", "second", "router")
    assert workspace.rewritten == [Path("src/App.tsx")]
    assert workspace.read_text("src/App.tsx") == "second"


def test_track_takes_over_only_unchanged_files(ts_project: Path):
    app = ts_project / "src" / "App.tsx"
    workspace = Workspace(ts_project, use_typescript=True)

    workspace.track(
        {
            "src/App.tsx": {"stage": "tailwind", "sha256": fingerprint(app.read_text(encoding="utf-8"))},
            "src/index.css": {"stage": "tailwind", "sha256": fingerprint("an older version")},
            "src/gone.tsx": {"stage": "router", "sha256": fingerprint("")},
        }
    )

    assert workspace.is_generated("src/App.tsx")
    assert not workspace.is_generated("src/index.css")
    assert workspace.is_generated("src/gone.tsx")
    assert list(workspace.tracked_files()) == ["src/App.tsx"]

    workspace.write_text("src/App.tsx", "rewritten", "router")
    assert workspace.rewritten == [Path("src/App.tsx")]


def test_user_content_is_not_tracked(ts_project: Path):
    workspace = Workspace(ts_project, use_typescript=True)
    workspace.adopt("src/App.tsx")
    assert workspace.is_generated("src/App.tsx")

    workspace.write_text("src/App.tsx", "patched", "rtk_query", generated=False)

    assert not workspace.is_generated("src/App.tsx")
    assert "src/App.tsx" not in workspace.tracked_files()
