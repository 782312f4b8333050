import json
from pathlib import Path

import pytest
import yaml

from xreact.config import MARKER_FILE
from xreact.exceptions import CommandError
from xreact.runner import CommandRunner
from xreact.workspace import fingerprint

DEFAULT_APP = """import { useState } from 'react'
import './App.css'

function App() {
  const [count, setCount] = useState(0)
  return <button onClick={() => setCount(count + 1)}>count is {count}</button>
}

export default App
"""


def write_vite_skeleton(project_dir: Path, typescript: bool = True) -> Path:
    """Lay down the files `npm create vite` would produce for a React app."""
    jsx = "tsx" if typescript else "jsx"
    js = "ts" if typescript else "js"
    (project_dir / "src").mkdir(parents=True, exist_ok=True)
    package = {
        "name": project_dir.name,
        "private": True,
        "version": "0.0.0",
        "type": "module",
        "scripts": {
            "dev": "vite",
            "build": "tsc -b && vite build" if typescript else "vite build",
            "lint": "eslint .",
            "preview": "vite preview",
        },
        "dependencies": {"react": "^19.0.0", "react-dom": "^19.0.0"},
    }
    (project_dir / "package.json").write_text(json.dumps(package, indent=2), encoding="utf-8")
    (project_dir / "src" / f"App.{jsx}").write_text(DEFAULT_APP, encoding="utf-8")
    (project_dir / "src" / f"main.{jsx}").write_text("import App from './App'\n", encoding="utf-8")
    (project_dir / "src" / "App.css").write_text("#root { margin: 0 auto; }\n", encoding="utf-8")
    (project_dir / "src" / "index.css").write_text(":root { font-family: system-ui; }\n", encoding="utf-8")
    (project_dir / f"vite.config.{js}").write_text("export default {}\n", encoding="utf-8")
    if typescript:
        (project_dir / "tsconfig.json").write_text("{}\n", encoding="utf-8")
    return project_dir


def record_generated(project_dir: Path, typescript: bool = True) -> Path:
    """Write the marker `xreact create` leaves behind, fingerprinting the Vite files as generated."""
    jsx = "tsx" if typescript else "jsx"
    js = "ts" if typescript else "js"
    files = {}
    for relative in (f"src/App.{jsx}", "src/index.css", f"vite.config.{js}"):
        content = (project_dir / relative).read_text(encoding="utf-8")
        files[relative] = {"stage": None, "sha256": fingerprint(content)}
    marker = {"name": project_dir.name, "language": "typescript" if typescript else "javascript", "files": files}
    (project_dir / MARKER_FILE).write_text(yaml.safe_dump(marker, sort_keys=False), encoding="utf-8")
    return project_dir


class FakeRunner(CommandRunner):
    """Records commands instead of running them; `npm create vite` writes a skeleton."""

    def __init__(self, git_repo: bool = False) -> None:
        super().__init__(package_manager="npm")
        self.commands: list[list[str]] = []
        self.git_repo = git_repo
        self.fail_on: list[str] = []
        self.scaffold = True

    def run(self, args, cwd: Path) -> None:
        command = list(args)
        self.commands.append(command)
        joined = " ".join(command)
        if any(joined.startswith(prefix) for prefix in self.fail_on):
            raise CommandError(command, 1)
        if command[:2] == ["npm", "create"] and self.scaffold:
            write_vite_skeleton(cwd / command[3], typescript=command[-1].endswith("-ts"))

    def succeeds(self, args, cwd: Path) -> bool:
        self.commands.append(list(args))
        return self.git_repo

    def installed(self) -> list[str]:
        packages = []
        for command in self.commands:
            if command[:2] == ["npm", "install"]:
                packages.extend(item for item in command[2:] if not item.startswith("--"))
        return packages


@pytest.fixture
def fake_runner() -> FakeRunner:
    return FakeRunner()


@pytest.fixture
def ts_project(tmp_path: Path) -> Path:
    return record_generated(write_vite_skeleton(tmp_path / "ts-app", typescript=True), typescript=True)


@pytest.fixture
def js_project(tmp_path: Path) -> Path:
    return record_generated(write_vite_skeleton(tmp_path / "js-app", typescript=False), typescript=False)


@pytest.fixture
def vite_project(tmp_path: Path) -> Path:
    """A TypeScript project made by `npm create vite` directly, without an xreact marker."""
    return write_vite_skeleton(tmp_path / "vite-app", typescript=True)
