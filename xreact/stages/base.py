from __future__ import annotations

from ..compose import app_path, vite_config_path, write_vite_config
from ..config import VITE_TEMPLATES
from ..console import done, step
from ..exceptions import StageError
from ..runner import CommandRunner
from ..workspace import Workspace

STAGE = "base"


def package_scripts(use_typescript: bool) -> dict[str, str]:
    extensions = "ts,tsx" if use_typescript else "js,jsx"
    return {
        "dev": "vite",
        "build": "tsc && vite build" if use_typescript else "vite build",
        "preview": "vite preview",
        "lint": f"eslint . --ext {extensions} --report-unused-disable-directives --max-warnings 0",
    }


def setup_base(workspace: Workspace, runner: CommandRunner) -> None:
    """Create the Vite React skeleton and apply the house Vite settings."""
    step("\nScaffolding project with Vite...")
    runner.create_vite(workspace.root.name, VITE_TEMPLATES[workspace.use_typescript], workspace.root.parent)
    if not workspace.root.is_dir():
        raise StageError(f"Vite did not create the project directory: {workspace.root}")
    done("Vite project created")

    # Later stages may replace these wholesale until the user edits them.
    for relative in (app_path(workspace), "src/index.css", vite_config_path(workspace)):
        workspace.adopt(relative)

    write_vite_config(workspace, STAGE)
    workspace.merge_package_json("scripts", package_scripts(workspace.use_typescript), STAGE)
    done("Vite setup completed")
