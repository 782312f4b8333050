from __future__ import annotations

from ..compose import (
    TAILWIND_IMPORT,
    add_tailwind_plugin,
    app_path,
    keep_user_file,
    patch_user_file,
    vite_config_path,
    write_app_component,
    write_vite_config,
)
from ..config import TAILWIND_PACKAGES
from ..console import done, step
from ..runner import CommandRunner
from ..workspace import Workspace

STAGE = "tailwind"
INDEX_CSS = "src/index.css"


def setup_tailwind(workspace: Workspace, runner: CommandRunner) -> None:
    step("\nSetting up Tailwind CSS...")
    runner.install(TAILWIND_PACKAGES, workspace.root)

    # index.css first: the Vite config and App component read it to detect Tailwind.
    if workspace.is_generated(INDEX_CSS):
        workspace.render_stage(STAGE)
    else:
        styles = workspace.read_text(INDEX_CSS)
        if TAILWIND_IMPORT not in styles:
            workspace.write_text(INDEX_CSS, f"{TAILWIND_IMPORT}\n\n{styles}", STAGE, generated=False)

    if not write_vite_config(workspace, STAGE):
        relative = vite_config_path(workspace)
        patch_user_file(
            workspace,
            relative,
            add_tailwind_plugin(workspace.read_text(relative)),
            STAGE,
            "Add tailwindcss() from '@tailwindcss/vite' to its plugins.",
        )

    if write_app_component(workspace, STAGE):
        workspace.remove("src/App.css")
    else:
        keep_user_file(workspace, app_path(workspace), "Tailwind classes are available in every component.")
    done("Tailwind CSS setup completed")
