from __future__ import annotations

from ..compose import app_path, patch_user_file, wrap_in_store_provider, write_app_component
from ..config import RTK_QUERY_PACKAGES
from ..console import console, done, step
from ..runner import CommandRunner
from ..workspace import Workspace

STAGE = "rtk_query"


def setup_rtk_query(workspace: Workspace, runner: CommandRunner) -> None:
    """Install Redux Toolkit, add a store, an API slice and example endpoints."""
    step("\nSetting up RTK Query...")
    runner.install(RTK_QUERY_PACKAGES, workspace.root)

    workspace.render_stage(STAGE)
    if not write_app_component(workspace, STAGE):
        relative = app_path(workspace)
        patch_user_file(
            workspace,
            relative,
            wrap_in_store_provider(workspace.read_text(relative)),
            STAGE,
            "Wrap the returned JSX in <StoreProvider> from './store/StoreProvider'.",
        )

    done("RTK Query setup completed")
    console.print("  src/store/     - Redux store and StoreProvider")
    console.print("  src/api/       - API slice with user and posts endpoints")
    if workspace.use_typescript:
        console.print("  src/hooks/     - Typed Redux hooks")
