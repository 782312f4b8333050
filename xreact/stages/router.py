from __future__ import annotations

from ..compose import app_path, keep_user_file, write_app_component
from ..config import ROUTER_PACKAGES
from ..console import console, done, step
from ..runner import CommandRunner
from ..workspace import Workspace

STAGE = "router"


def setup_router(workspace: Workspace, runner: CommandRunner) -> None:
    """Install react-router-dom and add navigation, pages and a layout."""
    step("\nSetting up React Router DOM...")
    runner.install(ROUTER_PACKAGES, workspace.root)

    workspace.render_stage(STAGE)
    if write_app_component(workspace, STAGE):
        workspace.remove("src/App.css")
    else:
        keep_user_file(workspace, app_path(workspace), "Render <Router /> from './navigation' to enable the routes.")

    done("React Router DOM setup completed")
    console.print("  src/navigation/        - BrowserRouter and route table")
    console.print("  src/pages/             - Home and Login pages")
    console.print("  src/components/layout/ - MainLayout with <Outlet />")
