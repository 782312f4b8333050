"""Files that more than one stage contributes to.

The App component and the Vite config are rendered from the features that
are present in the project at the time of the call, so a stage that runs
later extends what an earlier stage set up instead of replacing it.

Rendering only happens while the file still holds generated content. Once
the user has edited it, stages patch it in place with the helpers below, or
leave it alone and say so.
"""

from __future__ import annotations

import re
import textwrap
from dataclasses import dataclass

from .console import warn
from .workspace import Workspace

TAILWIND_IMPORT = '@import "tailwindcss";'
TAILWIND_PLUGIN_IMPORT = "import tailwindcss from '@tailwindcss/vite'"
STORE_PROVIDER_IMPORT = "import { StoreProvider } from './store/StoreProvider';"

# An import statement, possibly spread over several lines, with or without a semicolon.
IMPORT_STATEMENT = re.compile(r"^import\b[^;]*?(?:from\s+)?['\"][^'\"]+['\"];?[ \t]*$", re.MULTILINE)
RETURN_BLOCK = re.compile(r"return \(\n(?P<body>.*?)\n(?P<indent>[ \t]*)\);", re.DOTALL)
RETURN_LINE = re.compile(r"^(?P<indent>[ \t]*)return (?P<jsx><.*>);?[ \t]*$", re.MULTILINE)
REACT_PLUGIN = re.compile(r"\breact\([^()]*\)")


@dataclass(frozen=True)
class AppFeatures:
    tailwind: bool = False
    router: bool = False
    store: bool = False


def app_path(workspace: Workspace) -> str:
    return f"src/App.{workspace.jsx_ext}"


def vite_config_path(workspace: Workspace) -> str:
    return f"vite.config.{workspace.js_ext}"


def detect_features(workspace: Workspace) -> AppFeatures:
    index_css = "src/index.css"
    tailwind = workspace.exists(index_css) and TAILWIND_IMPORT in workspace.read_text(index_css)
    return AppFeatures(
        tailwind=tailwind,
        router=workspace.exists(f"src/navigation/index.{workspace.jsx_ext}"),
        store=workspace.exists(f"src/store/StoreProvider.{workspace.jsx_ext}"),
    )


def add_import(source: str, statement: str) -> str:
    """Insert ``statement`` after the last import of ``source`` unless it is already there."""
    if statement in source:
        return source
    imports = list(IMPORT_STATEMENT.finditer(source))
    if not imports:
        return f"{statement}\n\n{source}"
    end = imports[-1].end()
    return f"{source[:end]}\n{statement}{source[end:]}"


def wrap_in_store_provider(source: str) -> str | None:
    """Wrap the first returned JSX of a component in ``<StoreProvider>``.

    Returns None when no ``return (...)`` block or single-line JSX return is found.
    """
    if "<StoreProvider>" in source:
        return source

    block = RETURN_BLOCK.search(source)
    if block is not None:
        indent = block.group("indent")
        body = textwrap.indent(block.group("body"), "  ")
        wrapped = f"return (\n{indent}  <StoreProvider>\n{body}\n{indent}  </StoreProvider>\n{indent});"
        match = block
    else:
        match = RETURN_LINE.search(source)
        if match is None:
            return None
        indent = match.group("indent")
        wrapped = (
            f"{indent}return (\n"
            f"{indent}  <StoreProvider>\n"
            f"{indent}    {match.group('jsx')}\n"
            f"{indent}  </StoreProvider>\n"
            f"{indent});"
        )
    patched = source[: match.start()] + wrapped + source[match.end():]
    return add_import(patched, STORE_PROVIDER_IMPORT)


def add_tailwind_plugin(source: str) -> str | None:
    """Register the Tailwind plugin next to ``react()``; None when there is no ``react()`` call."""
    if "@tailwindcss/vite" in source:
        return source
    plugin = REACT_PLUGIN.search(source)
    if plugin is None:
        return None
    patched = f"{source[: plugin.end()]}, tailwindcss(){source[plugin.end():]}"
    return add_import(patched, TAILWIND_PLUGIN_IMPORT)


def keep_user_file(workspace: Workspace, relative: str, hint: str) -> None:
    workspace.keep(relative)
    warn(f"{relative} has local changes and was left as is. {hint}")


def patch_user_file(workspace: Workspace, relative: str, patched: str | None, stage: str, hint: str) -> bool:
    """Write ``patched`` over a user-edited file, or keep the file when there is nothing to write."""
    if patched is None:
        keep_user_file(workspace, relative, hint)
        return False
    if patched != workspace.read_text(relative):
        workspace.write_text(relative, patched, stage, generated=False)
    return True


def write_app_component(workspace: Workspace, stage: str) -> bool:
    """Render the App component; False when it holds user changes and was not touched."""
    relative = app_path(workspace)
    if not workspace.is_generated(relative):
        return False
    features = detect_features(workspace)
    content = workspace.render(
        "app/App.j2",
        {"tailwind": features.tailwind, "router": features.router, "store": features.store},
    )
    workspace.write_text(relative, content, stage)
    return True


def write_vite_config(workspace: Workspace, stage: str) -> bool:
    """Render the Vite config; False when it holds user changes and was not touched."""
    relative = vite_config_path(workspace)
    if not workspace.is_generated(relative):
        return False
    features = detect_features(workspace)
    content = workspace.render("app/vite.config.j2", {"tailwind": features.tailwind})
    workspace.write_text(relative, content, stage)
    return True
