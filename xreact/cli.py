from __future__ import annotations

import json
from enum import Enum
from pathlib import Path
from typing import Callable, Optional

import typer
from rich.console import Console
from rich.table import Table

from . import __version__
from .exceptions import StageError, ValidationError, XReactError
from .generator import GenerationReport, add_stage, generate_project
from .postinstall import run_postinstall
from .prompts import collect_config
from .runner import CommandRunner

app = typer.Typer(help="Interactive React + Vite project generator.")
add_app = typer.Typer(help="Add a single feature to an existing project in the current directory.")
app.add_typer(add_app, name="add")
console = Console()

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_INVALID_INPUT = 2


class OutputFormat(str, Enum):
    table = "table"
    json = "json"
    md = "md"


def _json_print(payload: dict) -> None:
    typer.echo(json.dumps(payload, ensure_ascii=True, sort_keys=True))


def _print_key_value_table(title: str, rows: list[tuple[str, str]]) -> None:
    table = Table(title=title)
    table.add_column("Field")
    table.add_column("Value")
    for key, value in rows:
        table.add_row(key, value)
    console.print(table)


def _emit_success(
    command: str,
    output_format: OutputFormat,
    data: dict,
    md_renderer: Callable[[dict], str] | None = None,
    table_renderer: Callable[[dict], None] | None = None,
) -> None:
    if output_format == OutputFormat.json:
        _json_print(
            {
                "ok": True,
                "command": command,
                "exit_code": EXIT_OK,
                "data": data,
            }
        )
        return

    if output_format == OutputFormat.md and md_renderer is not None:
        console.print(md_renderer(data))
        return

    if output_format == OutputFormat.table and table_renderer is not None:
        table_renderer(data)
        return

    if output_format == OutputFormat.md:
        lines = [f"# {command}", ""]
        lines.extend(f"- **{key}**: {value}" for key, value in data.items())
        console.print("\n".join(lines))
    else:
        _print_key_value_table(
            title=command,
            rows=[(str(key), str(value)) for key, value in data.items()],
        )


def _emit_error(
    command: str,
    output_format: OutputFormat,
    exit_code: int,
    code: str,
    message: str,
) -> None:
    if output_format == OutputFormat.json:
        _json_print(
            {
                "ok": False,
                "command": command,
                "exit_code": exit_code,
                "error": {
                    "code": code,
                    "message": message,
                },
            }
        )
    elif output_format == OutputFormat.md:
        console.print(f"# {command}\n\n- **status**: error\n- **code**: {code}\n- **message**: {message}")
    else:
        console.print(f"[red]Error ({code}):[/red] {message}")

    raise typer.Exit(code=exit_code)


def _report_data(report: GenerationReport) -> dict:
    return {
        "path": str(report.project_dir),
        "stages": list(report.stages),
        "files": list(report.files),
        "rewritten": list(report.rewritten),
        "kept": list(report.kept),
        "conflicts": [
            {
                "section": conflict.section,
                "key": conflict.key,
                "previous": conflict.previous,
                "value": conflict.value,
                "stage": conflict.stage,
            }
            for conflict in report.conflicts
        ],
    }


def _render_report_md(payload: dict) -> str:
    lines = [f"# Project: `{payload['path']}`", ""]
    lines.append(f"- **stages**: {', '.join(payload['stages'])}")
    lines.append(f"- **files_written**: {len(payload['files'])}")
    if payload["rewritten"]:
        lines.append(f"- **rewritten**: {', '.join(payload['rewritten'])}")
    if payload["kept"]:
        lines.append(f"- **kept**: {', '.join(payload['kept'])}")
    if payload["conflicts"]:
        lines.append("\n## package.json overrides")
        lines.extend(
            f"- `{item['section']}.{item['key']}` → `{item['value']}` ({item['stage']})" for item in payload["conflicts"]
        )
    return "\n".join(lines)


def _render_report_table(payload: dict) -> None:
    _print_key_value_table(
        title=f"Project: {payload['path']}",
        rows=[
            ("stages", ", ".join(payload["stages"])),
            ("files written", str(len(payload["files"]))),
            ("rewritten", ", ".join(payload["rewritten"]) if payload["rewritten"] else "-"),
            ("kept as edited", ", ".join(payload["kept"]) if payload["kept"] else "-"),
            ("package.json overrides", str(len(payload["conflicts"]))),
        ],
    )


def _run_guarded(command: str, output_format: OutputFormat, action: Callable[[], GenerationReport]) -> None:
    try:
        report = action()
    except ValidationError as error:
        _emit_error(
            command=command,
            output_format=output_format,
            exit_code=EXIT_INVALID_INPUT,
            code="invalid_input",
            message=str(error),
        )
        raise
    except XReactError as error:
        _emit_error(
            command=command,
            output_format=output_format,
            exit_code=EXIT_ERROR,
            code="stage_error" if isinstance(error, StageError) else "command_failed",
            message=str(error),
        )
        raise

    _emit_success(
        command=command,
        output_format=output_format,
        data=_report_data(report),
        md_renderer=_render_report_md,
        table_renderer=_render_report_table,
    )


@app.command("create")
def create_project(
    name: Optional[str] = typer.Option(None, "--name", "-n", help="App name (lowercase letters, digits, hyphens)."),
    use_typescript: Optional[bool] = typer.Option(None, "--typescript/--javascript", help="Project language."),
    use_tailwind: Optional[bool] = typer.Option(None, "--tailwind/--no-tailwind", help="Add Tailwind CSS."),
    use_react_router: Optional[bool] = typer.Option(None, "--router/--no-router", help="Add React Router DOM."),
    use_rtk_query: Optional[bool] = typer.Option(None, "--rtk-query/--no-rtk-query", help="Add Redux Toolkit Query."),
    use_prettier: Optional[bool] = typer.Option(None, "--prettier/--no-prettier", help="Add Prettier."),
    use_eslint: Optional[bool] = typer.Option(None, "--eslint/--no-eslint", help="Add ESLint."),
    use_husky: Optional[bool] = typer.Option(None, "--husky/--no-husky", help="Add Husky git hooks."),
    directory: Path = typer.Option(Path("."), "--directory", "-d", help="Parent directory of the new project."),
    yes: bool = typer.Option(False, "--yes", "-y", help="Use defaults for every choice not given as an option."),
    output_format: OutputFormat = typer.Option(OutputFormat.table, "--format", help="Output format."),
):
    """Ask a few questions, then scaffold a new React project."""
    parent_dir = directory.resolve()

    def action() -> GenerationReport:
        config = collect_config(
            parent_dir,
            app_name=name,
            use_typescript=use_typescript,
            accept_defaults=yes,
            use_tailwind=use_tailwind,
            use_react_router=use_react_router,
            use_rtk_query=use_rtk_query,
            use_prettier=use_prettier,
            use_eslint=use_eslint,
            use_husky=use_husky,
        )
        return generate_project(config, parent_dir, CommandRunner())

    _run_guarded("create", output_format, action)


def _add(stage: str, directory: Path, output_format: OutputFormat) -> None:
    _run_guarded(f"add {stage}", output_format, lambda: add_stage(stage, directory.resolve(), CommandRunner()))


DIRECTORY_OPTION = typer.Option(Path("."), "--directory", "-d", help="Project directory (defaults to the current one).")
FORMAT_OPTION = typer.Option(OutputFormat.table, "--format", help="Output format.")


@add_app.command("tailwind")
def add_tailwind(directory: Path = DIRECTORY_OPTION, output_format: OutputFormat = FORMAT_OPTION):
    """Add Tailwind CSS."""
    _add("tailwind", directory, output_format)


@add_app.command("router")
def add_router(directory: Path = DIRECTORY_OPTION, output_format: OutputFormat = FORMAT_OPTION):
    """Add React Router DOM with pages and a layout."""
    _add("router", directory, output_format)


@add_app.command("rtk-query")
def add_rtk_query(directory: Path = DIRECTORY_OPTION, output_format: OutputFormat = FORMAT_OPTION):
    """Add Redux Toolkit Query with a store and example endpoints."""
    _add("rtk-query", directory, output_format)


@add_app.command("prettier")
def add_prettier(directory: Path = DIRECTORY_OPTION, output_format: OutputFormat = FORMAT_OPTION):
    """Add Prettier."""
    _add("prettier", directory, output_format)


@add_app.command("eslint")
def add_eslint(directory: Path = DIRECTORY_OPTION, output_format: OutputFormat = FORMAT_OPTION):
    """Add ESLint."""
    _add("eslint", directory, output_format)


@add_app.command("husky")
def add_husky(directory: Path = DIRECTORY_OPTION, output_format: OutputFormat = FORMAT_OPTION):
    """Add Husky, lint-staged and commitlint."""
    _add("husky", directory, output_format)


@app.command("postinstall")
def postinstall() -> None:
    """Install-time hook: launch the generator when running interactively."""
    run_postinstall()


@app.command("version")
def version(
    output_format: OutputFormat = typer.Option(OutputFormat.table, "--format", help="Output format."),
) -> None:
    """Print version."""
    _emit_success(command="version", output_format=output_format, data={"version": __version__})


if __name__ == "__main__":
    app()
