"""CLI application for dh_vim-addon."""

import asyncio
import json
from pathlib import Path

import typer
from rich.console import Console

from vimaddon.buildsys import DebianBuildSystem
from vimaddon.config import DEFAULT_JOBS, DEFAULT_SUBSTVAR, InstallerConfig, parse_kinds
from vimaddon.errors import CollaboratorError, VimAddonError
from vimaddon.helptags import HelpTagGenerator
from vimaddon.logging import configure_logging
from vimaddon.models import RunReport
from vimaddon.orchestrator import Orchestrator

console = Console(soft_wrap=True)


def format_text_output(report: RunReport) -> str:
    """Format a human-readable summary of the run."""
    lines = []
    for result in report.results:
        if result.success:
            line = f"{result.package.name}: {len(result.installed)} addon(s) installed"
            if result.dependency:
                line += f", depends on {result.dependency}"
            lines.append(line)
        else:
            for error in result.errors:
                lines.append(f"{result.package.name}: error: {error}")

    if report.helptags_generated:
        lines.append(f"Help tags generated for {len(report.doc_dirs)} doc director(ies)")
    return "\n".join(lines)


def format_json_output(report: RunReport) -> str:
    """Format JSON output."""
    packages = []
    for result in report.results:
        packages.append({
            "package": result.package.name,
            "success": result.success,
            "addons": [
                {
                    "kind": addon.kind.suffix,
                    "source": addon.source_relpath,
                    "name": addon.resolved_name,
                    "link": str(addon.destination_path),
                }
                for addon in result.installed
            ],
            "dependency": result.dependency,
            "errors": result.errors,
        })

    return json.dumps(
        {
            "packages": packages,
            "doc_dirs": [str(d) for d in report.doc_dirs],
            "helptags_generated": report.helptags_generated,
        },
        indent=2,
    )


def print_report(report: RunReport, format_type: str) -> None:
    if format_type == "json":
        typer.echo(format_json_output(report))
    else:
        output = format_text_output(report)
        if output:
            console.print(output)


app = typer.Typer(
    name="dh_vim-addon",
    help="dh_vim-addon - Install Vim and Neovim addons into the native package hierarchy",
    add_completion=False,
)


@app.command()
def install(
    package: list[str] | None = typer.Option(None, "--package", "-p", help="Act on this package only (repeatable)"),
    no_package: list[str] | None = typer.Option(None, "--no-package", "-N", help="Do not act on this package (repeatable)"),
    debian_dir: Path = typer.Option(Path("debian"), "--debian-dir", help="Path to the debian directory"),
    skip: list[str] | None = typer.Option(None, "--skip", help="Ignore manifests of this kind, e.g. neovim-addon (repeatable)"),
    no_helptags: bool = typer.Option(False, "--no-helptags", help="Do not generate help tags"),
    helptags_command: str = typer.Option(
        "helpztags", "--helptags-command", envvar="DH_VIM_ADDON_HELPTAGS", help="Help-tag generator command"
    ),
    jobs: int = typer.Option(DEFAULT_JOBS, "--jobs", "-j", help="Packages processed in parallel"),
    substvar: str = typer.Option(DEFAULT_SUBSTVAR, "--substvar", help="Substitution variable for the dependency"),
    format_type: str = typer.Option("text", "--format", help="Output format: text or json"),
    verbose: bool = typer.Option(False, "--verbose", "-v", envvar="DH_VERBOSE", help="Verbose logging"),
) -> None:
    """dh_vim-addon - Link the addons listed in debian/<package>.vim-addon and friends, then generate help tags."""
    configure_logging(verbose=verbose)

    try:
        if format_type not in ("text", "json"):
            console.print(f"Error: Unsupported format: {format_type}", style="red")
            raise typer.Exit(1)

        config = InstallerConfig(
            debian_dir=debian_dir,
            packages=package or [],
            excluded_packages=no_package or [],
            skipped_kinds=parse_kinds(skip or []),
            helptags=not no_helptags,
            helptags_command=helptags_command,
            jobs=jobs,
            substvar=substvar,
        ).validate()

        build_system = DebianBuildSystem(
            config.debian_dir,
            packages=config.packages,
            excluded_packages=config.excluded_packages,
            skipped_kinds=config.skipped_kinds,
            substvar=config.substvar,
        )
        orchestrator = Orchestrator(
            build_system,
            tag_generator=HelpTagGenerator(config.helptags_argv()) if config.helptags else None,
            max_concurrency=config.jobs,
            generate_tags=config.helptags,
        )
        report = asyncio.run(orchestrator.run())
        print_report(report, format_type)

        if not report.success:
            console.print(f"Error: {len(report.failed)} package(s) failed", style="red")
            raise typer.Exit(1)

    except typer.Exit:
        raise
    except CollaboratorError as e:
        # Packages that finished before the abort are still reported.
        if e.report is not None:
            print_report(e.report, format_type)
        console.print(f"Error: {e}", style="red")
        raise typer.Exit(1)
    except VimAddonError as e:
        console.print(f"Error: {e}", style="red")
        raise typer.Exit(1)


if __name__ == "__main__":
    app()
