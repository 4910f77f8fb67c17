"""CLI tools: addonhub validate-info, addonhub scan-screenshots."""

from __future__ import annotations

from importlib import metadata
from pathlib import Path

import typer

from addonhub.conversion import parse_dependency_id, parse_info
from addonhub.exceptions import ManifestParseError, UnsafeFieldValueError
from addonhub.index import quote
from addonhub.regeneration import select_screenshots
from addonhub.regeneration.engine import INFO_FILE
from addonhub.schema import TreeEntry

app = typer.Typer(
    name="addonhub",
    help="AddonHub: verified add-on registry tooling.",
)


def _version_callback(value: bool) -> None:
    if not value:
        return
    try:
        version = metadata.version("addonhub")
    except metadata.PackageNotFoundError:
        version = "unknown"
    typer.echo(f"addonhub {version}")
    raise typer.Exit(0)


@app.callback()
def main_callback(
    version: bool = typer.Option(False, "--version", callback=_version_callback, is_eager=True, help="Show version."),
) -> None:
    """AddonHub command line."""


@app.command("validate-info")
def validate_info_command(
    path: Path = typer.Argument(Path(INFO_FILE), help="Path to an info file or a checkout containing one."),
) -> None:
    """Check that an info manifest parses and renders into the add-on index."""
    target = path / INFO_FILE if path.is_dir() else path
    if not target.is_file():
        typer.echo(f"FAIL: {target}: file not found")
        raise typer.Exit(1)
    try:
        info = parse_info(target.read_text(encoding="utf-8"))
    except (ManifestParseError, UnicodeDecodeError) as exc:
        typer.echo(f"FAIL: {target}: {exc}")
        raise typer.Exit(1) from exc

    problems: list[str] = []
    for field, value in (("title", info.title), ("license", info.license)):
        try:
            quote(value, field=field)
        except UnsafeFieldValueError as exc:
            problems.append(str(exc))
    for dependency_id in info.dependencies:
        try:
            parse_dependency_id(dependency_id)
        except ValueError as exc:
            problems.append(f"dependencies: {exc}")
    if problems:
        for problem in problems:
            typer.echo(f"FAIL: {target}: {problem}")
        raise typer.Exit(1)
    typer.echo(f"OK: {target} ({info.title or 'untitled'}, {len(info.dependencies)} dependencies)")


@app.command("scan-screenshots")
def scan_screenshots_command(
    path: Path = typer.Argument(Path("."), help="Add-on checkout directory."),
) -> None:
    """List the screenshot files a checkout would publish."""
    root = path.resolve()
    if not root.is_dir():
        typer.echo(f"FAIL: {root}: not a directory")
        raise typer.Exit(1)
    entries = [
        TreeEntry(path=item.relative_to(root).as_posix(), is_dir=item.is_dir())
        for item in sorted(root.rglob("*"))
        if ".git" not in item.relative_to(root).parts
    ]
    names = select_screenshots(entries)
    if not names:
        typer.echo("No screenshots found.")
        return
    for name in names:
        typer.echo(name)


def main() -> None:
    """Console script entry point."""
    app()


if __name__ == "__main__":
    main()
