"""CLI commands for decompiled APK analysis."""

import json
from contextlib import nullcontext
from pathlib import Path

import typer
from rich.table import Table

from apkstack.core.analyzer import ApkAnalyzer
from apkstack.core.catalog import load_catalog
from apkstack.core.extractors import extract_package_name
from apkstack.core.platform import classify_platform
from apkstack.exceptions import ApkStackError
from apkstack.models.analyze import AnalysisReport
from apkstack.utils.config import get_catalog_path, get_scan_workers
from apkstack.utils.output import console

app = typer.Typer(no_args_is_help=True)


def _display_report(report: AnalysisReport) -> None:
    """Render a report as rich tables."""
    console.print(f"\n[bold]{report.app_name}[/bold] ({report.package_name})")
    console.print(f"  Platform: [cyan]{report.platform}[/cyan]")
    console.print(f"  APK size: {report.apk_size_in_mb} MB")

    gradle_info = report.gradle_info
    if gradle_info:
        if gradle_info.version_name or gradle_info.version_code is not None:
            code = gradle_info.version_code
            console.print(
                f"  Version:  {gradle_info.version_name or '?'} "
                f"({code if code is not None else '?'})"
            )
        sdks = (
            ("Min SDK", gradle_info.min_sdk),
            ("Target SDK", gradle_info.target_sdk),
        )
        for label, sdk in sdks:
            if sdk:
                release = sdk.version_name or "unknown"
                console.print(f"  {label}: {sdk.level} ({release})")

    if report.libraries:
        table = Table(title=f"Libraries ({len(report.libraries)})")
        table.add_column("Name", style="cyan")
        table.add_column("Package", style="green")
        table.add_column("Category")
        for library in report.libraries:
            table.add_row(library.name, library.package_name, library.category)
        console.print()
        console.print(table)
    elif not report.platform.is_native:
        console.print_warning(
            f"Library detection is not supported for {report.platform} apps."
        )
    else:
        console.print_warning("No known libraries found.")

    if report.untracked_libraries:
        count = len(report.untracked_libraries)
        console.print(f"\n[bold]Untracked packages ({count}):[/bold]")
        for package in sorted(report.untracked_libraries):
            console.print(f"  {package}")

    if report.permissions:
        console.print(f"\n[bold]Permissions ({len(report.permissions)}):[/bold]")
        for permission in report.permissions:
            console.print(f"  {permission}")

    console.print()


@app.command("report")
def analyze_report(
    decompiled_dir: Path = typer.Argument(
        ...,
        help="apktool output directory of the APK.",
        exists=True,
        file_okay=False,
        dir_okay=True,
        readable=True,
    ),
    apk_path: Path = typer.Option(
        ...,
        "--apk",
        "-a",
        help="Original APK file (used for its size).",
        exists=True,
        file_okay=True,
        dir_okay=False,
        readable=True,
    ),
    catalog_path: Path = typer.Option(
        None,
        "--catalog",
        "-c",
        help=(
            "JSON library catalog "
            "(default: $APKSTACK_CATALOG or config catalog_path)."
        ),
    ),
    package_name: str = typer.Option(
        None,
        "--package",
        "-p",
        help="Package name (default: read from AndroidManifest.xml).",
    ),
    workers: int = typer.Option(
        None,
        "--workers",
        "-w",
        min=1,
        help="Threads used to scan smali directories.",
    ),
    json_output: bool = typer.Option(
        False,
        "--json",
        "-j",
        help="Output as JSON.",
    ),
) -> None:
    """Analyze a decompiled APK and report its tech stack.

    Detects the framework, known third-party libraries, untracked
    packages, permissions and build metadata.
    """
    console.set_json_mode(json_output)

    try:
        catalog_path = catalog_path or get_catalog_path()
        if catalog_path is None:
            console.print_error(
                "No library catalog given. Use --catalog, set APKSTACK_CATALOG, "
                "or configure ~/.apkstack/config.json (catalog_path)."
            )
            raise typer.Exit(1)

        catalog = load_catalog(catalog_path)
        package_name = package_name or extract_package_name(decompiled_dir)
        if not package_name:
            console.print_error(
                "Could not read package name from manifest. Use --package."
            )
            raise typer.Exit(1)

        analyzer = ApkAnalyzer(catalog, workers=workers or get_scan_workers())
        status = console.status("Analyzing decompiled APK...")
        with status if not json_output else nullcontext():
            report = analyzer.analyze(package_name, apk_path, decompiled_dir)

        if json_output:
            output = report.model_dump(mode="json")
            output["untracked_libraries"] = sorted(report.untracked_libraries)
            typer.echo(json.dumps(output, indent=2))
            return

        _display_report(report)

    except ApkStackError as e:
        console.print_error(str(e))
        raise typer.Exit(1) from None


@app.command("platform")
def detect_platform(
    decompiled_dir: Path = typer.Argument(
        ...,
        help="apktool output directory of the APK.",
        exists=True,
        file_okay=False,
        dir_okay=True,
        readable=True,
    ),
    json_output: bool = typer.Option(
        False,
        "--json",
        "-j",
        help="Output as JSON.",
    ),
) -> None:
    """Detect the framework a decompiled APK was built with."""
    console.set_json_mode(json_output)
    platform = classify_platform(decompiled_dir)

    if json_output:
        output = {"platform": str(platform), "native": platform.is_native}
        typer.echo(json.dumps(output))
        return

    console.print(f"Platform: [cyan]{platform}[/cyan]")
