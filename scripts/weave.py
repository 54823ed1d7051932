#!/usr/bin/env python3
"""
AspectJ Weaving CLI

Runs ajc over compiled class directories and publishes the woven classes.

Commands:
    weave - Weave compiled classes with the aspects found on the classpath

Examples:\n

    weave.py weave --classes-dir build/classes/java/main --classpath lib/aspectjrt.jar

    weave.py weave --config weave.yaml --verbose        # Settings from YAML, debug output

    weave.py weave --config weave.yaml --write-to-log   # Send ajc messages to build/ajc.log
"""

from pathlib import Path
from typing import List, Optional

import typer
from dotenv import load_dotenv
from typing_extensions import Annotated

from ajweave.contexts.weaving import WeaveError, WeaveTask, load_weave_config
from ajweave.contexts.weaving.config import DEFAULT_BUILD_DIR
from ajweave.contexts.weaving.logger import setup_weaving_logger

load_dotenv()


app = typer.Typer(
    help="Weave compiled classes with the AspectJ compiler (ajc)",
    add_completion=False,
    invoke_without_command=True,
)


@app.callback()
def main(ctx: typer.Context):
    """Show help by default when no command is provided."""
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit()


@app.command("weave")
def weave_command(
    config_file: Annotated[
        Optional[Path],
        typer.Option("--config", "-c", help="YAML weave configuration", exists=True, dir_okay=False),
    ] = None,
    classes_dirs: Annotated[
        Optional[List[Path]],
        typer.Option("--classes-dir", help="Compiled class directory to weave (repeatable)"),
    ] = None,
    classpath: Annotated[
        Optional[List[Path]],
        typer.Option("--classpath", help="Classpath / aspect path entry (repeatable)"),
    ] = None,
    output_dir: Annotated[
        Optional[Path],
        typer.Option("--output-dir", "-o", help="Publish woven classes here (default: classes dir)"),
    ] = None,
    build_dir: Annotated[
        Optional[Path],
        typer.Option("--build-dir", "-b", help=f"Build root (default: {DEFAULT_BUILD_DIR})"),
    ] = None,
    source: Annotated[
        Optional[str], typer.Option("--source", help="Java source level (default: 1.7)")
    ] = None,
    target: Annotated[
        Optional[str], typer.Option("--target", help="Java target level (default: 1.7)")
    ] = None,
    write_to_log: Annotated[
        Optional[bool],
        typer.Option(
            "--write-to-log/--no-write-to-log",
            help="Write ajc messages to <build-dir>/ajc.log (default: from --config, else off)",
        ),
    ] = None,
    compiler: Annotated[
        Optional[str], typer.Option("--compiler", help="ajc executable (default: AJC_COMPILER)")
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Show debug output, including the ajc command line"),
    ] = False,
):
    """
    Weave compiled classes with ajc.

    Options given on the command line override values from --config.

    Examples:\n

        $ weave.py weave --classes-dir build/classes/java/main --classpath lib/aspects.jar

        $ weave.py weave --config weave.yaml --source 1.8 --target 1.8
    """
    try:
        config = load_weave_config(
            config_file,
            class_dirs=classes_dirs or None,
            classpath=classpath or None,
            output_dir=output_dir,
            build_dir=build_dir,
            source=source,
            target=target,
            write_to_log=write_to_log,
            compiler=compiler,
        )
    except ValueError as e:
        typer.secho(f"Error: {e}\n", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    setup_weaving_logger(config.build_dir / "logs", verbose=verbose)

    typer.secho(f"\nWeaving: {len(config.class_dirs)} class dir(s)", fg=typer.colors.BLUE, bold=True)
    typer.echo(f"Source/target: {config.source}/{config.target}")
    typer.echo("")

    try:
        result = WeaveTask(config).run()
    except (WeaveError, ValueError) as e:
        typer.echo("")
        typer.secho(f"✗ Weaving failed: {e}", fg=typer.colors.RED, bold=True)
        raise typer.Exit(code=1)

    typer.echo("")
    typer.secho("✓ Weaving succeeded", fg=typer.colors.GREEN, bold=True)
    typer.echo(f"  {result.summary}")
    typer.echo(f"  Output: {result.output_dir}")
    if result.log_path:
        typer.echo(f"  Log: {result.log_path}")
    typer.echo("")


if __name__ == "__main__":
    app()
