#!/usr/bin/env python3
"""
sbundle CLI - Main command entrypoint

Usage:
    sbundle --help
    sbundle create
    sbundle info <descriptor>
    sbundle resolve <descriptor> <label>
    sbundle should-run <descriptor> <section>
    sbundle validate <descriptor>
    sbundle doctor
"""

import sys
from pathlib import Path

import click
from rich.console import Console

# Initialize rich console
console = Console()


@click.group(invoke_without_command=True)
@click.option("--version", "-V", is_flag=True, help="Show version and exit")
@click.pass_context
def main(ctx, version):
    """sbundle - Staging bundles for container image builds.

    \b
    Commands:
      create      Allocate a bundle and write its descriptor
      info        Show a bundle descriptor
      resolve     Print the path of a filesystem object
      should-run  Check whether a build section runs
      validate    Validate a bundle descriptor
      doctor      Check dependencies and the temp root
    """
    if version:
        from sbundle import __version__
        console.print(f"sbundle version {__version__}")
        sys.exit(0)

    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


@main.command()
@click.option("--prefix", "-p", default=None, help="Staging directory name prefix")
@click.option("--config", "config_path", type=click.Path(exists=True, dir_okay=False),
              default=None, help="YAML build config")
@click.option("--recipe", "-r", "recipe_path", type=click.Path(exists=True, dir_okay=False),
              default=None, help="Parsed recipe (YAML or JSON)")
@click.option("--section", "-s", "sections", multiple=True,
              help="Section to run (repeatable, order matters; 'all' or 'none' allowed)")
@click.option("--bind", "-B", "bind_paths", multiple=True, help="Host path to bind mount (repeatable)")
@click.option("--force/--no-force", default=None, help="Overwrite existing output")
@click.option("--update/--no-update", default=None, help="Build incrementally")
@click.option("--notest/--test", default=None, help="Skip the test section")
@click.option("--output", "-o", type=click.Path(dir_okay=False), default=None,
              help="Descriptor path (default: <bundle>/bundle.json)")
@click.option("--verbose", "-v", is_flag=True, help="Show detailed output")
def create(prefix, config_path, recipe_path, sections, bind_paths, force, update, notest, output, verbose):
    """Allocate a build bundle.

    \b
    Examples:
      sbundle create
      sbundle create -p mybuild -s setup -s post
      sbundle create --config build.yaml -o /var/tmp/bundle.json
    """
    from sbundle.commands.create import run_create

    result = run_create(
        prefix=prefix,
        config_path=Path(config_path) if config_path else None,
        recipe_path=Path(recipe_path) if recipe_path else None,
        sections=sections,
        bind_paths=bind_paths,
        force=force,
        update=update,
        notest=notest,
        output=Path(output) if output else None,
        verbose=verbose,
        console=console
    )

    sys.exit(0 if result else 1)


@main.command()
@click.argument("descriptor", type=click.Path())
@click.option("--format", "output_format", type=click.Choice(["text", "json", "yaml"]),
              default="text")
def info(descriptor, output_format):
    """Show information about a bundle.

    \b
    Examples:
      sbundle info /tmp/sbuild--abc123/bundle.json
      sbundle info bundle.json --format json
    """
    from sbundle.commands.info import run_info

    result = run_info(
        descriptor_path=Path(descriptor),
        output_format=output_format,
        console=console
    )

    sys.exit(0 if result else 1)


@main.command()
@click.argument("descriptor", type=click.Path())
@click.argument("label")
def resolve(descriptor, label):
    """Print the absolute path of a filesystem object.

    \b
    Examples:
      sbundle resolve bundle.json rootfs
    """
    from sbundle.commands.resolve import run_resolve

    result = run_resolve(
        descriptor_path=Path(descriptor),
        label=label,
        console=console
    )

    sys.exit(0 if result else 1)


@main.command("should-run")
@click.argument("descriptor", type=click.Path())
@click.argument("section")
@click.option("--quiet", "-q", is_flag=True, help="Only set the exit status")
def should_run(descriptor, section, quiet):
    """Exit 0 if SECTION runs for the bundle, 1 otherwise.

    \b
    Examples:
      sbundle should-run bundle.json post && run-post-section
    """
    from sbundle.commands.sections import run_should_run

    result = run_should_run(
        descriptor_path=Path(descriptor),
        section=section,
        quiet=quiet,
        console=console
    )

    sys.exit(0 if result else 1)


@main.command()
@click.argument("descriptor", type=click.Path())
@click.option("--verbose", "-v", is_flag=True, help="Show detailed output")
@click.option("--strict", is_flag=True, help="Treat warnings as errors")
@click.option("--format", "output_format", type=click.Choice(["text", "json"]), default="text")
def validate(descriptor, verbose, strict, output_format):
    """Validate a bundle descriptor.

    \b
    Examples:
      sbundle validate bundle.json
      sbundle validate --verbose --strict bundle.json
    """
    from sbundle.commands.validate import run_validate

    result = run_validate(
        descriptor_path=Path(descriptor),
        verbose=verbose,
        strict=strict,
        output_format=output_format,
        console=console
    )

    sys.exit(0 if result else 1)


@main.command()
def doctor():
    """Check system dependencies and configuration.

    \b
    Checks:
      - Python version
      - Required packages
      - Schema file
      - Temp root writability
    """
    from sbundle.commands.doctor import run_doctor

    result = run_doctor(console=console)
    sys.exit(0 if result else 1)


if __name__ == "__main__":
    main()
