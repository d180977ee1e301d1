"""
playas - Alias Table Patcher Command-Line Interface
===================================================

Builds patched zobjs from a PlayAs manifest and inspects the pieces the
build works from.

Commands
--------
- **build**: Compile the manifest and write the patched zobj
- **dictionary**: Print the final symbol dictionary
- **table**: Hex dump the compiled alias table
- **trailer**: List the display lists in a zobj's PlayAs trailer
- **hierarchy**: Show the located skeleton hierarchy header

Usage Examples
--------------
Build a patched zobj:
    $ playas build adult.txt adult.zobj -o adult.patched.zobj

Check what every name resolves to:
    $ playas dictionary adult.txt adult.zobj

Inspect a zobj:
    $ playas trailer adult.zobj
    $ playas hierarchy adult.zobj
"""

import logging
from pathlib import Path
from typing import Optional

import click

from playas_sdk import __version__
from playas_sdk.cli.errors import handle_cli_exception
from playas_sdk.config import BuildConfig
from playas_sdk.patch import AliasPatch
from playas_sdk.zobj import locate_hierarchy, parse_trailer


# =============================================================================
# Shared Context
# =============================================================================

class Context:
    """
    Shared context for CLI commands.

    Stores verbosity and the build configuration.
    """

    def __init__(self) -> None:
        self.verbose: bool = False
        self.config: BuildConfig = BuildConfig.from_env()

    def setup_logging(self) -> None:
        """Configure logging based on verbosity and configuration."""
        level = logging.DEBUG if self.verbose else self.config.logging_level()
        logging.basicConfig(
            level=level,
            format="%(levelname)s: %(message)s" if self.verbose else "%(message)s",
        )


pass_context = click.make_pass_decorator(Context, ensure=True)

INPUT_FILE = click.Path(exists=True, dir_okay=False, path_type=Path)


def _build(ctx: Context, manifest: Path, zobj: Path, name: Optional[str] = None) -> AliasPatch:
    try:
        return AliasPatch.from_files(manifest, zobj, name=name, config=ctx.config)
    except Exception as e:
        handle_cli_exception(e, verbose=ctx.verbose)


# =============================================================================
# Main CLI Group
# =============================================================================

@click.group()
@click.version_option(__version__, "--version", "-V", prog_name="playas")
@click.option("-v", "--verbose", is_flag=True, help="Verbose output")
@pass_context
def main(ctx: Context, verbose: bool) -> None:
    """
    PlayAs alias table patcher.

    Compile a PlayAs manifest into a zobj's object pool.

    \b
    Commands:
      build       Write the patched zobj
      dictionary  Print the final symbol dictionary
      table       Hex dump the alias table
      trailer     List the zobj's PlayAs trailer
      hierarchy   Show the skeleton hierarchy header
    """
    ctx.verbose = verbose
    ctx.setup_logging()


# =============================================================================
# Build Command
# =============================================================================

@main.command("build")
@click.argument("manifest", type=INPUT_FILE)
@click.argument("zobj", type=INPUT_FILE)
@click.option(
    "-o", "--output",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Output zobj (default: ZOBJ with the configured suffix)",
)
@click.option("-n", "--name", help="Zobj name used in messages")
@pass_context
def cmd_build(
    ctx: Context,
    manifest: Path,
    zobj: Path,
    output: Optional[Path],
    name: Optional[str],
) -> None:
    """
    Compile MANIFEST into the object pool of ZOBJ.

    \b
    Examples:
      playas build adult.txt adult.zobj
      playas build adult.txt adult.zobj -o out.zobj
    """
    patch = _build(ctx, manifest, zobj, name)

    if output is None:
        output = zobj.with_name(zobj.stem + ctx.config.output_suffix)

    try:
        patch.write(output)
    except Exception as e:
        handle_cli_exception(e, verbose=ctx.verbose)

    click.echo(
        f"Wrote {output} (alias table 0x{len(patch.alias_table):X} of "
        f"0x{patch.pool_size:X} bytes at 0x{patch.pool_offset:X})"
    )


# =============================================================================
# Inspection Commands
# =============================================================================

@main.command("dictionary")
@click.argument("manifest", type=INPUT_FILE)
@click.argument("zobj", type=INPUT_FILE)
@pass_context
def cmd_dictionary(ctx: Context, manifest: Path, zobj: Path) -> None:
    """Print every symbol of the final dictionary."""
    patch = _build(ctx, manifest, zobj)
    click.echo(patch.dictionary.format())


@main.command("table")
@click.argument("manifest", type=INPUT_FILE)
@click.argument("zobj", type=INPUT_FILE)
@pass_context
def cmd_table(ctx: Context, manifest: Path, zobj: Path) -> None:
    """Hex dump the alias table, one 8-byte word per row."""
    patch = _build(ctx, manifest, zobj)
    table = patch.alias_table

    for i in range(0, len(table), 8):
        click.echo(f"{patch.pool_offset + i:08X}: {table[i:i + 8].hex(' ').upper()}")


@main.command("trailer")
@click.argument("zobj", type=INPUT_FILE)
@pass_context
def cmd_trailer(ctx: Context, zobj: Path) -> None:
    """List the display lists in the PlayAs trailer of ZOBJ."""
    try:
        entries = parse_trailer(zobj.read_bytes(), zobj.name)
    except Exception as e:
        handle_cli_exception(e, verbose=ctx.verbose)

    for entry in entries.values():
        click.echo(f"0x{entry.offset:08X}  {entry.name}")
    click.echo(f"{len(entries)} display list(s)")


@main.command("hierarchy")
@click.argument("zobj", type=INPUT_FILE)
@pass_context
def cmd_hierarchy(ctx: Context, zobj: Path) -> None:
    """Show the skeleton hierarchy header found in ZOBJ."""
    try:
        header = locate_hierarchy(zobj.read_bytes(), zobj.name)
    except Exception as e:
        handle_cli_exception(e, verbose=ctx.verbose)

    click.echo(f"Header:     0x{header.offset:08X}")
    click.echo(f"Bytes:      {header.data.hex(' ').upper()}")
    click.echo(f"Limb table: 0x{header.limb_table_offset:08X}")
    click.echo(f"Limbs:      {header.limb_count} ({header.display_list_count} with display lists)")


if __name__ == "__main__":
    main()
