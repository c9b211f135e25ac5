"""
m6502asm - 6502 Assembler Command-Line Interface
================================================

Usage Examples
--------------
Basic assembly (writes prog.o):
    $ m6502asm prog.s

Several files, four at a time:
    $ m6502asm -j 4 a.s b.s c.s

With output file:
    $ m6502asm prog.s -o prog.bin

Resolve branch targets and write a listing:
    $ m6502asm --origin '$0600' -l prog.s

Unrecognized dash-prefixed arguments are ignored with a warning, so
flags meant for other assemblers do not stop a build.
"""

from pathlib import Path
from typing import Optional
import logging
import sys

import click

from mos6502_asm import __version__
from mos6502_asm.assembler import Assembler
from mos6502_asm.cli.errors import ExitCode, handle_cli_exception, report_error
from mos6502_asm.config import AssemblerConfig, parse_origin
from mos6502_asm.errors import AssemblerIOError

logger = logging.getLogger(__name__)


def setup_logging(verbose: bool) -> None:
    """Configure logging based on verbosity."""
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(levelname)s: %(message)s" if verbose else "%(message)s",
    )


def _origin_callback(ctx: click.Context, param: click.Parameter, value: Optional[str]) -> Optional[int]:
    if value is None:
        return None
    try:
        return parse_origin(value)
    except ValueError:
        raise click.BadParameter(f"expected $hex, 0xhex or decimal address, got {value!r}")


# =============================================================================
# CLI Definition
# =============================================================================

@click.command(context_settings={"ignore_unknown_options": True})
@click.argument("inputs", nargs=-1, type=click.UNPROCESSED)
@click.option(
    "-o", "--output",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Output file (single input only; default: input with .o suffix)",
)
@click.option(
    "--origin",
    callback=_origin_callback,
    help="Load address of the first instruction, e.g. '$0600'. "
         "Enables branches to absolute targets.",
)
@click.option(
    "-e", "--ext",
    default=None,
    help="Output file extension (default: .o)",
)
@click.option(
    "-l", "--listing",
    is_flag=True,
    help="Write a .lst listing beside each output file",
)
@click.option(
    "-j", "--jobs",
    type=click.IntRange(min=1),
    default=None,
    help="Assemble up to N files in parallel",
)
@click.option(
    "-v", "--verbose",
    is_flag=True,
    help="Verbose output",
)
@click.version_option(version=__version__, prog_name="m6502asm")
def main(
    inputs: tuple[str, ...],
    output: Optional[Path],
    origin: Optional[int],
    ext: Optional[str],
    listing: bool,
    jobs: Optional[int],
    verbose: bool,
) -> None:
    """
    Assemble MOS 6502 source files into flat binaries.

    INPUTS are assembly source files. Each one is assembled on its own;
    an error in one file does not stop the others.

    \b
    Examples:
        m6502asm prog.s                 # Outputs prog.o
        m6502asm prog.s -o prog.bin     # Specify output file
        m6502asm --origin '$0600' prog.s
    """
    setup_logging(verbose)

    files = []
    for arg in inputs:
        if arg.startswith("-"):
            logger.warning(f"Ignoring unknown flag {arg}")
        else:
            files.append(arg)

    if not files:
        click.echo(main.get_usage(click.get_current_context()), err=True)
        click.echo("Error: no input files", err=True)
        sys.exit(ExitCode.INVALID_ARGS)

    if output is not None and len(files) > 1:
        click.echo("Error: -o/--output needs exactly one input file", err=True)
        sys.exit(ExitCode.INVALID_ARGS)

    try:
        config = AssemblerConfig.from_env()
        if origin is not None:
            config.origin = origin
        if ext is not None:
            config.output_extension = ext if ext.startswith(".") else "." + ext
        if jobs is not None:
            config.jobs = jobs
        config.listing = listing
        config.verbose = verbose

        if verbose and config.origin is not None:
            click.echo(f"Origin: ${config.origin:04X}")

        results = Assembler(config).assemble_files(files, output=output)
    except Exception as e:
        handle_cli_exception(e, verbose=verbose, error_type="Assembly")

    exit_code = ExitCode.SUCCESS
    for result in results:
        if result.ok:
            click.echo(f"Assembled {result.source} -> {result.output} ({len(result.code)} bytes)")
        elif isinstance(result.error, AssemblerIOError):
            report_error(result.error)
            if exit_code == ExitCode.SUCCESS:
                exit_code = ExitCode.INVALID_ARGS
        else:
            report_error(result.error, "Assembly")
            exit_code = ExitCode.BUILD_ERROR

    sys.exit(exit_code)


if __name__ == "__main__":
    main()
