"""Click application entrypoint for trf-hos-finder."""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Optional

import click

from trfhos import __version__
from trfhos.cli.exit_codes import EXIT_ERROR, EXIT_SIGINT, EXIT_SUCCESS
from trfhos.config import Config, load_config
from trfhos.exceptions import TrfHosError
from trfhos.utils.logging import get_logger, level_from_verbosity, setup_logging


def _print_version(ctx: click.Context, _param: click.Parameter, value: bool) -> None:
    if value and not ctx.resilient_parsing:
        click.echo(f"trf-hos-finder {__version__}")
        ctx.exit()


def _print_config(ctx: click.Context, _param: click.Parameter, value: bool) -> None:
    """Print the default configuration template."""
    if not value or ctx.resilient_parsing:
        return
    from trfhos.resources import get_default_config

    click.echo(get_default_config(), nl=False)
    ctx.exit()


def build_config(
    config_path: Optional[Path],
    offset: Optional[int],
    score_threshold: Optional[float],
    identity_threshold: Optional[float],
) -> Config:
    """Load the YAML config (if any) and apply command line overrides."""
    cfg = load_config(config_path) if config_path else Config()
    if offset is not None:
        cfg.offset = offset
    if score_threshold is not None:
        cfg.classification.score_threshold = score_threshold
    if identity_threshold is not None:
        cfg.classification.identity_threshold = identity_threshold
    cfg.validate()
    return cfg


@click.command(context_settings=dict(help_option_names=["-h", "--help"]))
@click.argument(
    "dat_file",
    type=click.Path(exists=True, dir_okay=False, allow_dash=True, path_type=Path),
)
@click.option(
    "-o",
    "--output",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Write the report here instead of standard output",
)
@click.option(
    "-c",
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Configuration file (YAML)",
)
@click.option("--offset", type=int, default=None, help="Max start/end difference in nt [default: 10]")
@click.option(
    "--score-threshold",
    type=float,
    default=None,
    help="Longer/shorter TRF score ratio that must be exceeded [default: 1.15]",
)
@click.option(
    "--identity-threshold",
    type=float,
    default=None,
    help="Longer minus shorter %identity that must be exceeded [default: 5]",
)
@click.option(
    "-v",
    "--verbose",
    count=True,
    help="Increase log verbosity (-v for INFO, -vv for DEBUG)",
)
@click.option("--log-file", type=click.Path(path_type=Path), help="Path for log file output")
@click.option(
    "--print-config",
    is_flag=True,
    is_eager=True,
    expose_value=False,
    callback=_print_config,
    help="Print the default YAML configuration and exit.",
)
@click.option(
    "-V",
    "--version",
    is_flag=True,
    is_eager=True,
    expose_value=False,
    callback=_print_version,
    help="Show the version and exit.",
)
def cli(
    dat_file: Path,
    output: Optional[Path],
    config_path: Optional[Path],
    offset: Optional[int],
    score_threshold: Optional[float],
    identity_threshold: Optional[float],
    verbose: int,
    log_file: Optional[Path],
) -> None:
    """Find candidate higher order structure (HOS) in a TRF *.dat file.

    DAT_FILE is Tandem Repeats Finder .dat output ('-' reads standard input).

    \b
    A sequence is reported when:
      1) it has more than one tandem repeat,
      2) two repeats occupy approximately the same range (start and end
         within --offset nt),
      3) one repeat unit is approximately a whole multiple (>1.5x) of the
         other.
    The longer repeat's line is tagged 'hos' when either of these holds,
    and 'HOS' when both hold:
      4) its TRF score is more than --score-threshold times the shorter
         repeat's score,
      5) its %identity is more than --identity-threshold points above the
         shorter repeat's.
    Sequences with three or more candidate repeats are tagged '???'.

    \b
    Sample output (tab delimited):
    ID  LEVEL  START  END  LENGTH  COPIES  SCORE  %IDENT  HOS?  SEQ_ID
    1   2      51     948  164     5.5     590    70            gnl|ti|2250104470 GGZG7125.g1
    1   2      51     951  328     2.8     735    86      HOS   gnl|ti|2250104470 GGZG7125.g1
    """
    from trfhos.core.pipeline import run_hos_finder

    try:
        cfg = build_config(config_path, offset, score_threshold, identity_threshold)
    except TrfHosError as exc:
        # no usable config: log with the command line settings only
        setup_logging(level=level_from_verbosity(verbose), log_file=log_file)
        get_logger("cli").error(str(exc))
        sys.exit(EXIT_ERROR)

    # -v and --log-file take precedence over the config file
    default_level = logging.getLevelName(cfg.runtime.log_level.upper())
    setup_logging(
        level=level_from_verbosity(verbose, default=default_level),
        log_file=log_file or cfg.runtime.log_file,
    )
    logger = get_logger("cli")

    try:
        summary = run_hos_finder(dat_file, output=output, config=cfg)
    except TrfHosError as exc:
        logger.error(str(exc))
        sys.exit(EXIT_ERROR)
    except KeyboardInterrupt:
        click.echo("\nInterrupted", err=True)
        sys.exit(EXIT_SIGINT)

    logger.debug(f"Run summary: {summary.to_dict()}")


def main(argv: Optional[list[str]] = None) -> int:
    """Console script entry point; returns the process exit code."""
    try:
        cli(argv, prog_name="trf-hos-finder")
        return EXIT_SUCCESS
    except SystemExit as exc:
        if exc.code is None:
            return EXIT_SUCCESS
        return exc.code if isinstance(exc.code, int) else EXIT_ERROR
    except Exception as exc:
        click.echo(f"Error: {exc}", err=True)
        return EXIT_ERROR
