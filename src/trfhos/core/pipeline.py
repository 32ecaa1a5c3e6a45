"""Runs the scan -> match -> classify -> report sequence for one .dat file."""

from __future__ import annotations

import logging
import sys
from contextlib import ExitStack
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional, TextIO, Union

from trfhos.config import Config
from trfhos.constants import FLAG_STRONG, FLAG_UNRESOLVED, FLAG_WEAK
from trfhos.exceptions import InputError
from trfhos.modules.hos_classifier import HosClassifier, ReportRow, write_report
from trfhos.modules.hos_matcher import ChainStore, HosMatcher
from trfhos.modules.trf_dat import TrfDatScanner
from trfhos.utils.logging import LogTemplates, get_logger

InputSource = Union[str, Path, TextIO]


@dataclass
class RunSummary:
    """Counters collected over one run."""

    lines: int = 0
    sequences: int = 0
    repeats: int = 0
    skipped_lines: int = 0
    chains: int = 0
    rows: int = 0
    flags: dict[str, int] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            "lines": self.lines,
            "sequences": self.sequences,
            "repeats": self.repeats,
            "skipped_lines": self.skipped_lines,
            "chains": self.chains,
            "rows": self.rows,
            "flags": dict(self.flags),
        }


def _open_input(source: InputSource, stack: ExitStack) -> TextIO:
    if not isinstance(source, (str, Path)):
        return source
    if str(source) == "-":
        return sys.stdin
    try:
        return stack.enter_context(open(source, "r", encoding="utf-8", errors="replace"))
    except OSError as exc:
        raise InputError(f"Cannot open TRF .dat file {source}: {exc}", path=source) from exc


def find_hos(
    source: InputSource,
    config: Optional[Config] = None,
    logger: Optional[logging.Logger] = None,
) -> tuple[list[ReportRow], RunSummary]:
    """Scan a .dat input and return the report rows with run counters."""
    config = config or Config()
    logger = logger or get_logger("pipeline")

    store = ChainStore()
    matcher = HosMatcher(config.matching, store=store)
    scanner = TrfDatScanner(matcher.observe)

    with ExitStack() as stack:
        handle = _open_input(source, stack)
        scanner.scan(handle)

    name = source if isinstance(source, (str, Path)) else getattr(source, "name", "<stream>")
    logger.info(LogTemplates.FILE_LOADED.format(lines=scanner.line_count, path=name))
    logger.info(
        LogTemplates.SCAN_STATS.format(
            sequences=scanner.sequence_count,
            repeats=scanner.repeat_count,
            skipped=scanner.skipped_lines,
        )
    )

    classifier = HosClassifier(config.classification)
    rows = classifier.build_rows(store.items())

    summary = RunSummary(
        lines=scanner.line_count,
        sequences=scanner.sequence_count,
        repeats=scanner.repeat_count,
        skipped_lines=scanner.skipped_lines,
        chains=classifier.chain_count,
        rows=len(rows),
        flags=dict(classifier.flag_counts),
    )
    logger.info(LogTemplates.CHAIN_STATS.format(chains=summary.chains, rows=summary.rows))
    logger.info(
        LogTemplates.FLAG_STATS.format(
            strong=summary.flags.get(FLAG_STRONG, 0),
            weak=summary.flags.get(FLAG_WEAK, 0),
            unresolved=summary.flags.get(FLAG_UNRESOLVED, 0),
        )
    )
    return rows, summary


def run_hos_finder(
    source: InputSource,
    output: Optional[Union[Path, TextIO]] = None,
    config: Optional[Config] = None,
    logger: Optional[logging.Logger] = None,
) -> RunSummary:
    """Find HOS candidates in ``source`` and write the report.

    ``output`` may be a path, an open text handle, or None for stdout.
    """
    logger = logger or get_logger("pipeline")
    rows, summary = find_hos(source, config=config, logger=logger)

    if output is None:
        write_report(rows, sys.stdout)
    elif isinstance(output, (str, Path)):
        path = Path(output)
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w", encoding="utf-8", newline="") as fh:
            write_report(rows, fh)
        logger.info(LogTemplates.FILE_CREATED.format(path=path))
    else:
        write_report(rows, output)

    return summary
