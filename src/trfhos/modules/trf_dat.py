"""
TRF .dat scanner - reads Tandem Repeats Finder output sequence by sequence.

A .dat file is a banner followed by, for every input sequence, a
``Sequence: <header>`` line, a ``Parameters:`` line and one line per
detected repeat:

    start end period copies consensus_size %matches %indels score A C G T entropy consensus repeat

Only the numeric repeat lines and the sequence markers are recognised;
everything else is skipped without complaint.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import Callable, Iterable, NamedTuple, Optional

from trfhos.utils.logging import get_logger


SEQUENCE_MARKER = re.compile(r"^Sequence: (.*)$")
# start, end, period, copies (copies must carry a decimal point)
REPEAT_LINE = re.compile(r"^\d+\s+\d+\s+\d+\s+\d+\.\d+\s")

# start..entropy are 13 tokens, followed by at least the consensus text
MIN_REPEAT_FIELDS = 14


@dataclass(frozen=True)
class RepeatRecord:
    """One tandem repeat reported by TRF."""

    start: int
    end: int
    period: int
    copies: float
    consensus_size: int
    percent_matches: int
    percent_indels: int
    score: int

    @property
    def identity(self) -> int:
        """Percent identity between adjacent copies (the %matches column)."""
        return self.percent_matches

    def length(self, source: str = "period") -> int:
        """Unit length taken from the configured .dat column."""
        if source == "consensus_size":
            return self.consensus_size
        return self.period


class SequenceKey(NamedTuple):
    """Identifies one sequence block; the ordinal separates repeated headers."""

    header: str
    ordinal: int


@dataclass
class SequenceContext:
    """Repeats seen so far for the sequence currently being scanned."""

    header: str
    ordinal: int
    repeats: list[RepeatRecord] = field(default_factory=list)

    @property
    def key(self) -> SequenceKey:
        return SequenceKey(self.header, self.ordinal)


def parse_repeat_line(line: str) -> Optional[RepeatRecord]:
    """Parse a numeric .dat repeat line, or return None if it isn't one."""
    if not REPEAT_LINE.match(line):
        return None
    parts = line.split()
    if len(parts) < MIN_REPEAT_FIELDS:
        return None
    try:
        record = RepeatRecord(
            start=int(parts[0]),
            end=int(parts[1]),
            period=int(parts[2]),
            copies=float(parts[3]),
            consensus_size=int(parts[4]),
            percent_matches=int(parts[5]),
            percent_indels=int(parts[6]),
            score=int(parts[7]),
        )
    except ValueError:
        return None
    if record.start > record.end:
        return None
    return record


def parse_sequence_marker(line: str) -> Optional[str]:
    """Return the header text of a ``Sequence:`` line, else None."""
    match = SEQUENCE_MARKER.match(line)
    return match.group(1) if match else None


RepeatCallback = Callable[[SequenceContext, RepeatRecord], None]


class TrfDatScanner:
    """Single-pass scanner that groups repeat records by sequence.

    Every parsed record is appended to the active ``SequenceContext`` and
    handed to ``on_repeat`` before the next line is read, so callers see
    each repeat together with all earlier repeats of the same sequence.
    """

    def __init__(
        self,
        on_repeat: RepeatCallback,
        logger: Optional[logging.Logger] = None,
    ):
        self.on_repeat = on_repeat
        self.logger = logger or get_logger(self.__class__.__name__)
        self.context: Optional[SequenceContext] = None
        self.sequence_count = 0
        self.repeat_count = 0
        self.skipped_lines = 0
        self.line_count = 0

    def feed(self, line: str) -> None:
        """Process one input line."""
        self.line_count += 1
        line = line.rstrip("\r\n")
        if not line:
            return

        header = parse_sequence_marker(line)
        if header is not None:
            self.sequence_count += 1
            self.context = SequenceContext(header=header, ordinal=self.sequence_count)
            return

        record = parse_repeat_line(line)
        if record is None:
            self.skipped_lines += 1
            self.logger.debug(f"Skipping line {self.line_count}: {line[:60]!r}")
            return

        if self.context is None:
            self.skipped_lines += 1
            self.logger.debug(
                f"Skipping repeat on line {self.line_count}: no 'Sequence:' line seen yet"
            )
            return

        self.repeat_count += 1
        self.context.repeats.append(record)
        self.on_repeat(self.context, record)

    def scan(self, lines: Iterable[str]) -> None:
        """Feed every line of an input stream."""
        for line in lines:
            self.feed(line)
        self.logger.debug(
            f"Scan finished: {self.sequence_count} sequences, "
            f"{self.repeat_count} repeats, {self.skipped_lines} lines skipped"
        )
