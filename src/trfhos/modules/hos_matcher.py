"""
HOS candidate matcher.

Pairs each new repeat with an earlier repeat of the same sequence when the
two cover roughly the same span and the longer unit is close to a whole
multiple of the shorter one. Matching repeats are collected into one chain
per sequence, seeded with the sequence's first repeat.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Iterator, Optional

from trfhos.config import MatchingConfig
from trfhos.modules.trf_dat import RepeatRecord, SequenceContext, SequenceKey
from trfhos.utils.logging import get_logger


@dataclass(frozen=True)
class HosChainEntry:
    """Summary of one repeat stored in a HOS chain."""

    start: int
    end: int
    length: int
    copies: float
    ratio: float
    score: int
    identity: int


class ChainStore:
    """Insertion-ordered mapping of sequence key to HOS chain."""

    def __init__(self) -> None:
        self._chains: dict[SequenceKey, list[HosChainEntry]] = {}

    def add(self, key: SequenceKey, entry: HosChainEntry) -> None:
        self._chains.setdefault(key, []).append(entry)

    def get(self, key: SequenceKey) -> list[HosChainEntry]:
        return list(self._chains.get(key, []))

    def items(self) -> Iterator[tuple[SequenceKey, list[HosChainEntry]]]:
        for key, chain in self._chains.items():
            yield key, list(chain)

    def candidates(self) -> Iterator[tuple[SequenceKey, list[HosChainEntry]]]:
        """Chains with at least one repeat paired to the seed."""
        for key, chain in self.items():
            if len(chain) > 1:
                yield key, chain

    def __len__(self) -> int:
        return len(self._chains)

    def __contains__(self, key: object) -> bool:
        return key in self._chains


def fractional_part(ratio: float) -> float:
    """Digits after the decimal point, without rounding (e.g. 2.97 -> 0.97).

    The digits are read from the number as printed to 15 significant
    digits, so 43/20 gives exactly 0.15 rather than 0.1499999...
    """
    text = f"{ratio:.15g}"
    if "e" in text or "n" in text:
        # exponent, inf or nan: no printed decimal digits to read
        return ratio - math.trunc(ratio) if math.isfinite(ratio) else 0.0
    return float("0." + (text.partition(".")[2] or "0"))


def length_ratio(a: int, b: int) -> Optional[float]:
    """Longer length over shorter length; None when either length is zero."""
    shorter, longer = sorted((a, b))
    if shorter <= 0:
        return None
    return longer / shorter


def within_offset(current: RepeatRecord, previous: RepeatRecord, offset: int) -> bool:
    """True when both start and end coordinates lie within ``offset`` nt."""
    return (
        abs(current.start - previous.start) <= offset
        and abs(current.end - previous.end) <= offset
    )


def is_multiple(ratio: float, config: MatchingConfig) -> bool:
    """Loose test for 'longer unit is a whole multiple of the shorter one'."""
    frac = fractional_part(ratio)
    return (frac < config.frac_low or frac > config.frac_high) and ratio > config.min_ratio


class HosMatcher:
    """Accumulates HOS chains while a TRF .dat file is scanned.

    Pass :meth:`observe` as the scanner's repeat callback.
    """

    def __init__(
        self,
        config: Optional[MatchingConfig] = None,
        store: Optional[ChainStore] = None,
        logger: Optional[logging.Logger] = None,
    ):
        self.config = config or MatchingConfig()
        self.store = store if store is not None else ChainStore()
        self.logger = logger or get_logger(self.__class__.__name__)

    def _entry(self, record: RepeatRecord, ratio: float) -> HosChainEntry:
        return HosChainEntry(
            start=record.start,
            end=record.end,
            length=record.length(self.config.length_source),
            copies=record.copies,
            ratio=ratio,
            score=record.score,
            identity=record.identity,
        )

    def find_partner(
        self, record: RepeatRecord, earlier: list[RepeatRecord]
    ) -> Optional[tuple[RepeatRecord, float]]:
        """First earlier repeat that pairs with ``record``, with the ratio."""
        source = self.config.length_source
        for previous in earlier:
            if not within_offset(record, previous, self.config.offset):
                continue
            ratio = length_ratio(record.length(source), previous.length(source))
            if ratio is None:
                continue
            if is_multiple(ratio, self.config):
                return previous, ratio
        return None

    def observe(self, context: SequenceContext, record: RepeatRecord) -> None:
        """Handle a repeat that was just appended to ``context.repeats``."""
        key = context.key
        if len(context.repeats) == 1:
            self.store.add(key, self._entry(record, 1.0))
            return

        match = self.find_partner(record, context.repeats[:-1])
        if match is None:
            return

        previous, ratio = match
        self.store.add(key, self._entry(record, ratio))
        self.logger.debug(
            f"{context.header}: {record.start}-{record.end} pairs with "
            f"{previous.start}-{previous.end} (ratio {ratio:.3f})"
        )
