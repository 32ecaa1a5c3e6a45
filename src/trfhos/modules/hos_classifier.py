"""
HOS classifier and report writer.

Turns finished chains into report rows. For a two-level chain the longer
repeat is compared to the shorter one: a clearly higher TRF score and a
clearly higher %identity in the longer repeat suggest the longer unit is the
real (higher order) repeat. Chains with three or more levels are reported
but left unclassified.
"""

from __future__ import annotations

import logging
import math
from collections import Counter
from dataclasses import dataclass, astuple
from typing import Iterable, Optional, TextIO

import pandas as pd

from trfhos.config import ClassificationConfig
from trfhos.constants import (
    FLAG_NONE,
    FLAG_STRONG,
    FLAG_UNRESOLVED,
    FLAG_WEAK,
    REPORT_COLUMNS,
)
from trfhos.modules.hos_matcher import HosChainEntry
from trfhos.modules.trf_dat import SequenceKey
from trfhos.utils.logging import get_logger


@dataclass(frozen=True)
class ReportRow:
    """One line of the HOS report."""

    id: int
    level: int
    start: int
    end: int
    length: int
    copies: float
    score: int
    identity: int
    flag: str
    seq_id: str


def score_ratio(longer_score: float, shorter_score: float) -> float:
    """Longer repeat's score relative to the shorter repeat's score."""
    if shorter_score == 0:
        return math.inf if longer_score > 0 else 0.0
    return longer_score / shorter_score


def classify_pair(
    previous: HosChainEntry,
    current: HosChainEntry,
    config: Optional[ClassificationConfig] = None,
) -> str:
    """Tag for the second entry of a two-level chain.

    Scores and identities are compared longer-vs-shorter regardless of which
    of the two repeats TRF reported first.
    """
    config = config or ClassificationConfig()
    score, prev_score = current.score, previous.score
    identity, prev_identity = current.identity, previous.identity
    if previous.length > current.length:
        score, prev_score = prev_score, score
        identity, prev_identity = prev_identity, identity

    better_score = score_ratio(score, prev_score) > config.score_threshold
    better_identity = identity - prev_identity > config.identity_threshold

    if better_score and better_identity:
        return FLAG_STRONG
    if better_score or better_identity:
        return FLAG_WEAK
    return FLAG_NONE


def chain_flags(
    chain: list[HosChainEntry], config: Optional[ClassificationConfig] = None
) -> list[str]:
    """One flag per chain entry."""
    levels = len(chain)
    if levels > 2:
        return [FLAG_UNRESOLVED] * levels
    flags = [FLAG_NONE]
    for i in range(1, levels):
        flags.append(classify_pair(chain[i - 1], chain[i], config))
    return flags


class HosClassifier:
    """Builds report rows from a completed chain store."""

    def __init__(
        self,
        config: Optional[ClassificationConfig] = None,
        logger: Optional[logging.Logger] = None,
    ):
        self.config = config or ClassificationConfig()
        self.logger = logger or get_logger(self.__class__.__name__)
        self.flag_counts: Counter = Counter()
        self.chain_count = 0

    def build_rows(
        self, chains: Iterable[tuple[SequenceKey, list[HosChainEntry]]]
    ) -> list[ReportRow]:
        """Rows for every chain with two or more entries, in store order."""
        rows: list[ReportRow] = []
        report_id = 0
        for key, chain in chains:
            levels = len(chain)
            if levels < 2:
                continue
            report_id += 1
            for entry, flag in zip(chain, chain_flags(chain, self.config)):
                rows.append(
                    ReportRow(
                        id=report_id,
                        level=levels,
                        start=entry.start,
                        end=entry.end,
                        length=entry.length,
                        copies=entry.copies,
                        score=entry.score,
                        identity=entry.identity,
                        flag=flag,
                        seq_id=key.header,
                    )
                )
                if flag:
                    self.flag_counts[flag] += 1
        self.chain_count = report_id
        self.logger.debug(f"Classified {report_id} chains into {len(rows)} rows")
        return rows


def rows_to_dataframe(rows: list[ReportRow]) -> pd.DataFrame:
    """Report rows as a DataFrame with the report's column names."""
    df = pd.DataFrame([astuple(row) for row in rows], columns=REPORT_COLUMNS)
    if df.empty:
        return df
    int_columns = ["ID", "LEVEL", "START", "END", "LENGTH", "SCORE", "%IDENT"]
    df[int_columns] = df[int_columns].astype(int)
    df["COPIES"] = df["COPIES"].astype(float)
    return df


def write_report(rows: list[ReportRow], handle: TextIO) -> None:
    """Write the tab-separated report, ending with one blank line.

    Fields are joined unquoted so SEQ_ID is the ``Sequence:`` text as-is,
    even when it holds quotes or tabs.
    """
    df = rows_to_dataframe(rows)
    handle.write("\t".join(df.columns) + "\n")
    for values in df.astype(str).itertuples(index=False, name=None):
        handle.write("\t".join(values) + "\n")
    handle.write("\n")
