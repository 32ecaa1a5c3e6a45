"""Pytest configuration for trf-hos-finder tests."""

import logging
import sys
from pathlib import Path

import pytest

# Add src directory to Python path
ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))


TRF_BANNER = """Tandem Repeats Finder Program written by:

Gary Benson
Program in Bioinformatics
Boston University
Version 4.09


"""


def _repeat_line(
    start,
    end,
    period,
    copies=2.0,
    score=100,
    identity=90,
    consensus_size=None,
    indels=0,
):
    """Format one TRF .dat repeat line."""
    consensus_size = period if consensus_size is None else consensus_size
    unit = ("ACGT" * (period // 4 + 1))[:period] or "N"
    return (
        f"{start} {end} {period} {copies} {consensus_size} {identity} {indels} {score} "
        f"25 25 25 25 2.00 {unit} {unit * 2}"
    )


def _dat_text(sequences):
    """Build a .dat document from ``[(header, [repeat_line, ...]), ...]``."""
    parts = [TRF_BANNER]
    for header, lines in sequences:
        parts.append(f"Sequence: {header}\n\n\n\n")
        parts.append("Parameters: 2 7 7 80 10 50 500\n\n\n")
        for line in lines:
            parts.append(line + "\n")
        parts.append("\n")
    return "".join(parts)


@pytest.fixture
def repeat_line():
    """Factory for TRF .dat repeat lines."""
    return _repeat_line


@pytest.fixture
def dat_text():
    """Factory for complete TRF .dat documents."""
    return _dat_text


@pytest.fixture
def hos_example_dat():
    """Strong HOS candidate plus a sequence with a single repeat."""
    return _dat_text(
        [
            (
                "gnl|ti|2250104470 GGZG7125.g1",
                [
                    _repeat_line(51, 948, 164, copies=5.5, score=590, identity=70),
                    _repeat_line(51, 951, 328, copies=2.8, score=735, identity=86),
                ],
            ),
            ("gnl|ti|2250104471 GGZG7125.b1", [_repeat_line(10, 200, 12, copies=15.8)]),
        ]
    )


@pytest.fixture(autouse=True)
def reset_logging_after_test():
    """Reset trfhos logger state after each test.

    This prevents test pollution from tests that call setup_logging(),
    which sets propagate=False and breaks caplog in subsequent tests.
    """
    yield
    app_logger = logging.getLogger("trfhos")
    for handler in list(app_logger.handlers):
        app_logger.removeHandler(handler)
    app_logger.setLevel(logging.NOTSET)
    app_logger.propagate = True
