"""Tests for the scan -> match -> classify runner."""

from io import StringIO
from pathlib import Path
import sys

import pytest

ROOT = Path(__file__).resolve().parents[2]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from trfhos.config import Config
from trfhos.constants import REPORT_COLUMNS
from trfhos.core.pipeline import find_hos, run_hos_finder
from trfhos.exceptions import InputError, TrfHosError


HEADER = "\t".join(REPORT_COLUMNS)


class TestFindHos:
    """Test cases for find_hos."""

    def test_example_is_strong_hos(self, hos_example_dat):
        rows, summary = find_hos(StringIO(hos_example_dat))
        assert [(r.id, r.level, r.length, r.flag) for r in rows] == [
            (1, 2, 164, ""),
            (1, 2, 328, "HOS"),
        ]
        assert all(r.seq_id == "gnl|ti|2250104470 GGZG7125.g1" for r in rows)
        assert summary.sequences == 2
        assert summary.repeats == 3
        assert summary.chains == 1
        assert summary.rows == 2
        assert summary.flags == {"HOS": 1}

    def test_no_sequence_markers(self, repeat_line):
        rows, summary = find_hos(StringIO("just some text\n" + repeat_line(1, 100, 10) + "\n"))
        assert rows == []
        assert summary.sequences == 0
        assert summary.skipped_lines == 2

    def test_mixed_chain_sizes(self, dat_text, repeat_line):
        text = dat_text(
            [
                ("a", [repeat_line(1, 1000, 100), repeat_line(1, 1000, 200)]),
                ("single", [repeat_line(1, 1000, 100)]),
                ("b", [repeat_line(5, 500, 50), repeat_line(8, 505, 150)]),
                (
                    "c",
                    [
                        repeat_line(1, 1200, 100),
                        repeat_line(1, 1200, 200),
                        repeat_line(1, 1200, 300),
                    ],
                ),
            ]
        )
        rows, summary = find_hos(StringIO(text))
        assert [r.id for r in rows] == [1, 1, 2, 2, 3, 3, 3]
        assert [r.seq_id for r in rows] == ["a", "a", "b", "b", "c", "c", "c"]
        assert [r.flag for r in rows[4:]] == ["???"] * 3
        assert summary.chains == 3

    def test_reads_from_path(self, tmp_path, hos_example_dat):
        dat = tmp_path / "input.dat"
        dat.write_text(hos_example_dat)
        rows, _ = find_hos(dat)
        assert len(rows) == 2

    def test_missing_path_raises_input_error(self, tmp_path):
        missing = tmp_path / "nope.dat"
        with pytest.raises(InputError) as exc_info:
            find_hos(missing)
        assert exc_info.value.path == missing
        assert isinstance(exc_info.value, TrfHosError)

    def test_config_thresholds_used(self, dat_text, repeat_line):
        text = dat_text(
            [("s", [repeat_line(1, 1000, 100, score=100), repeat_line(1, 1000, 200, score=110)])]
        )
        rows, _ = find_hos(StringIO(text))
        assert rows[1].flag == ""

        config = Config()
        config.classification.score_threshold = 1.05
        rows, _ = find_hos(StringIO(text), config=config)
        assert rows[1].flag == "hos"


class TestRunHosFinder:
    """Test cases for run_hos_finder."""

    def test_writes_to_handle(self, hos_example_dat):
        out = StringIO()
        summary = run_hos_finder(StringIO(hos_example_dat), output=out)
        lines = out.getvalue().split("\n")
        assert lines[0] == HEADER
        assert lines[2].endswith("\tHOS\tgnl|ti|2250104470 GGZG7125.g1")
        assert out.getvalue().endswith("\n\n")
        assert summary.rows == 2

    def test_writes_to_path(self, tmp_path, hos_example_dat):
        output = tmp_path / "out" / "hos.tsv"
        run_hos_finder(StringIO(hos_example_dat), output=output)
        text = output.read_text()
        assert text.startswith(HEADER + "\n")
        assert text.count("\n") == 4

    def test_writes_to_stdout(self, capsys):
        run_hos_finder(StringIO(""))
        assert capsys.readouterr().out == HEADER + "\n\n"

    def test_summary_logged(self, caplog, hos_example_dat):
        with caplog.at_level("INFO", logger="trfhos"):
            run_hos_finder(StringIO(hos_example_dat), output=StringIO())
        assert "Found 1 HOS candidate chains" in caplog.text

    def test_summary_to_dict(self, hos_example_dat):
        summary = run_hos_finder(StringIO(hos_example_dat), output=StringIO())
        data = summary.to_dict()
        assert data["chains"] == 1
        assert data["flags"] == {"HOS": 1}
