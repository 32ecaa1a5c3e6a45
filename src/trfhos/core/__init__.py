"""Core runner for trf-hos-finder."""

from trfhos.core.pipeline import RunSummary, find_hos, run_hos_finder

__all__ = ["RunSummary", "find_hos", "run_hos_finder"]
