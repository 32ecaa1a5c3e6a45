"""Scanning, matching and classification modules for trf-hos-finder."""

from trfhos.modules.trf_dat import RepeatRecord, SequenceContext, SequenceKey, TrfDatScanner
from trfhos.modules.hos_matcher import ChainStore, HosChainEntry, HosMatcher
from trfhos.modules.hos_classifier import HosClassifier, ReportRow, write_report

__all__ = [
    "RepeatRecord",
    "SequenceContext",
    "SequenceKey",
    "TrfDatScanner",
    "ChainStore",
    "HosChainEntry",
    "HosMatcher",
    "HosClassifier",
    "ReportRow",
    "write_report",
]
