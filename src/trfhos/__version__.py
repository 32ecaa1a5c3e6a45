"""Version information for trf-hos-finder."""

__version__ = "0.3.0"
__author__ = "Keith Bradnam"
__license__ = "CC-BY-NC-SA-3.0"
__description__ = "Find candidate higher order structure (HOS) in Tandem Repeats Finder output"
