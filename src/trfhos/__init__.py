"""trf-hos-finder: candidate higher order structure in TRF .dat output."""

from trfhos.__version__ import __version__

__all__ = ["__version__"]
