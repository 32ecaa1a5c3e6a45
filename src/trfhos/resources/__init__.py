"""Resource files and configuration templates."""


def get_default_config() -> str:
    """Return default configuration YAML content."""
    return """# trf-hos-finder Configuration File

# Runtime settings
runtime:
  log_level: "WARNING"
  log_file: ~

# How two repeats in the same sequence are paired
matching:
  # max difference (nt) between starts, and between ends
  offset: 10
  # fractional part of the length ratio must be < frac_low or > frac_high
  frac_low: 0.15
  frac_high: 0.85
  # longer unit must be more than min_ratio times the shorter one
  min_ratio: 1.5
  # unit length column: "period" or "consensus_size"
  length_source: "period"

# How a pair is tagged in the HOS? column
classification:
  # longer/shorter score ratio must exceed this
  score_threshold: 1.15
  # longer minus shorter %identity must exceed this
  identity_threshold: 5
"""
