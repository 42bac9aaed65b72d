"""Utility constants for pmun_utils.

Time unit constants represent durations in milliseconds.
Months and years are fixed-size approximations (30 and 365 days), used by the
duration formatter; calendar arithmetic lives in `pmun_utils.dates`.
"""

# Time unit constants (all values in milliseconds)
MILLISECOND = 1
SECOND = 1000
MINUTE = 60_000
HOUR = 3_600_000
DAY = 86_400_000
WEEK = 604_800_000
MONTH = 2_592_000_000
YEAR = 31_536_000_000
