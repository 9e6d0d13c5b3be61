"""
FuzzyStat exceptions.

Failures outside the control pipeline degrade to a notice; these types mark
where that happens.
"""


class FuzzyStatError(Exception):
    """Base exception for FuzzyStat."""


class InvalidScheduleEntry(FuzzyStatError, ValueError):
    """Schedule entry has a malformed time or refers to an unknown id."""


class WeatherError(FuzzyStatError):
    """Live weather lookup failed."""
