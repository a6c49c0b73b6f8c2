"""CLI commands for hercules-analytics."""

from .catalog import catalog
from .drill import drill
from .exercises import exercises
from .insights_cmd import insights
from .report import report

__all__ = [
    "catalog",
    "drill",
    "exercises",
    "insights",
    "report",
]
