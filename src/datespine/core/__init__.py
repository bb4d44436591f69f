"""
Run orchestration: builder, results and the programmatic API.
"""

from datespine.core.api import check, load_project, preview, run
from datespine.core.executor import CalendarBuild, CalendarBuilder, RunResult

__all__ = [
    "CalendarBuild",
    "CalendarBuilder",
    "RunResult",
    "check",
    "load_project",
    "preview",
    "run",
]
