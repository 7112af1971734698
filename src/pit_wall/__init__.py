"""
Measure the progress of a unit-counted job and report on it.

Not a profiling library: you define and report the work done yourself,
then ask for a one-line summary whenever you want to show it.

    >>> progress = Progress("job name", 100)
    >>> progress.increment_work_done()
    >>> progress.progress_string()  # doctest: +SKIP
    'job name 1/100 - 1.0% started 2s ago, eta: 3m'
"""

__version__ = "0.1.0"

from .progress import Progress, ProgressSnapshot
from .utils.duration import format_duration, select_unit

__all__ = [
    "Progress",
    "ProgressSnapshot",
    "format_duration",
    "select_unit",
    "__version__",
]
