"""Activity recording for asset changes."""

from .recorder import ActivityEntry, ActivityRecorder, LoggingActivityRecorder

__all__ = ["ActivityEntry", "ActivityRecorder", "LoggingActivityRecorder"]
