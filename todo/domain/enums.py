from enum import Enum

class Bucket(str, Enum):
    TODAY = "today"
    THIS_WEEK = "this_week"
    OTHER = "other"

    def __str__(self):
        return self.value


class Notice(str, Enum):
    """Krótkie komunikaty pokazywane przez Notifier."""
    MISSING_FIELDS = "⚠ Enter a task title and a due date"
    INVALID_DATE = "⚠ Due date must look like YYYY-MM-DD"
    ADDED = "✅ Task added"
    DELETED = "🚮 Task deleted"
    CANCELLED = "cancelled"
    SAVE_FAILED = "⚠ Could not save tasks"

    def __str__(self):
        return self.value
