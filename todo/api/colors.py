from enum import Enum

class TaskColor(Enum):
    RED = "[red]"
    GREEN = "[green]"
    DONE = "[strike dim]"
    RESET = "[/]"

    def __str__(self):
        return self.value


class BoardStyle(str, Enum):
    """Kolory ramek dla widoków tablicy."""
    SELECTED = "blue"
    TODAY = "red"
    THIS_WEEK = "green"
    OTHER = "grey50"

    def __str__(self):
        return self.value
