

### COMMENTS
# ============================================
# Konwencja użycia błędów domenowych w projekcie
# ============================================
# - Adaptery trwałości:
#     * `save()` mapuje błędy techniczne (OSError, SQLAlchemyError) na PersistenceError
#     * `load()` NIGDY nie rzuca — uszkodzone dane = pusta kolekcja
#     * kodek rzuca TaskDecodeError, adapter go łapie i loguje
#
# - Serwis:
#     * waliduje dane użytkownika i rzuca TaskValidationError
#     * nieznane ID w toggle/remove to cichy no-op, nie błąd
#     * TaskNotFoundError tylko przy „twardym” pobraniu (get_task)
#
# - UI (CLI):
#     * łapie DomainError (lub konkretne klasy) i wyświetla przyjazny komunikat


class DomainError(Exception):
    """Bazowa klasa dla błędów domenowych.
    Umożliwia odróżnienie błędów domeny (logika aplikacji) od błędów technicznych.
    Nie powinna być rzucana bezpośrednio — używaj klas pochodnych.
    """

class TaskValidationError(DomainError):
    """Rzucany, gdy dane wejściowe nie spełniają reguł dla nowego zadania.
    Przykłady:
    - tytuł jest pusty,
    - termin (due_date) jest pusty albo nie jest datą w formacie YYYY-MM-DD.
    Zawiera komunikat (`message`) oraz nazwę pola (`field`), co ułatwia prezentację w UI.
    """
    def __init__(self, field: str, message: str):
        self.field = field
        self.message = message
        super().__init__(self.__str__())
    def __str__(self):
        return f"Validation error on '{self.field}': {self.message}"


class TaskNotFoundError(DomainError):
    """Rzucany, gdy żądane zadanie nie istnieje w kolekcji (tylko `get_task`)."""
    def __init__(self, task_id: int):
        self.task_id = task_id
        super().__init__(self.__str__())
    def __str__(self):
        return f"Task with ID {self.task_id} does not exist."


class TaskDecodeError(DomainError):
    """Zapisane dane nie dają się odczytać jako lista zadań.
    Kodek rzuca go dla złego JSON-a, złego kształtu rekordu, złej daty albo duplikatu ID.
    """
    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(self.__str__())
    def __str__(self):
        return f"Stored tasks are unreadable: {self.reason}"


class PersistenceError(DomainError):
    """Zapis kolekcji do magazynu nie powiódł się (np. brak miejsca, brak uprawnień)."""
    def __init__(self, message: str):
        self.message = message
        super().__init__(self.__str__())
    def __str__(self):
        return f"Could not save tasks: {self.message}"
