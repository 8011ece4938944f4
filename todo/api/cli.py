from __future__ import annotations
import logging
from dataclasses import dataclass
from datetime import date
from pathlib import Path
from typing import Optional
from typer import Abort, Argument, BadParameter, Context, Option, Typer, confirm
from rich.console import Console, Group
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from todo.config import Settings, load_settings
from todo.logging_setup import setup_logging
from todo.domain.task import Task, TaskId
from todo.domain.classifier import TaskViews, week_bounds
from todo.domain.codec import parse_iso_day
from todo.domain.errors import TaskNotFoundError, TaskValidationError, DomainError
from todo.ports.task_storage import TaskStorage
from todo.services.notifier import Notifier
from todo.services.task_service import TaskService
from todo.adapters.memory.task_storage import InMemoryTaskStorage
from todo.adapters.json.task_storage import JsonTaskStorage
from todo.adapters.sql.task_storage import SqlTaskStorage
from todo.adapters.system.scheduler_loop import LoopScheduler
from todo.api.colors import TaskColor, BoardStyle


### COMMENTS
# ==========================================================
# CLI (Typer + Rich) — interfejs użytkownika dla zadań z terminem.
# ==========================================================
# Rola:
# - Mapuje komendy na metody TaskService (add/board/done/rm/show/shell).
# - Rysuje tablicę: wybrany dzień + kolumny Today / This week / Other.
# - Pokazuje bieżący komunikat Notifiera po każdej komendzie.
# - Pyta o potwierdzenie przed usunięciem (chyba że --yes).
#
# Zasady:
# - Zero logiki biznesowej — deleguj do TaskService.
# - Sesja (storage + notifier + serwis) budowana raz w callbacku i trzymana
#   w `ctx.obj`, nie w zmiennej globalnej.

logger = logging.getLogger(__name__)

app = Typer(help="Dated task tracker: today / this week / other")
console = Console()


@dataclass
class Session:
    service: TaskService
    notifier: Notifier
    scheduler: LoopScheduler


def build_storage(
    settings: Settings,
    file: Optional[Path] = None,
    db: Optional[Path] = None,
    memory: bool = False,
) -> TaskStorage:
    """Wybiera adapter magazynu.
    - --memory -> InMemory (bez trwałości)
    - --file   -> plik JSON
    - --db     -> SQLite (SQLAlchemy)
    - brak opcji -> backend z ustawień (TODO_BACKEND)
    """
    if memory:
        return InMemoryTaskStorage(key=settings.storage_key)
    if file:
        return JsonTaskStorage(file)
    if db:
        return SqlTaskStorage(db, key=settings.storage_key)
    if settings.backend == "memory":
        return InMemoryTaskStorage(key=settings.storage_key)
    if settings.backend == "sql":
        return SqlTaskStorage(settings.db_path, key=settings.storage_key)
    return JsonTaskStorage(settings.json_path)


def build_session(storage: TaskStorage, notice_seconds: float = 3.0) -> Session:
    scheduler = LoopScheduler()
    notifier = Notifier(scheduler, delay=notice_seconds)
    return Session(service=TaskService(storage, notifier), notifier=notifier, scheduler=scheduler)


@app.callback()
def main(
    ctx: Context,
    file: Optional[Path] = Option(None, "--file", "-f", help="Plik JSON z zadaniami"),
    db: Optional[Path] = Option(None, "--db", help="Plik SQLite z zadaniami"),
    memory: bool = Option(False, "--memory", help="Bez zapisu (tylko ta sesja)"),
) -> None:
    """Bootstrap zależności na starcie procesu CLI."""
    settings = load_settings()
    setup_logging(log_dir=settings.log_dir, console_level=settings.log_level)
    session = build_session(build_storage(settings, file, db, memory), settings.notice_seconds)
    ctx.obj = session
    ctx.call_on_close(session.notifier.close)


def parse_day(value: Optional[str]) -> Optional[date]:
    if value is None:
        return None
    try:
        return parse_iso_day(value.strip())
    except ValueError:
        raise BadParameter(f"expected YYYY-MM-DD, got {value!r}")


def task_label(task: Task) -> str:
    title = escape(task.title)
    if task.is_done:
        return f"{TaskColor.DONE}{title}{TaskColor.RESET}"
    return title


def render_tasks(tasks: tuple[Task, ...]) -> Table | str:
    """Tabela: ID, znacznik wykonania, tytuł, termin; pusta lista → „No tasks”."""
    if not tasks:
        return "[dim]No tasks[/]"
    table = Table(show_header=False, box=None, pad_edge=False)
    table.add_column("ID", no_wrap=True, style="cyan")
    table.add_column("Done", no_wrap=True)
    table.add_column("Title")
    table.add_column("Due", no_wrap=True, style="dim")
    for t in tasks:
        table.add_row(str(t.task_id), "☑" if t.is_done else "☐", task_label(t), t.due_date.isoformat())
    return table


def render_board(views: TaskViews, selected: Optional[date]) -> Group:
    heading = f"📅 Tasks on {selected.isoformat()}" if selected else "📅 Selected day"
    selected_panel = Panel(render_tasks(views.selected), title=heading, border_style=str(BoardStyle.SELECTED))
    columns = Table.grid(expand=True)
    for _ in range(3):
        columns.add_column(ratio=1)
    columns.add_row(
        Panel(render_tasks(views.today), title="📅 Today", border_style=str(BoardStyle.TODAY)),
        Panel(render_tasks(views.this_week), title="🗓 This week", border_style=str(BoardStyle.THIS_WEEK)),
        Panel(render_tasks(views.other), title="📌 Other", border_style=str(BoardStyle.OTHER)),
    )
    return Group(selected_panel, columns)


def print_notice(session: Session) -> None:
    if session.notifier.message:
        console.print(f"[bold red]{escape(session.notifier.message)}[/]")


def print_not_found(task_id: int) -> None:
    console.print(Panel.fit(
        f"❌ Task {task_id} not found\n[dim]Use 'todo board' to find a valid ID[/]",
        title="Not found",
        border_style="red",
    ))


@app.command("add")
def add(
    ctx: Context,
    title: str = Argument(..., help="Tytuł zadania"),
    due: Optional[str] = Option(None, "--due", "-d", help="Termin YYYY-MM-DD (domyślnie dziś)"),
) -> None:
    """
    Dodaje nowe zadanie.

    Flow:
    - Termin domyślnie = dziś (jak w formularzu, który startuje z dzisiejszą datą).
    - Wywołaj: service.create_task(title, due)
    - Sukces: Panel z ID; błąd walidacji → czerwony Panel.
    """
    session: Session = ctx.obj
    due_value = due if due is not None else session.service.clock.today().isoformat()
    try:
        task = session.service.create_task(title, due_value)
        console.print(Panel.fit(
            f"[cyan]ID:[/cyan] {task.task_id}\n"
            f"[dim]Title:[/dim] {escape(task.title)}\n"
            f"[dim]Due:[/dim] {task.due_date.isoformat()}",
            title="Added",
            border_style="green",
        ))
    except TaskValidationError as e:
        console.print(Panel.fit(
            f"❌ {escape(str(e))}\n[dim]Hint:[/] todo add 'Write report' --due 2024-06-10",
            title="Validation error",
            border_style="red",
        ))
    print_notice(session)


@app.command("board")
def board(
    ctx: Context,
    selected: Optional[str] = Option(None, "--date", "-D", help="Wybrany dzień YYYY-MM-DD (domyślnie dziś)"),
) -> None:
    """Pokazuje wybrany dzień oraz kolumny Today / This week / Other."""
    session: Session = ctx.obj
    selected_day = parse_day(selected) or session.service.clock.today()
    views = session.service.views(selected_day)
    console.print(render_board(views, selected_day))
    console.print(f"[dim]Total: {len(session.service.list_tasks())}[/]")


app.command("list", help="Alias for 'board'.")(board)


@app.command("done")
def done(ctx: Context, task_id: int) -> None:
    """Przełącza stan wykonania zadania (☐ ↔ ☑)."""
    session: Session = ctx.obj
    task = session.service.toggle_done(TaskId(task_id))
    if task is None:
        print_not_found(task_id)
        return
    mark = f"{TaskColor.GREEN}done{TaskColor.RESET}" if task.is_done else f"{TaskColor.RED}open{TaskColor.RESET}"
    console.print(Panel.fit(
        f"ID: {task.task_id}\n[dim]Title:[/dim] {escape(task.title)}\nStatus: {mark}",
        title="Updated",
        border_style="green",
    ))
    print_notice(session)


@app.command("rm")
def rm(
    ctx: Context,
    task_id: int,
    yes: bool = Option(False, "--yes", "-y", help="Nie pytaj o potwierdzenie"),
) -> None:
    """
    Usuwa zadanie po potwierdzeniu.

    Flow:
    - confirmed = --yes albo odpowiedź na „Really delete?”
    - service.remove_task(task_id, confirmed)
    - Komunikat (deleted / cancelled) z Notifiera.
    """
    session: Session = ctx.obj
    confirmed = yes or confirm("Really delete?", default=False)
    removed = session.service.remove_task(TaskId(task_id), confirmed)
    if removed:
        console.print(Panel.fit(f"ID: {task_id}", title="Deleted", border_style="yellow"))
    print_notice(session)


@app.command("show")
def show(ctx: Context, task_id: int) -> None:
    """Pokazuje szczegóły pojedynczego zadania."""
    session: Session = ctx.obj
    try:
        task = session.service.get_task(TaskId(task_id))
    except TaskNotFoundError:
        print_not_found(task_id)
        return
    except DomainError as e:
        console.print(Panel.fit(f"❌ {escape(str(e))}", title="Error", border_style="red"))
        return
    console.print(Panel.fit(
        "\n".join([
            f"ID: {task.task_id}",
            f"Title: {escape(task.title)}",
            f"Due: {task.due_date.isoformat()}",
            f"Done: {'yes' if task.is_done else 'no'}",
        ]),
        title="Task details",
        border_style="cyan",
    ))


SHELL_HELP = """Commands:
  add [YYYY-MM-DD] <title...>   Add a task (due today when no date is given)
  done <id>                     Toggle completion
  rm <id>                       Delete a task (asks for confirmation)
  date <YYYY-MM-DD>|today|none  Pick the day shown in the top panel
  help                          Show this help
  exit                          Leave the shell"""


def shell_add(session: Session, args: list[str]) -> None:
    due = None
    if args:
        try:
            due = parse_iso_day(args[0])
            args = args[1:]
        except ValueError:
            due = None
    if due is None:
        due = session.service.clock.today()
    try:
        session.service.create_task(" ".join(args), due)
    except TaskValidationError:
        # komunikat jest już w Notifierze
        pass


def run_shell_command(session: Session, line: str, selected: Optional[date]) -> tuple[bool, Optional[date]]:
    """Wykonuje jedną linię; zwraca (czy kontynuować, wybrany dzień)."""
    tokens = line.split()
    if not tokens:
        return True, selected
    cmd, args = tokens[0].lower(), tokens[1:]
    service = session.service

    if cmd == "exit":
        return False, selected
    if cmd == "help":
        console.print(SHELL_HELP)
    elif cmd == "add":
        shell_add(session, args)
    elif cmd in {"done", "rm"}:
        if len(args) != 1 or not args[0].isdigit():
            session.notifier.show(f"Usage: {cmd} <id>")
        elif cmd == "done":
            service.toggle_done(TaskId(int(args[0])))
        else:
            service.remove_task(TaskId(int(args[0])), confirm("Really delete?", default=False))
    elif cmd == "date":
        arg = args[0].lower() if args else "today"
        if arg == "none":
            selected = None
        elif arg == "today":
            selected = service.clock.today()
        else:
            try:
                selected = parse_iso_day(arg)
            except ValueError:
                session.notifier.show("⚠ Date must look like YYYY-MM-DD")
    else:
        session.notifier.show("Unknown command. Type 'help' for instructions.")
    return True, selected


@app.command("shell")
def shell(ctx: Context) -> None:
    """
    Interaktywna pętla z tablicą odświeżaną po każdej komendzie.

    Komunikat Notifiera znika po ustawionym czasie (sprawdzane przy każdym obrocie pętli);
    przy wyjściu (także Ctrl-C) zaległe wygaszenie jest anulowane.
    """
    session: Session = ctx.obj
    selected: Optional[date] = session.service.clock.today()
    with session.notifier:
        try:
            running = True
            while running:
                session.scheduler.run_pending()
                console.clear()
                console.print(render_board(session.service.views(selected), selected))
                print_notice(session)
                line = console.input("\n: ").strip()
                running, selected = run_shell_command(session, line, selected)
        except (KeyboardInterrupt, EOFError, Abort):
            logger.debug("Shell interrupted")
    console.print("Goodbye.")


@app.command("demo")
def demo() -> None:
    """
    Pokazowy przebieg działania aplikacji w jednym procesie (InMemory).

    - Tworzy zadania na dziś, na ten tydzień i na później.
    - Pokazuje tablicę.
    - Oznacza jedno jako wykonane, anuluje jedno usunięcie, usuwa inne.
    - Pokazuje tablicę po zmianach.
    """
    session = build_session(InMemoryTaskStorage())
    service = session.service
    today = service.clock.today()

    console.print(Panel.fit("🚀 Demo start", border_style="cyan"))

    t1 = service.create_task("Write report", today)
    start, end = week_bounds(today)
    t2 = service.create_task("Plan trip", end if end != today else start)
    t3 = service.create_task("Renew passport", date(today.year + 1, 1, 15))
    console.print(render_board(service.views(today), today))

    service.toggle_done(t1.task_id)
    service.remove_task(t3.task_id, confirmed=False)
    print_notice(session)
    service.remove_task(t2.task_id, confirmed=True)
    print_notice(session)

    console.print(render_board(service.views(today), today))
    session.notifier.close()
    console.print(Panel.fit("🏁 Demo finished", border_style="cyan"))


if __name__ == "__main__":
    app()
