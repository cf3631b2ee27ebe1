"""
Command Line Interface for Mini Task Tracker.
"""

import click
from .version import VERSION
from .config import Settings, install_settings, load_settings
from .logs import get_logger
from .models import Outcome, TaskKind
from .recovery import RecoverableError
from .render import format_records, format_yaml, header, message_for
from .store import FILTERS, SORTS, TaskStore

log = get_logger("cli")

TASK_CHOICES = {
    "1": TaskKind.BASIC,
    "2": TaskKind.PRIORITY,
    "3": TaskKind.DEADLINE,
}


def _ask(text: str) -> str:
    """Prompt for a line of input; an empty answer is returned as-is."""
    return click.prompt(text, default="", show_default=False)


def _ask_id() -> int:
    raw = _ask("\nEnter Task ID")
    try:
        return int(raw)
    except ValueError:
        raise RecoverableError("Invalid ID format.")


def add_task(store: TaskStore, settings: Settings):
    click.echo(header("Add New Task"))
    click.echo("Select task type:")
    click.echo("1. Basic Task")
    click.echo("2. Priority Task")
    click.echo("3. Deadline Task")
    kind = TASK_CHOICES.get(_ask("Choice").strip())

    title = _ask("Enter Task Title")
    description = _ask("Enter Task Description")

    if kind is None:
        click.echo("Invalid task type. Task not created.")
        return

    priority = None
    due_date = None
    if kind == TaskKind.PRIORITY:
        try:
            priority = int(_ask("Enter Priority (1-5)"))
        except ValueError:
            click.echo("Invalid priority. Task not created.")
            return
    elif kind == TaskKind.DEADLINE:
        try:
            due_date = settings.parse_date(_ask(f"Enter Due Date ({settings.date_format})"))
        except ValueError:
            click.echo("Invalid date format. Task not created.")
            return

    result = store.create(kind, title, description, priority=priority, due_date=due_date)
    if result.outcome.failed:
        click.echo(message_for(result.outcome))
    click.echo(f"Task added successfully! (ID {result.id})")


def view_all(store: TaskStore, settings: Settings):
    click.echo(header("All Tasks"))
    if store.is_empty:
        click.echo(message_for(Outcome.EMPTY_COLLECTION))
        return
    for line in format_records(store.list_all()):
        click.echo(line)


def toggle_completion(store: TaskStore, settings: Settings):
    task_id = _ask_id()
    outcome = store.toggle_completion(task_id)
    outcome.raise_for_failure(message_for(outcome, id=task_id))
    click.echo(message_for(outcome, title=store.get(task_id).title))


def add_tag(store: TaskStore, settings: Settings):
    task = store.get(_ask_id())
    tag = _ask("Enter Tag")
    outcome = store.add_tag(task.id, tag)
    outcome.raise_for_failure(message_for(outcome, tag=tag))
    click.echo(message_for(outcome, tag=tag, title=task.title))


def remove_tag(store: TaskStore, settings: Settings):
    task = store.get(_ask_id())
    tag = _ask("Enter Tag to Remove")
    outcome = store.remove_tag(task.id, tag)
    outcome.raise_for_failure(message_for(outcome, tag=tag))
    click.echo(message_for(outcome, tag=tag))


def _sorter(name: str):
    def sort_tasks(store: TaskStore, settings: Settings):
        outcome = store.sort(SORTS[name])
        outcome.raise_for_failure("No tasks to sort.")
        click.echo(message_for(outcome))
        view_all(store, settings)
    return sort_tasks


def _filterer(name: str):
    predicate, label = FILTERS[name]

    def view_filtered(store: TaskStore, settings: Settings):
        click.echo(header("Filtered Tasks", label))
        result = store.filter(predicate)
        if result.outcome == Outcome.EMPTY_COLLECTION:
            click.echo("No tasks available to filter.")
            return
        if result.outcome == Outcome.NO_MATCHES:
            click.echo(message_for(result.outcome, label=label))
            return
        for line in format_records(task.display_data() for task in result.tasks):
            click.echo(line)
    return view_filtered


def view_yaml(store: TaskStore, settings: Settings):
    click.echo(header("Tasks as YAML"))
    if store.is_empty:
        click.echo(message_for(Outcome.EMPTY_COLLECTION))
        return
    click.echo(format_yaml(store.tasks()), nl=False)


EXIT = "11"

MENU = {
    "1": ("Add New Task", add_task),
    "2": ("View All Tasks", view_all),
    "3": ("Toggle Task Completion", toggle_completion),
    "4": ("Add Tag to Task", add_tag),
    "5": ("Remove Tag from Task", remove_tag),
    "6": ("Sort Tasks by Title", _sorter("title")),
    "7": ("Sort Tasks by ID", _sorter("id")),
    "8": ("View Completed Tasks", _filterer("completed")),
    "9": ("View Pending Tasks", _filterer("pending")),
    "10": ("View Tasks as YAML", view_yaml),
    EXIT: ("Exit", None),
}


def run_menu(store: TaskStore, settings: Settings):
    """Run the menu loop until Exit is chosen or input runs out."""
    click.echo("Welcome to the Miniature Task Tracker!")

    while True:
        click.echo("\nMain Menu:")
        for key, (label, _) in MENU.items():
            click.echo(f"{key}. {label}")

        try:
            choice = _ask("Select an option").strip()
        except click.Abort:
            log.debug("Input closed, leaving menu")
            click.echo()
            break

        if choice == EXIT:
            click.echo("Thank you for using the Task Tracker. Goodbye!")
            break

        entry = MENU.get(choice)
        if entry is None:
            click.echo("Invalid option, please try again.")
            continue

        label, action = entry
        log.debug(f"Menu choice {choice}: {label}")
        try:
            action(store, settings)
        except click.Abort:
            click.echo()
            break
        except RecoverableError as e:
            log.info(f"{label}: {e}")
            click.echo(str(e))


@click.group(invoke_without_command=True)
@click.version_option(version=VERSION, prog_name="minitask")
@click.pass_context
def main(ctx):
    """
    Mini Task Tracker - an in-memory task list driven by a text menu.

    Nothing is saved; all tasks are discarded on exit.
    """
    if ctx.invoked_subcommand is None:
        ctx.invoke(menu)


@main.command()
def menu():
    """Start the interactive task menu."""
    settings, problems = load_settings()
    install_settings(settings)
    for problem in problems:
        click.echo(f"Warning: ignoring invalid setting {problem}", err=True)
    run_menu(TaskStore(), settings)


if __name__ == "__main__":
    main()
