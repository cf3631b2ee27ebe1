"""
Turns display data and outcomes into the text shown by the console menu.
"""
from typing import Iterable, List, Optional

import yaml

from minitask.models import DisplayData, Outcome, Task

SEPARATOR = "-----"

MESSAGES = {
    Outcome.OK: "Done.",
    Outcome.INVALID_TITLE: "Title cannot be empty.",
    Outcome.INVALID_PRIORITY: "Priority must be between 1 and 5.",
    Outcome.INVALID_FIELD: "Invalid task details.",
    Outcome.TAG_ADDED: "Tag '{tag}' added to task '{title}'.",
    Outcome.TAG_REMOVED: "Tag '{tag}' removed.",
    Outcome.EMPTY_TAG: "Invalid or duplicate tag: '{tag}'",
    Outcome.DUPLICATE_TAG: "Invalid or duplicate tag: '{tag}'",
    Outcome.TAG_NOT_FOUND: "Tag '{tag}' not found.",
    Outcome.TASK_NOT_FOUND: "Task with ID {id} not found.",
    Outcome.MARKED_COMPLETE: "Task '{title}' marked as complete.",
    Outcome.MARKED_PENDING: "Task '{title}' marked as pending.",
    Outcome.SORTED: "Tasks sorted.",
    Outcome.EMPTY_COLLECTION: "No tasks available.",
    Outcome.NO_MATCHES: "No tasks match the filter: {label}",
}

def message_for(outcome: Outcome, **context) -> str:
    """Format the user message for an outcome; missing context renders as an empty string."""
    template = MESSAGES[outcome]
    return template.format_map(_Blank(context))

class _Blank(dict):
    def __missing__(self, key):
        return ""

def format_record(record: DisplayData) -> List[str]:
    return [f"{label}: {value}" for label, value in record]

def format_records(records: Iterable[DisplayData]) -> List[str]:
    """One block of lines per record, each followed by the separator."""
    lines = []
    for record in records:
        lines.extend(format_record(record))
        lines.append(SEPARATOR)
    return lines

def format_yaml(tasks: Iterable[Task]) -> str:
    return yaml.safe_dump(
        {'tasks': [task.to_dict() for task in tasks]},
        default_flow_style=False,
        sort_keys=False,
        indent=2,
        allow_unicode=True,
    )

def header(title: str, label: Optional[str] = None) -> str:
    if label:
        return f"\n--- {title}: {label} ---"
    return f"\n--- {title} ---"
