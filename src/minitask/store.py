"""
TaskStore - owns every task of a session, hands out ids and runs lookup, sort and filter.

Tasks are appended on creation and never removed. All rejections are reported
through ``Outcome`` values so the caller can keep going.
"""
from datetime import date
from functools import cmp_to_key
from pydantic import BaseModel, Field
from typing import Callable, Dict, Iterator, List, Optional, Tuple

from minitask.logs import get_logger
from minitask.models import TASK_TYPES, DisplayData, Outcome, Task, TaskKind
from minitask.recovery import DuplicateTaskId, LookupNotFound, ValidationRejected

log = get_logger("store")

Comparator = Callable[[Task, Task], int]
Predicate = Callable[[Task], bool]

def by_title(first: Task, second: Task) -> int:
    """Case-insensitive ordering on title."""
    a, b = first.title.casefold(), second.title.casefold()
    return (a > b) - (a < b)

def by_id(first: Task, second: Task) -> int:
    return (first.id > second.id) - (first.id < second.id)

def is_completed(task: Task) -> bool:
    return task.completed

def is_pending(task: Task) -> bool:
    return not task.completed

# Label shown by the menu for each standard filter
FILTERS: Dict[str, Tuple[Predicate, str]] = {
    'completed': (is_completed, "Completed Tasks"),
    'pending': (is_pending, "Pending Tasks"),
}

SORTS: Dict[str, Comparator] = {
    'title': by_title,
    'id': by_id,
}

class FilterResult(BaseModel):
    """Matching tasks in store order plus why the list might be empty."""

    tasks: List[Task] = Field(default_factory=list, description="Matching tasks, in store order")
    outcome: Outcome = Field(default=Outcome.OK, description="OK, NO_MATCHES or EMPTY_COLLECTION")

    def __len__(self) -> int:
        return len(self.tasks)

    @property
    def ids(self) -> List[int]:
        return [task.id for task in self.tasks]

class CreateResult(BaseModel):
    """A newly created task and whether its initial values were all accepted."""

    task: Task = Field(description="The created task, already added to the store")
    outcome: Outcome = Field(default=Outcome.OK, description="OK, or INVALID_PRIORITY when the priority was rejected")

    @property
    def id(self) -> int:
        return self.task.id

class TaskStore:
    """In-memory collection of tasks with its own id counter starting at 1."""

    def __init__(self):
        self._tasks: List[Task] = []
        self._next_id = 1

    def __len__(self) -> int:
        return len(self._tasks)

    def __iter__(self) -> Iterator[Task]:
        return iter(list(self._tasks))

    @property
    def is_empty(self) -> bool:
        return not self._tasks

    def tasks(self) -> List[Task]:
        """A copy of the tasks in current collection order."""
        return list(self._tasks)

    def create(self, kind: TaskKind, title: Optional[str], description: Optional[str] = "",
               priority: Optional[int] = None, due_date: Optional[date] = None) -> CreateResult:
        """
        Create a task of the given kind and add it to the store.

        An out-of-range priority does not prevent creation: the task keeps
        priority 0 and the result carries ``Outcome.INVALID_PRIORITY``.

        Raises:
            ValidationRejected: The title is empty, or the variant is missing its
                priority or due date. No id is consumed in that case.
        """
        task_type = TASK_TYPES[kind]
        extra = {}
        if kind == TaskKind.PRIORITY:
            if priority is None:
                raise ValidationRejected("Priority is required.", Outcome.INVALID_PRIORITY)
        elif kind == TaskKind.DEADLINE:
            if due_date is None:
                raise ValidationRejected("Due date is required.", Outcome.INVALID_FIELD)
            extra['due_date'] = due_date

        task = task_type.create(self._next_id, title, description, **extra)
        self._next_id += 1
        self.add(task)
        log.info(f"Created {kind.value} task {task.id}: {task.title!r}")

        outcome = Outcome.OK
        if kind == TaskKind.PRIORITY:
            outcome = task.set_priority(priority)
        return CreateResult(task=task, outcome=outcome)

    def create_basic(self, title: Optional[str], description: Optional[str] = "") -> CreateResult:
        return self.create(TaskKind.BASIC, title, description)

    def create_priority(self, title: Optional[str], description: Optional[str], priority: int) -> CreateResult:
        return self.create(TaskKind.PRIORITY, title, description, priority=priority)

    def create_deadline(self, title: Optional[str], description: Optional[str], due_date: date) -> CreateResult:
        return self.create(TaskKind.DEADLINE, title, description, due_date=due_date)

    def add(self, task: Task):
        """Append an already built task; its id must not be in use."""
        if self.find_by_id(task.id) is not None:
            raise DuplicateTaskId(f"Task with ID {task.id} already exists")
        self._tasks.append(task)
        # Keep the counter ahead of any id added from outside create()
        self._next_id = max(self._next_id, task.id + 1)

    def find_by_id(self, task_id: int) -> Optional[Task]:
        return next((t for t in self._tasks if t.id == task_id), None)

    def get(self, task_id: int) -> Task:
        task = self.find_by_id(task_id)
        if task is None:
            raise LookupNotFound(f"Task with ID {task_id} not found.", Outcome.TASK_NOT_FOUND)
        return task

    def toggle_completion(self, task_id: int) -> Outcome:
        task = self.find_by_id(task_id)
        if task is None:
            log.info(f"Toggle: task {task_id} not found")
            return Outcome.TASK_NOT_FOUND

        if task.completed:
            task.mark_incomplete()
            return Outcome.MARKED_PENDING
        task.mark_complete()
        return Outcome.MARKED_COMPLETE

    def add_tag(self, task_id: int, tag: Optional[str]) -> Outcome:
        task = self.find_by_id(task_id)
        if task is None:
            log.info(f"Add tag: task {task_id} not found")
            return Outcome.TASK_NOT_FOUND
        return task.add_tag(tag)

    def remove_tag(self, task_id: int, tag: Optional[str]) -> Outcome:
        task = self.find_by_id(task_id)
        if task is None:
            log.info(f"Remove tag: task {task_id} not found")
            return Outcome.TASK_NOT_FOUND
        return task.remove_tag(tag)

    def sort(self, comparator: Comparator) -> Outcome:
        """Sort in place with a three-way comparator. Equal tasks keep their order."""
        if not self._tasks:
            return Outcome.EMPTY_COLLECTION
        self._tasks.sort(key=cmp_to_key(comparator))
        log.debug(f"Sorted {len(self._tasks)} tasks using {getattr(comparator, '__name__', comparator)}")
        return Outcome.SORTED

    def filter(self, predicate: Predicate) -> FilterResult:
        if not self._tasks:
            return FilterResult(outcome=Outcome.EMPTY_COLLECTION)
        matches = [task for task in self._tasks if predicate(task)]
        if not matches:
            return FilterResult(outcome=Outcome.NO_MATCHES)
        return FilterResult(tasks=matches)

    def list_all(self) -> List[DisplayData]:
        return [task.display_data() for task in self._tasks]
