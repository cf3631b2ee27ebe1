from pydantic import BaseModel, ConfigDict, Field, PrivateAttr, ValidationError, field_validator
from datetime import date
from enum import Enum
from typing import Optional, List, Dict, Tuple, Literal, Any
import yaml

from minitask.config import get_settings
from minitask.logs import get_logger
from minitask.recovery import (
    EmptyCollection,
    LookupNotFound,
    TagRejected,
    ValidationRejected,
)

log = get_logger("models")

PRIORITY_MIN = 1
PRIORITY_MAX = 5

DisplayData = List[Tuple[str, str]]

class TaskKind(Enum):
    BASIC = "basic"
    PRIORITY = "priority"
    DEADLINE = "deadline"

class TaskStatus(Enum):
    PENDING = "Pending"
    COMPLETED = "Completed"

class Outcome(Enum):
    """Result of a task or store operation. Failures never abort the caller."""

    OK = "ok"
    INVALID_TITLE = "invalid_title"
    INVALID_PRIORITY = "invalid_priority"
    INVALID_FIELD = "invalid_field"
    TAG_ADDED = "tag_added"
    TAG_REMOVED = "tag_removed"
    EMPTY_TAG = "empty_tag"
    DUPLICATE_TAG = "duplicate_tag"
    TAG_NOT_FOUND = "tag_not_found"
    TASK_NOT_FOUND = "task_not_found"
    MARKED_COMPLETE = "marked_complete"
    MARKED_PENDING = "marked_pending"
    SORTED = "sorted"
    EMPTY_COLLECTION = "empty_collection"
    NO_MATCHES = "no_matches"

    @property
    def failed(self) -> bool:
        return self in _FAILURES

    def raise_for_failure(self, message: Optional[str] = None):
        """Raise the matching RecoverableError if this outcome is a rejection."""
        error = _FAILURES.get(self)
        if error is not None:
            raise error(message or self.value, self)

_FAILURES = {
    Outcome.INVALID_TITLE: ValidationRejected,
    Outcome.INVALID_PRIORITY: ValidationRejected,
    Outcome.INVALID_FIELD: ValidationRejected,
    Outcome.EMPTY_TAG: TagRejected,
    Outcome.DUPLICATE_TAG: TagRejected,
    Outcome.TAG_NOT_FOUND: TagRejected,
    Outcome.TASK_NOT_FOUND: LookupNotFound,
    Outcome.EMPTY_COLLECTION: EmptyCollection,
}

class Task(BaseModel):
    """A basic task: title, description, completion state and tags.

    Assignments are validated, so a rejected value never replaces the current one.
    """

    model_config = ConfigDict(validate_assignment=True)

    kind: Literal[TaskKind.BASIC] = Field(default=TaskKind.BASIC, frozen=True, description="Task variant")
    id: int = Field(ge=1, frozen=True, description="Unique identifier assigned by the owning store")
    title: str = Field(min_length=1, description="Short human readable name of the task")
    description: str = Field(default="", description="Free-form details, may be empty")
    completed: bool = Field(default=False, description="Whether the task has been completed")

    _tags: List[str] = PrivateAttr(default_factory=list)

    @field_validator('description', mode='before')
    @classmethod
    def validate_description(cls, v):
        return "" if v is None else v

    @classmethod
    def create(cls, task_id: int, title: str, description: str = "", **fields: Any) -> 'Task':
        """Build a task, failing outright when the initial values are invalid."""
        try:
            return cls(id=task_id, title=title, description=description, **fields)
        except ValidationError as e:
            bad_fields = sorted({str(err['loc'][0]) for err in e.errors() if err['loc']})
            log.info(f"Rejected {cls.__name__} creation, invalid fields: {bad_fields}")
            if 'title' in bad_fields:
                raise ValidationRejected("Title cannot be empty.", Outcome.INVALID_TITLE) from e
            raise ValidationRejected(
                f"Invalid value for: {', '.join(bad_fields)}", Outcome.INVALID_FIELD
            ) from e

    @property
    def status(self) -> TaskStatus:
        return TaskStatus.COMPLETED if self.completed else TaskStatus.PENDING

    @property
    def tags(self) -> List[str]:
        """A copy of the tags, in the order they were added."""
        return list(self._tags)

    def set_title(self, value: Optional[str]) -> Outcome:
        try:
            self.title = value
        except ValidationError:
            log.info(f"Rejected empty title for task {self.id}")
            return Outcome.INVALID_TITLE
        return Outcome.OK

    def mark_complete(self):
        self.completed = True
        log.debug(f"Task {self.id} marked as complete")

    def mark_incomplete(self):
        self.completed = False
        log.debug(f"Task {self.id} marked as pending")

    def add_tag(self, tag: Optional[str]) -> Outcome:
        """Append a tag unless it is empty or already present."""
        if not tag:
            log.info(f"Rejected empty tag for task {self.id}")
            return Outcome.EMPTY_TAG
        if tag in self._tags:
            log.info(f"Rejected duplicate tag {tag!r} for task {self.id}")
            return Outcome.DUPLICATE_TAG
        self._tags.append(tag)
        log.debug(f"Tag {tag!r} added to task {self.id}")
        return Outcome.TAG_ADDED

    def remove_tag(self, tag: Optional[str]) -> Outcome:
        if tag not in self._tags:
            return Outcome.TAG_NOT_FOUND
        self._tags.remove(tag)
        log.debug(f"Tag {tag!r} removed from task {self.id}")
        return Outcome.TAG_REMOVED

    def base_fields(self) -> DisplayData:
        """Fields shared by every task variant, in display order."""
        fields = [
            ("ID", str(self.id)),
            ("Title", self.title),
            ("Description", self.description),
            ("Status", self.status.value),
        ]
        if self._tags:
            fields.append(("Tags", ", ".join(self._tags)))
        return fields

    def extra_fields(self) -> DisplayData:
        """Variant specific fields, shown after the base fields."""
        return []

    def display_data(self) -> DisplayData:
        return self.base_fields() + self.extra_fields()

    def to_dict(self) -> Dict[str, Any]:
        data = self.model_dump(mode='json')
        data['tags'] = self.tags
        return data

    def to_yaml(self) -> str:
        return yaml.safe_dump(self.to_dict(), default_flow_style=False, sort_keys=False, allow_unicode=True)

class PriorityTask(Task):
    """A task with a priority between 1 and 5; 0 means no valid priority was ever set."""

    kind: Literal[TaskKind.PRIORITY] = Field(default=TaskKind.PRIORITY, frozen=True, description="Task variant")
    priority: int = Field(default=0, description="Priority from 1 (lowest) to 5 (highest)")

    @field_validator('priority')
    @classmethod
    def validate_priority(cls, v):
        if v < PRIORITY_MIN or v > PRIORITY_MAX:
            raise ValueError(f"Priority must be between {PRIORITY_MIN} and {PRIORITY_MAX}.")
        return v

    def set_priority(self, value: int) -> Outcome:
        try:
            self.priority = value
        except ValidationError:
            log.info(f"Rejected priority {value!r} for task {self.id}, keeping {self.priority}")
            return Outcome.INVALID_PRIORITY
        return Outcome.OK

    def extra_fields(self) -> DisplayData:
        return [("Priority", str(self.priority))]

class DeadlineTask(Task):
    """A task with a due date."""

    kind: Literal[TaskKind.DEADLINE] = Field(default=TaskKind.DEADLINE, frozen=True, description="Task variant")
    due_date: date = Field(description="Calendar date the task is due")

    def extra_fields(self) -> DisplayData:
        return [("Due Date", get_settings().format_date(self.due_date))]

TASK_TYPES = {
    TaskKind.BASIC: Task,
    TaskKind.PRIORITY: PriorityTask,
    TaskKind.DEADLINE: DeadlineTask,
}
