class MiniTaskError(Exception):
    """Base exception for all minitask errors."""

    def __init__(self, message: str = "", outcome=None):
        super().__init__(message)
        self.outcome = outcome

class RecoverableError(MiniTaskError):
    """An error the caller reports to the user before carrying on."""
    pass

class FatalError(MiniTaskError):
    """An error that means the in-memory state can no longer be trusted."""
    pass

class ValidationRejected(RecoverableError):
    """A title or priority value failed its field constraint."""
    pass

class TagRejected(RecoverableError):
    """Tag was empty, already present, or missing on removal."""
    pass

class LookupNotFound(RecoverableError):
    """No task carries the requested id."""
    pass

class EmptyCollection(RecoverableError):
    """Operation attempted on a store holding zero tasks."""
    pass

class DuplicateTaskId(FatalError):
    """A task with an already-used id was added to the store."""
    pass
