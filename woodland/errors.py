"""Errors raised by the Woodland engine."""


class EngineError(Exception):
    """Base class for engine failures."""
    pass


class ValidationError(EngineError, ValueError):
    """
    An illegal action.

    Raised before anything is committed: the caller's state is untouched
    and the working copy is discarded.
    """
    pass


class UnknownActionError(EngineError):
    """No handler is registered for an action type."""
    def __init__(self, action_type: str):
        self.action_type = action_type
        super().__init__(f"No handler registered for action type: {action_type}")
