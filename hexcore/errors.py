class InvalidReference(LookupError):
    """Lookup of a unit, unit type or weapon type id that does not exist."""

class NotFound(InvalidReference):
    """Registry name lookup miss."""

class RejectedCommand(Exception):
    """A command that could not produce any event."""

    def __init__(self, command, reason: str):
        super().__init__(f"{command!r} rejected: {reason}")
        self.command = command
        self.reason = reason

class RandomSourceUnavailable(RuntimeError):
    """The combat random source could not be created."""

class ScriptedPolicyError(RuntimeError):
    """A scripted policy never ended its turn."""
