class CronogramasError(Exception):
    """Base class for errors raised by the cronogramas service."""


class MissingParameterError(CronogramasError):
    """A required tool argument is missing or invalid."""


class StoreError(CronogramasError):
    """A database operation failed. The message carries the operation prefix."""


class ToolNotFoundError(CronogramasError):
    def __init__(self, name):
        super().__init__(f"Tool not found: {name}")
        self.name = name
