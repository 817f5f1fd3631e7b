class QueueError(Exception):
    """Base class for patient queue errors."""


class StorageUnavailable(QueueError):
    """The store could not be opened or its schema could not be created."""


class WriteError(QueueError):
    """A record could not be written to the store."""
