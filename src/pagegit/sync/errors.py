"""Sync error types."""


class SyncError(Exception):
    """Base exception for sync failures raised by pagegit itself."""

    pass


class SyncConfigError(SyncError):
    """Remote settings are missing or unusable."""

    pass


class SyncInProgressError(SyncError):
    """Another sync is already running."""

    pass


class PushRejectedError(SyncError):
    """The remote refused one or more ref updates."""

    pass
