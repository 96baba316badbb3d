"""Exceptions raised by pyssync."""


class SsyncError(Exception):
    """Base exception for all pyssync errors."""


class SsyncRootError(SsyncError):
    """A sync root is missing or is not a directory."""


class SsyncScanError(SsyncError):
    """A directory walk could not be started."""


class SsyncManifestError(SsyncError):
    """The manifest could not be written."""


class SsyncPathError(SsyncError):
    """A single path failed to propagate.

    Only raised when the per-path error policy is ABORT.
    """

    def __init__(self, path: str, message: str):
        self.path = path
        super().__init__(f"{path}: {message}")


class SsyncConfigError(SsyncError):
    """The sync pair configuration file is invalid."""
