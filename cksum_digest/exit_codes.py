"""
Exit codes and the failure taxonomy of checksum computation.

Every failure carries the identifier of the byte source that failed (usually a
path), the underlying cause and the process exit code it maps to.
"""

SUCCESS_EXIT_CODE = 0
UNCLASSIFIED_FAILURE_EXIT_CODE = 1
SOURCE_UNAVAILABLE = 2
READ_FAILURE = 3
RELEASE_FAILURE = 4


class DigestFailure(Exception):
    """Base class for checksum failures."""
    exit_code = UNCLASSIFIED_FAILURE_EXIT_CODE

    def __init__(self, message: str, filename: str = None, cause: BaseException = None):
        super().__init__(message)
        self.filename = filename
        self.cause = cause
        # set when releasing the source also failed after this failure
        self.release_failure = None


class SourceUnavailable(DigestFailure):
    """The byte source could not be opened."""
    exit_code = SOURCE_UNAVAILABLE


class ReadFailure(DigestFailure):
    """An I/O error occurred after the byte source was opened."""
    exit_code = READ_FAILURE


class ReleaseFailure(DigestFailure):
    """The byte source could not be closed."""
    exit_code = RELEASE_FAILURE
