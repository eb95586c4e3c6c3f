"""elastic-package exception hierarchy.

All exceptions inherit from ElasticPackageError and carry an ErrorCategory so
the CLI can decide how to present them.
"""

from enum import Enum


class ErrorCategory(Enum):
    """Error category for presentation and handling.

    Attributes:
        EXECUTION: External command exited non-zero or could not start
        DECODE: Unexpected JSON shape from an inspection command
        VALIDATION: Bad user input or wrong working directory
        PARTIAL_LOAD: A single manifest failed to load (never fatal)
        STAGE: A stage of a multi-step operation failed
        PROFILE: Profile missing or malformed
        ELASTICSEARCH: Error body returned by Elasticsearch
    """

    EXECUTION = "execution"
    DECODE = "decode"
    VALIDATION = "validation"
    PARTIAL_LOAD = "partial_load"
    STAGE = "stage"
    PROFILE = "profile"
    ELASTICSEARCH = "elasticsearch"


class ElasticPackageError(Exception):
    """Base exception for all elastic-package errors.

    Attributes:
        message: Human-readable error description
        category: Error category
        technical_details: Additional debugging information
    """

    def __init__(
        self,
        message: str,
        category: ErrorCategory,
        technical_details: dict | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.category = category
        self.technical_details = technical_details or {}


class ExecutionError(ElasticPackageError):
    """External command failed.

    Raised when the container binary exits non-zero. The captured standard
    error is kept verbatim so callers can show it to the user.
    """

    def __init__(
        self,
        message: str,
        command: list[str] | None = None,
        returncode: int | None = None,
        stderr: str = "",
    ) -> None:
        self.command = command or []
        self.returncode = returncode
        self.stderr = stderr
        details = {"command": " ".join(self.command), "returncode": returncode}
        super().__init__(f"{message} (stderr={stderr!r})", ErrorCategory.EXECUTION, details)


class DecodeError(ElasticPackageError):
    """Inspection output did not have the expected JSON shape."""

    def __init__(self, message: str, stderr: str = "") -> None:
        self.stderr = stderr
        super().__init__(f"{message} (stderr={stderr!r})", ErrorCategory.DECODE)


class ValidationError(ElasticPackageError):
    """Invalid input detected before any side effect took place."""

    def __init__(self, message: str, technical_details: dict | None = None) -> None:
        super().__init__(message, ErrorCategory.VALIDATION, technical_details)


class PartialLoadError(ElasticPackageError):
    """A single package manifest could not be loaded.

    Recorded in query results; never aborts the query as a whole.
    """

    def __init__(self, package: str, reason: str) -> None:
        self.package = package
        self.reason = reason
        super().__init__(f"{package}: {reason}", ErrorCategory.PARTIAL_LOAD)


class StackError(ElasticPackageError):
    """A stage of a stack operation failed.

    The original exception is chained as ``__cause__``.
    """

    def __init__(self, stage: str, cause: Exception | None = None) -> None:
        self.stage = stage
        message = stage if cause is None else f"{stage}: {cause}"
        super().__init__(message, ErrorCategory.STAGE, {"stage": stage})


class ProfileError(ElasticPackageError):
    """Profile could not be created, read or written."""

    def __init__(self, message: str, technical_details: dict | None = None) -> None:
        super().__init__(message, ErrorCategory.PROFILE, technical_details)


class NotAProfileError(ProfileError):
    """Directory does not hold a valid profile."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"{name} is not a valid profile", {"profile": name})


class ElasticsearchError(ElasticPackageError):
    """Error reported by Elasticsearch in a response body."""

    def __init__(self, message: str, error_type: str | None = None, status: int | None = None):
        self.error_type = error_type
        self.status = status
        super().__init__(
            message, ErrorCategory.ELASTICSEARCH, {"type": error_type, "status": status}
        )
