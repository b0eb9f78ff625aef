"""fwpolicy exception hierarchy."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from fwpolicy.core.constants import Operation


class FrameworkPolicyError(Exception):
    """Base exception for all fwpolicy errors."""


class ConfigError(FrameworkPolicyError):
    """Raised when the configuration is invalid or cannot be read."""


class ConfigNotFoundError(ConfigError):
    """Raised when an explicitly requested configuration file does not exist."""


# ---------------------------------------------------------------------------
# Policy operation errors
# ---------------------------------------------------------------------------


def _op_label(op: Any) -> str:
    if isinstance(op, Operation):
        return op.label
    return repr(op)


class PolicyOpError(FrameworkPolicyError):
    """
    Raised when installing or removing policy files fails.

    Attributes:
        op:     The operation being attempted (an ``Operation``, or the
                unrecognised value for ``UnknownOperationError``).
        path:   The offending file, directory, or glob pattern.
        cause:  The underlying exception, if any.
        target: The copy destination, for errors that involve two files.
    """

    template = "unable to do {op} for {path}"

    def __init__(
        self,
        op: Any,
        path: str | Path | None = None,
        cause: BaseException | None = None,
        *,
        target: str | Path | None = None,
    ) -> None:
        self.op = op
        self.path = path
        self.cause = cause
        self.target = target
        message = self.template.format(op=_op_label(op), path=path, target=target)
        if cause is not None:
            message = f"{message}: {cause}"
        super().__init__(message)

    @property
    def permission_denied(self) -> bool:
        """True if the underlying cause was a permission failure."""
        return isinstance(self.cause, PermissionError)


class GlobError(PolicyOpError):
    """The glob pattern could not be expanded."""

    template = "unable to glob {path}"


class StatError(PolicyOpError):
    """Metadata of a matched path could not be read."""

    template = "unable to stat {path}"


class NotRegularFileError(PolicyOpError):
    """A matched path is not a plain regular file."""

    template = "unable to do {op} for {path}: not a regular file"


class DirectoryCreateError(PolicyOpError):
    """The target directory tree could not be created."""

    template = "unable to make {path} directory"


class SourceReadError(PolicyOpError):
    """A source policy file could not be opened for reading."""

    template = "unable to read {path}"


class TargetCreateError(PolicyOpError):
    """A target policy file could not be created."""

    template = "unable to create {path}"


class CopyError(PolicyOpError):
    """Copying bytes from source to target failed part way."""

    template = "unable to copy {path} to {target}"


class SyncError(PolicyOpError):
    """Flushing a target file to durable storage failed."""

    template = "when syncing {path}"


class CloseError(PolicyOpError):
    """Closing a source or target file failed after an otherwise clean copy."""

    template = "when closing {path}"


class RemoveError(PolicyOpError):
    """A previously installed target could not be removed."""

    template = "unable to remove {path}"


class UnknownOperationError(PolicyOpError):
    """The operation is neither install nor remove."""

    template = "unknown operation {op}"
