"""
Sync operator.

Installs or removes one glob's worth of policy files. Every file matched by
the glob maps to ``<target_dir>/<name_prefix><basename>``; install copies the
source there, remove deletes it. Processing stops at the first failure and
nothing is rolled back, so a failed batch may leave some files applied.
"""

from __future__ import annotations

import logging
import os
import shutil
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import IO, Any

from fwpolicy.core.constants import POLICY_DIR_MODE, Operation
from fwpolicy.core.exceptions import (
    CloseError,
    CopyError,
    DirectoryCreateError,
    RemoveError,
    SourceReadError,
    SyncError,
    TargetCreateError,
    UnknownOperationError,
)
from fwpolicy.core.policy.resolver import resolve

logger = logging.getLogger(__name__)


def coerce_operation(op: Any) -> Operation:
    """Return ``op`` as an ``Operation``, accepting "install"/"remove" strings."""
    if isinstance(op, Operation):
        return op
    if isinstance(op, str):
        try:
            return Operation(op.strip().lower())
        except ValueError:
            pass
    raise UnknownOperationError(op)


def target_path(target_dir: str | Path, name_prefix: str, source: str | Path) -> Path:
    """Return the namespaced target for ``source``. Shared by install and remove."""
    return Path(target_dir) / (name_prefix + Path(source).name)


def apply(op: Any, pattern: str | Path, target_dir: str | Path, name_prefix: str) -> None:
    """
    Perform ``op`` for every file matched by ``pattern``.

    Args:
        op:          ``Operation.INSTALL`` or ``Operation.REMOVE``.
        pattern:     Glob naming the source policy files.
        target_dir:  Directory the renamed files live in; created if missing.
        name_prefix: Prepended to each source basename to form the target name.

    Raises:
        PolicyOpError: The first failure encountered; see ``fwpolicy.core.exceptions``.
    """
    op = coerce_operation(op)
    target_dir = Path(target_dir)

    try:
        target_dir.mkdir(mode=POLICY_DIR_MODE, parents=True, exist_ok=True)
    except OSError as exc:
        raise DirectoryCreateError(op, target_dir, exc) from exc

    for source in resolve(pattern, op):
        target = target_path(target_dir, name_prefix, source)
        if op is Operation.REMOVE:
            _remove(op, target)
        else:
            _install(op, source, target)


def _remove(op: Operation, target: Path) -> None:
    try:
        target.unlink()
    except OSError as exc:
        raise RemoveError(op, target, exc) from exc
    logger.debug("removed %s", target)


def _install(op: Operation, source: Path, target: Path) -> None:
    try:
        fin = open(source, "rb")
    except OSError as exc:
        raise SourceReadError(op, source, exc) from exc

    with _released(fin, op, source):
        try:
            fout = open(target, "wb")
        except OSError as exc:
            raise TargetCreateError(op, target, exc) from exc

        with _released(fout, op, target):
            try:
                shutil.copyfileobj(fin, fout)
                fout.flush()
            except OSError as exc:
                raise CopyError(op, source, exc, target=target) from exc
            try:
                os.fsync(fout.fileno())
            except OSError as exc:
                raise SyncError(op, target, exc) from exc

    logger.debug("installed %s -> %s", source, target)


@contextmanager
def _released(handle: IO[bytes], op: Operation, path: Path) -> Iterator[IO[bytes]]:
    """
    Close ``handle`` on every exit path.

    A close failure is raised as ``CloseError`` only when it is the first
    error; while unwinding from an earlier error it is logged instead.
    """
    try:
        yield handle
    except BaseException:
        try:
            handle.close()
        except OSError as exc:
            logger.warning("when closing %s: %s (after an earlier error)", path, exc)
        raise
    try:
        handle.close()
    except OSError as exc:
        raise CloseError(op, path, exc) from exc
