"""
Policy batch driver.

Runs the sync operator once per (category, subcategory) pair for a single
framework package. The driver is fail-fast: the first failing pair aborts the
run and later pairs are not attempted, so a failed install or remove can
leave a package's policy partially applied. Callers must treat any error as
leaving an unknown subset of files in place; no cleanup is attempted.

No locking is done here. The package manager serialises policy operations
per host.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from fwpolicy.core.constants import DEFAULT_SECBASE, POLICY_KINDS, POLICY_META_DIR
from fwpolicy.core.policy.operator import apply, coerce_operation, target_path
from fwpolicy.core.policy.resolver import resolve

logger = logging.getLogger(__name__)


def name_prefix(package_name: str) -> str:
    return f"{package_name}_"


def _pairs(install_path: str | Path, secbase: str | Path) -> list[tuple[str, Path]]:
    """Return ``(glob, target_dir)`` for every policy kind, in processing order."""
    policy_dir = Path(install_path).joinpath(*POLICY_META_DIR)
    return [
        (
            str(policy_dir / category.value / subcategory.value / "*"),
            Path(secbase) / category.value / subcategory.value,
        )
        for category, subcategory in POLICY_KINDS
    ]


def framework_op(
    op: Any,
    package_name: str,
    install_path: str | Path,
    *,
    secbase: str | Path = DEFAULT_SECBASE,
) -> None:
    """
    Install or remove the policy files of the framework at ``install_path``.

    Args:
        op:           ``Operation.INSTALL`` or ``Operation.REMOVE``.
        package_name: Framework package name; used as the target file prefix.
        install_path: Where the framework is installed.
        secbase:      Root of the shared system policy tree.

    Raises:
        PolicyOpError: The first failure; later policy kinds are skipped.
    """
    # Validate before touching the filesystem at all.
    op = coerce_operation(op)
    prefix = name_prefix(package_name)

    for pattern, target_dir in _pairs(install_path, secbase):
        logger.debug("%s %s -> %s", op, pattern, target_dir)
        apply(op, pattern, target_dir, prefix)

    logger.info("%s of policy for %s complete", op, package_name)


def plan(
    package_name: str,
    install_path: str | Path,
    *,
    secbase: str | Path = DEFAULT_SECBASE,
    op: Any = "install",
) -> list[tuple[Path, Path]]:
    """
    Return the ``(source, target)`` pairs ``framework_op`` would touch.

    Read-only: no directories are created and nothing is copied. Raises the
    same resolver errors ``framework_op`` would.
    """
    op = coerce_operation(op)
    prefix = name_prefix(package_name)

    entries: list[tuple[Path, Path]] = []
    for pattern, target_dir in _pairs(install_path, secbase):
        for source in resolve(pattern, op):
            entries.append((source, target_path(target_dir, prefix, source)))
    return entries
