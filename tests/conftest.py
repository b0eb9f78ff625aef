"""Shared fixtures: throwaway framework install trees and policy roots."""

from __future__ import annotations

import logging
import os
from collections.abc import Callable, Iterator
from pathlib import Path

import pytest


@pytest.fixture(autouse=True)
def _umask_022() -> Iterator[None]:
    old = os.umask(0o022)
    try:
        yield
    finally:
        os.umask(old)


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for var in (
        "FWPOLICY_CONFIG",
        "FWPOLICY_SECBASE",
        "FWPOLICY_LOG_LEVEL",
        "FWPOLICY_LOG_FORMAT",
    ):
        monkeypatch.delenv(var, raising=False)


@pytest.fixture
def secbase(tmp_path: Path) -> Path:
    return tmp_path / "secbase"


@pytest.fixture
def make_framework(tmp_path: Path) -> Callable[..., Path]:
    """
    Build a framework install tree.

    ``files`` maps ``"<category>/<subcategory>/<name>"`` to file content::

        inst = make_framework("foo", {"apparmor/policygroups/network": b"..."})
    """

    def _make(name: str, files: dict[str, bytes]) -> Path:
        inst = tmp_path / "frameworks" / name
        policy_dir = inst / "meta" / "framework-policy"
        policy_dir.mkdir(parents=True, exist_ok=True)
        for rel, content in files.items():
            path = policy_dir / rel
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_bytes(content)
        return inst

    return _make


@pytest.fixture(autouse=True)
def _reset_fwpolicy_logger() -> Iterator[None]:
    # The CLI binds a handler to CliRunner's stderr; drop it after each test.
    yield
    logger = logging.getLogger("fwpolicy")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)
    logger.propagate = True
