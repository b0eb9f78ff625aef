"""
File set resolver.

Expands a glob pattern into the list of policy files it names and checks
that every match is a plain regular file. Matches are inspected with
``lstat``, so a symlink is rejected even when it points at a regular file.
"""

from __future__ import annotations

import glob
import logging
import os
import stat
from pathlib import Path

from fwpolicy.core.constants import Operation
from fwpolicy.core.exceptions import GlobError, NotRegularFileError, StatError

logger = logging.getLogger(__name__)


def resolve(pattern: str | Path, op: Operation) -> list[Path]:
    """
    Return the regular files matched by ``pattern``, sorted.

    An empty match set is not an error. Every match is validated before
    anything is returned, so one bad entry rejects the whole set.

    Raises:
        GlobError:           The pattern could not be expanded.
        StatError:           Metadata of a match could not be read.
        NotRegularFileError: A match is a directory, symlink, device, etc.
    """
    try:
        matches = sorted(glob.glob(str(pattern), include_hidden=True))
    except (OSError, ValueError) as exc:
        raise GlobError(op, pattern, exc) from exc

    files: list[Path] = []
    for match in matches:
        try:
            st = os.lstat(match)
        except OSError as exc:
            raise StatError(op, match, exc) from exc
        if not stat.S_ISREG(st.st_mode):
            raise NotRegularFileError(op, match)
        files.append(Path(match))

    logger.debug("%s: %d file(s) match %s", op, len(files), pattern)
    return files
