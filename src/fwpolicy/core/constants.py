"""fwpolicy constants: exit codes, filesystem layout, and policy kinds."""

from __future__ import annotations

from enum import Enum, IntEnum

# ---------------------------------------------------------------------------
# Exit codes
# ---------------------------------------------------------------------------


class ExitCode(IntEnum):
    SUCCESS = 0
    ERROR = 1
    CONFIG_ERROR = 2
    PERMISSION_ERROR = 5


# ---------------------------------------------------------------------------
# Filesystem layout
# ---------------------------------------------------------------------------

DEFAULT_SECBASE = "/var/lib/snappy"
DEFAULT_CONFIG_PATH = "/etc/fwpolicy/config.toml"

# Relative to a framework's install path
POLICY_META_DIR = ("meta", "framework-policy")

# rwxr-xr-x: shared, world-readable policy directories
POLICY_DIR_MODE = 0o755

# ---------------------------------------------------------------------------
# Policy kinds
# ---------------------------------------------------------------------------


class PolicyCategory(str, Enum):
    APPARMOR = "apparmor"
    SECCOMP = "seccomp"


class PolicySubcategory(str, Enum):
    POLICYGROUPS = "policygroups"
    TEMPLATES = "templates"


# Processing order of the batch driver.
POLICY_KINDS: tuple[tuple[PolicyCategory, PolicySubcategory], ...] = (
    (PolicyCategory.APPARMOR, PolicySubcategory.POLICYGROUPS),
    (PolicyCategory.APPARMOR, PolicySubcategory.TEMPLATES),
    (PolicyCategory.SECCOMP, PolicySubcategory.POLICYGROUPS),
    (PolicyCategory.SECCOMP, PolicySubcategory.TEMPLATES),
)


# ---------------------------------------------------------------------------
# Operations
# ---------------------------------------------------------------------------


class Operation(Enum):
    """What to do with a framework's policy files."""

    # Copy the policy files from the framework to the shared tree, renamed.
    INSTALL = "install"
    # Remove the renamed copies again.
    REMOVE = "remove"

    @property
    def label(self) -> str:
        return self.value.capitalize()

    def __str__(self) -> str:
        return self.label
