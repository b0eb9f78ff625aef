"""
fwpolicy.core.policy — install and remove framework policy files.

Public API::

    from fwpolicy.core.policy import Operation, framework_op

    framework_op(Operation.INSTALL, "foo", "/snaps/foo/1.0", secbase="/var/lib/snappy")
"""

from fwpolicy.core.constants import Operation
from fwpolicy.core.policy.driver import framework_op, plan
from fwpolicy.core.policy.operator import apply, target_path
from fwpolicy.core.policy.resolver import resolve

__all__ = ["Operation", "apply", "framework_op", "plan", "resolve", "target_path"]
