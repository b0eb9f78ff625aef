"""
fwpolicy — keep a framework's security policy fragments in sync with the host.

Frameworks ship AppArmor and seccomp policy fragments under
``meta/framework-policy/`` inside their install directory. On install, fwpolicy
copies every fragment into the shared system policy tree, prefixing each file
name with the framework's package name so that two frameworks can ship files
with the same name. On remove, the same prefixed files are deleted again.

Package layout (src/fwpolicy/):
  core/         — constants, config, exceptions, logging
  core/policy/  — file set resolver, sync operator, batch driver
  cli/          — Click CLI entry point
"""

from fwpolicy.core.policy import Operation, framework_op

__version__ = "0.1.0"
__all__ = ["Operation", "__version__", "framework_op"]
