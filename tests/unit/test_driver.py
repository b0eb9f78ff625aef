"""Unit tests for the policy batch driver (framework_op / plan)."""

from __future__ import annotations

import stat
from collections.abc import Callable
from pathlib import Path

import pytest

from fwpolicy import Operation, framework_op
from fwpolicy.core.constants import POLICY_KINDS, PolicyCategory, PolicySubcategory
from fwpolicy.core.exceptions import NotRegularFileError, RemoveError, UnknownOperationError
from fwpolicy.core.policy import plan

_ALL_KINDS = {
    "apparmor/policygroups/network": b"apparmor group\n",
    "apparmor/templates/default": b"apparmor template\n",
    "seccomp/policygroups/network": b"seccomp group\n",
    "seccomp/templates/default": b"seccomp template\n",
}


def _tree(root: Path) -> set[str]:
    if not root.exists():
        return set()
    return {str(p.relative_to(root)) for p in root.rglob("*") if p.is_file()}


class TestPolicyKinds:
    def test_fixed_cross_product_in_order(self) -> None:
        assert POLICY_KINDS == (
            (PolicyCategory.APPARMOR, PolicySubcategory.POLICYGROUPS),
            (PolicyCategory.APPARMOR, PolicySubcategory.TEMPLATES),
            (PolicyCategory.SECCOMP, PolicySubcategory.POLICYGROUPS),
            (PolicyCategory.SECCOMP, PolicySubcategory.TEMPLATES),
        )


class TestFrameworkInstall:
    def test_installs_every_kind(self, make_framework: Callable[..., Path], secbase: Path) -> None:
        inst = make_framework("foo", _ALL_KINDS)
        framework_op(Operation.INSTALL, "foo", inst, secbase=secbase)
        assert _tree(secbase) == {
            "apparmor/policygroups/foo_network",
            "apparmor/templates/foo_default",
            "seccomp/policygroups/foo_network",
            "seccomp/templates/foo_default",
        }
        assert (secbase / "seccomp/templates/foo_default").read_bytes() == b"seccomp template\n"

    def test_creates_all_target_directories(
        self, make_framework: Callable[..., Path], secbase: Path
    ) -> None:
        inst = make_framework("foo", {})
        framework_op(Operation.INSTALL, "foo", inst, secbase=secbase)
        for category, subcategory in POLICY_KINDS:
            d = secbase / category.value / subcategory.value
            assert d.is_dir()
            assert stat.S_IMODE(d.stat().st_mode) == 0o755

    def test_framework_without_policy_dir(self, tmp_path: Path, secbase: Path) -> None:
        inst = tmp_path / "bare"
        inst.mkdir()
        framework_op(Operation.INSTALL, "bare", inst, secbase=secbase)
        assert _tree(secbase) == set()

    def test_string_operation(self, make_framework: Callable[..., Path], secbase: Path) -> None:
        inst = make_framework("foo", _ALL_KINDS)
        framework_op("install", "foo", str(inst), secbase=str(secbase))
        assert len(_tree(secbase)) == 4


class TestFrameworkRoundTrip:
    def test_install_then_remove_restores_tree(
        self, make_framework: Callable[..., Path], secbase: Path
    ) -> None:
        (secbase / "apparmor" / "policygroups").mkdir(parents=True)
        (secbase / "apparmor" / "policygroups" / "preexisting").write_text("keep me")
        before = _tree(secbase)

        inst = make_framework("foo", _ALL_KINDS)
        framework_op(Operation.INSTALL, "foo", inst, secbase=secbase)
        framework_op(Operation.REMOVE, "foo", inst, secbase=secbase)

        assert _tree(secbase) == before

    def test_packages_do_not_collide(
        self, make_framework: Callable[..., Path], secbase: Path
    ) -> None:
        foo = make_framework("foo", {"apparmor/policygroups/network": b"foo"})
        bar = make_framework("bar", {"apparmor/policygroups/network": b"bar"})
        framework_op(Operation.INSTALL, "foo", foo, secbase=secbase)
        framework_op(Operation.INSTALL, "bar", bar, secbase=secbase)

        groups = secbase / "apparmor" / "policygroups"
        assert (groups / "foo_network").read_bytes() == b"foo"
        assert (groups / "bar_network").read_bytes() == b"bar"

        framework_op(Operation.REMOVE, "foo", foo, secbase=secbase)
        assert not (groups / "foo_network").exists()
        assert (groups / "bar_network").read_bytes() == b"bar"

    def test_remove_never_installed_fails(
        self, make_framework: Callable[..., Path], secbase: Path
    ) -> None:
        inst = make_framework("foo", _ALL_KINDS)
        with pytest.raises(RemoveError):
            framework_op(Operation.REMOVE, "foo", inst, secbase=secbase)


class TestFrameworkFailFast:
    def test_stops_at_first_failing_kind(
        self, make_framework: Callable[..., Path], secbase: Path
    ) -> None:
        inst = make_framework("foo", _ALL_KINDS)
        bad = inst / "meta" / "framework-policy" / "apparmor" / "templates" / "nested"
        bad.mkdir()

        with pytest.raises(NotRegularFileError) as excinfo:
            framework_op(Operation.INSTALL, "foo", inst, secbase=secbase)
        assert excinfo.value.path == str(bad)

        # The kind processed before the failure stays applied; later kinds are
        # never attempted.
        assert _tree(secbase) == {"apparmor/policygroups/foo_network"}
        assert not (secbase / "apparmor" / "templates" / "foo_nested").exists()
        assert not (secbase / "seccomp").exists()

    def test_unknown_operation_touches_nothing(
        self, make_framework: Callable[..., Path], secbase: Path
    ) -> None:
        inst = make_framework("foo", _ALL_KINDS)
        with pytest.raises(UnknownOperationError) as excinfo:
            framework_op("upgrade", "foo", inst, secbase=secbase)
        assert excinfo.value.op == "upgrade"
        assert not secbase.exists()


class TestPlan:
    def test_lists_source_target_pairs(
        self, make_framework: Callable[..., Path], secbase: Path
    ) -> None:
        inst = make_framework("foo", _ALL_KINDS)
        entries = plan("foo", inst, secbase=secbase)
        policy = inst / "meta" / "framework-policy"
        assert entries[0] == (
            policy / "apparmor" / "policygroups" / "network",
            secbase / "apparmor" / "policygroups" / "foo_network",
        )
        assert [t.name for _, t in entries] == [
            "foo_network",
            "foo_default",
            "foo_network",
            "foo_default",
        ]

    def test_is_read_only(self, make_framework: Callable[..., Path], secbase: Path) -> None:
        inst = make_framework("foo", _ALL_KINDS)
        plan("foo", inst, secbase=secbase)
        assert not secbase.exists()

    def test_targets_match_install(
        self, make_framework: Callable[..., Path], secbase: Path
    ) -> None:
        inst = make_framework("foo", _ALL_KINDS)
        targets = {t for _, t in plan("foo", inst, secbase=secbase)}
        framework_op(Operation.INSTALL, "foo", inst, secbase=secbase)
        assert targets == {p for p in secbase.rglob("*") if p.is_file()}
