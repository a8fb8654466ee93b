from __future__ import annotations

import subprocess
from pathlib import Path

import pytest

from argopack import dependencies
from argopack.context import ExecutionContext
from argopack.dependencies import NodeVersionCheck


def _context_with_node(tmp_path: Path, stdout: str, returncode: int = 0):
    calls: list[list[str]] = []

    def _run(cmd, **_kwargs):
        calls.append(list(cmd))
        return subprocess.CompletedProcess(cmd, returncode, stdout, "")

    return ExecutionContext(root=tmp_path, run_command=_run), calls


@pytest.mark.parametrize(
    ("output", "expected"),
    [
        ("v14.17.0\n", (14, 17)),
        ("v10.16", (10, 16)),
        ("18.0.0", (18, 0)),
        ("", None),
        ("node: command not found", None),
    ],
)
def test_parse_node_version(output: str, expected: tuple[int, int] | None) -> None:
    assert dependencies.parse_node_version(output) == expected


def test_node_installed_builds_frozen_check() -> None:
    check = dependencies.node_installed(min_major=10, min_minor=16)

    assert check == NodeVersionCheck(min_major=10, min_minor=16)
    assert check.describe() == "Node.js 10.16 or higher must be installed"
    with pytest.raises(AttributeError):
        check.min_major = 12  # type: ignore[misc]


@pytest.mark.parametrize(
    ("output", "passes"),
    [
        ("v14.17.0\n", True),
        ("v10.16.0\n", True),
        ("v10.15.3\n", False),
        ("v9.99.0\n", False),
        ("v11.0.0\n", True),
        ("garbage\n", False),
    ],
)
def test_node_version_check_compares_major_and_minor(
    tmp_path: Path, output: str, passes: bool
) -> None:
    context, calls = _context_with_node(tmp_path, output)

    assert NodeVersionCheck(min_major=10, min_minor=16).check(context) is passes
    assert calls == [["node", "--version"]]


def test_node_version_check_fails_when_probe_fails(tmp_path: Path) -> None:
    context, _calls = _context_with_node(tmp_path, "v20.0.0", returncode=1)

    assert NodeVersionCheck(min_major=10).check(context) is False


def test_node_version_check_fails_when_node_is_missing(tmp_path: Path) -> None:
    def _run(cmd, **_kwargs):
        raise FileNotFoundError(cmd[0])

    context = ExecutionContext(root=tmp_path, run_command=_run)

    assert NodeVersionCheck(min_major=10).check(context) is False


def test_node_version_check_probe_uses_short_timeout(tmp_path: Path) -> None:
    captured: dict[str, object] = {}

    def _run(cmd, **kwargs):
        captured.update(kwargs)
        return subprocess.CompletedProcess(cmd, 0, "v16.0.0", "")

    context = ExecutionContext(root=tmp_path, run_command=_run, command_timeout=600)

    assert NodeVersionCheck(min_major=16).probe(context) == (16, 0)
    assert captured["timeout"] == dependencies.VERSION_PROBE_TIMEOUT_SECONDS
