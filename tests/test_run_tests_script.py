"""Layered test runner command construction."""

import importlib.util
import sys
from pathlib import Path

import pytest

SCRIPT = Path(__file__).resolve().parent.parent / "scripts" / "run_tests.py"


@pytest.fixture(scope="module")
def runner():
    spec = importlib.util.spec_from_file_location("run_tests", SCRIPT)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


def test_every_test_module_belongs_to_one_layer(runner):
    listed = [name for names in runner.TARGETS.values() for name in names]
    on_disk = sorted(p.name for p in SCRIPT.parent.parent.joinpath("tests").glob("test_*.py"))
    assert len(listed) == len(set(listed))
    assert sorted(listed + [Path(__file__).name]) == on_disk


def test_engine_target_command(runner):
    cmd = runner.build_command("engine", coverage=True, slow=False, extra=["-x"])
    assert cmd[:3] == [sys.executable, "-m", "pytest"]
    assert "tests/test_lexer.py" in cmd
    assert "tests/test_search_tools.py" not in cmd
    assert cmd[cmd.index("-m", 3) + 1] == "not slow"
    assert "--cov=src/core" in cmd
    assert cmd[-1] == "-x"


def test_all_target_with_slow_tests(runner):
    cmd = runner.build_command("all", coverage=False, slow=True, extra=[])
    assert "tests" in cmd
    assert "not slow" not in cmd
    assert not any(part.startswith("--cov") for part in cmd)
