"""
Pytest configuration for the structnav test suite.

This conftest.py provides:
- Machine-mode logging (suppresses console output)
- Isolated home and project directories so no real config is read
- Sample source buffers shared across test modules
"""

import os
import shutil
import tempfile
from pathlib import Path

import pytest

from structnav.buffer import TextBuffer
from structnav.cli.config import CLIConfig
from structnav.logging_config import setup_logging


# ============================================================================
# GLOBAL CONFIGURATION
# ============================================================================

def pytest_configure(config):
    """Keep CLI and log output machine-readable."""
    os.environ.setdefault("STRUCTNAV_MACHINE_MODE", "1")


# ============================================================================
# LOGGING FIXTURES
# ============================================================================

@pytest.fixture(autouse=True)
def setup_test_logging():
    """
    Machine mode by default - suppress console logs for clean test output.
    """
    setup_logging(level="DEBUG", suppress_console=True, force=True)
    yield
    CLIConfig.set_machine_mode(None)


# ============================================================================
# TEMPORARY DIRECTORY FIXTURES
# ============================================================================

@pytest.fixture
def temp_dir():
    """Create a temporary directory that's cleaned up after the test."""
    tmp = Path(tempfile.mkdtemp(prefix="structnav_test_"))
    yield tmp
    shutil.rmtree(tmp, ignore_errors=True)


@pytest.fixture
def isolated_project(temp_dir, monkeypatch):
    """
    A project directory used as CWD, with HOME pointing at a sibling
    directory so ~/.structnav is never the real one.
    """
    project = temp_dir / "project"
    home = temp_dir / "home"
    project.mkdir()
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.chdir(project)
    yield project


# ============================================================================
# SAMPLE SOURCES
# ============================================================================

TS_SOURCE = """\
export interface Shape {
  area(): number;
}

export class Circle implements Shape {
  constructor(private r: number) {}

  area(): number {
    return Math.PI * this.r * this.r;
  }
}

function helper(x: number) {
  if (x > 0) {
    return x;
  }
  return -x;
}

enum Color {
  Red,
  Green,
}
"""

PY_SOURCE = """\
import os


class Greeter:
    \"\"\"A greeting class.\"\"\"

    def greet(self, name):
        # say hello
        return f"Hello, {name}!"

    def shout(self, name):
        return self.greet(name).upper()


def add(a, b):
    return a + b

x = 2
"""


@pytest.fixture
def ts_buffer():
    return TextBuffer(TS_SOURCE)


@pytest.fixture
def py_buffer():
    return TextBuffer(PY_SOURCE)


@pytest.fixture
def ts_file(isolated_project):
    path = isolated_project / "shapes.ts"
    path.write_text(TS_SOURCE)
    return path


@pytest.fixture
def py_file(isolated_project):
    path = isolated_project / "greeter.py"
    path.write_text(PY_SOURCE)
    return path
