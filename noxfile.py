"""Nox sessions for warntrace.

Run with: uv run nox [session]
The default run formats, lints, tests every supported Python and prints a
combined coverage report.
"""

import shutil
from pathlib import Path

import nox

nox.options.default_venv_backend = "uv"
nox.options.stop_on_first_error = True
nox.options.error_on_external_run = True

nox.options.sessions = [
    "format",
    "lint",
    "cov-clean",
    "test",
    "cov-combine",
]

PYTHON_VERSIONS = ["3.9", "3.10", "3.11", "3.12", "3.13", "3.14"]

# Linters, coverage reports and the demo only need the newest interpreter
TOOLS_PYTHON = PYTHON_VERSIONS[-1]

# Files and directories left behind by builds, tests and coverage runs
ARTIFACTS = [
    ".coverage*",
    "htmlcov",
    "coverage.xml",
    "dist",
    "build",
    "*.egg-info",
    ".pytest_cache",
    ".ruff_cache",
    ".nox",
]


def _remove(pattern):
    for path in Path(".").glob(pattern):
        if path.is_dir():
            shutil.rmtree(path, ignore_errors=True)
        else:
            path.unlink()


@nox.session(python=PYTHON_VERSIONS)
def test(session):
    """Run the test suite under coverage, one data file per interpreter."""
    session.install(".[test]")
    test_args = session.posargs or ["tests"]
    session.run(
        "coverage",
        "run",
        "--parallel-mode",
        "--source",
        "warntrace",
        "-m",
        "pytest",
        "-qq",
        *test_args,
    )


@nox.session(python=TOOLS_PYTHON)
def lint(session):
    """Check style with ruff and types with ty."""
    session.install("ruff", "ty")
    session.run("ruff", "check", ".")
    session.run("ruff", "format", "--check", ".")
    session.run("ty", "check", "warntrace")


@nox.session(python=TOOLS_PYTHON)
def format(session):
    session.install("ruff")
    session.run("ruff", "check", "--fix", "--unsafe-fixes", ".")
    session.run("ruff", "format", ".")


@nox.session(python=TOOLS_PYTHON, name="cov-clean")
def cov_clean(session):
    """Delete coverage data from earlier runs."""
    for pattern in ARTIFACTS[:3]:
        _remove(pattern)


@nox.session(python=TOOLS_PYTHON, name="cov-combine")
def cov_combine(session):
    """Merge the per-interpreter coverage data and report it."""
    session.install("coverage")
    # Exit status 1 means there was nothing to combine
    session.run("coverage", "combine", "--keep", success_codes=[0, 1])
    session.run("coverage", "report", "-m")
    session.run("coverage", "html")
    session.run("coverage", "xml")


@nox.session(python=TOOLS_PYTHON)
def demo(session):
    """Print sample diagnostics at every level through the command line."""
    session.install(".")
    env = {"THIS_SCRIPT": "demo.sh", "WARN_STACK_TRACE": "true"}
    session.run("python", "-m", "warntrace", "Plain message, default level", env=env)
    session.run("python", "-m", "warntrace", "DEBUG", "Cache primed", env=env)
    session.run(
        "python",
        "-m",
        "warntrace",
        "WARN",
        "12",
        "Disk usage is above the configured threshold on the backup volume",
        "Consider pruning old snapshots",
        env=env,
    )
    session.run("python", "-m", "warntrace", "ERROR", "3", "Upload failed", env=env)


@nox.session(python=False)
def clean(session):
    """Remove build artifacts, caches and coverage output."""
    for pattern in ARTIFACTS:
        _remove(pattern)
    for path in Path(".").rglob("__pycache__"):
        shutil.rmtree(path, ignore_errors=True)
