"""Nox sessions for testing, linting and type checking tubescript."""

import nox

nox.options.sessions = ["tests", "lint", "typecheck", "cli"]

PYTHON_VERSIONS = ["3.11", "3.12", "3.13"]
SOURCES = ["src", "tests", "noxfile.py"]


@nox.session(python=PYTHON_VERSIONS)
def tests(session: nox.Session) -> None:
    """Run the offline test suite against the fake YouTube transport."""
    session.install(".[test]")
    session.run("pytest", *session.posargs)


@nox.session
def lint(session: nox.Session) -> None:
    """Run linting and formatting checks."""
    session.install(".[dev]")
    session.run("ruff", "check", *SOURCES)
    session.run("ruff", "format", "--check", *SOURCES)


@nox.session
def typecheck(session: nox.Session) -> None:
    """Run strict type checking with the pydantic plugin."""
    session.install(".[dev]")
    session.run("mypy", "src/tubescript")


@nox.session
def cli(session: nox.Session) -> None:
    """Check the installed console script parses its arguments."""
    session.install(".")
    session.run("tubescript", "--help", silent=True)
    session.run("python", "-m", "tubescript.cli", "--help", silent=True)


@nox.session
def coverage(session: nox.Session) -> None:
    """Run tests with coverage reporting for the tubescript package."""
    session.install(".[test]")
    session.run(
        "pytest",
        "--cov=tubescript",
        "--cov-report=term-missing",
        "--cov-report=html",
        "--cov-report=xml",
    )
