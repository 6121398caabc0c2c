"""Development tasks for solclean.

Usage: uv run devops.py <task>
Tasks: lint, test, clean
"""

import subprocess
import sys

ARTIFACTS = [".pytest_cache", ".ruff_cache", "dist", "build"]


def _run(commands: list[list[str]]) -> None:
    """Run commands in order, stopping at the first failure."""
    for cmd in commands:
        try:
            subprocess.run(cmd, check=True)  # nosec: B603, B607
        except subprocess.CalledProcessError as e:
            print(f"Command failed: {' '.join(e.cmd)}", file=sys.stderr)
            sys.exit(e.returncode)


def lint() -> None:
    """Format app/ and tests/, then apply ruff's autofixes."""
    _run(
        [
            ["ruff", "format", "app", "tests"],
            ["ruff", "check", "--fix", "app", "tests"],
        ]
    )


def test() -> None:
    """Run the unit tests."""
    _run([["uv", "run", "pytest", "-q", "tests/unit"]])


def clean() -> None:
    """Remove bytecode, tool caches and build output."""
    _run(
        [
            ["find", "app", "tests", "-type", "d", "-name", "__pycache__", "-prune",
             "-exec", "rm", "-rf", "{}", "+"],
            ["rm", "-rf", *ARTIFACTS],
        ]
    )


TASKS = {"lint": lint, "test": test, "clean": clean}


if __name__ == "__main__":
    if len(sys.argv) != 2 or sys.argv[1] not in TASKS:
        print(f"Usage: devops.py <{'|'.join(TASKS)}>", file=sys.stderr)
        sys.exit(2)
    TASKS[sys.argv[1]]()
