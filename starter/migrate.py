#!/usr/bin/env python3
"""
Apply Alembic migrations to the database named by the DB_* variables.

    python -m starter.migrate          # upgrade to head
    python -m starter.migrate 001      # upgrade to a specific revision

Alembic does the actual work; this only wraps the CLI with an exit code.
"""

from dotenv import load_dotenv
load_dotenv()

import subprocess
import sys
from typing import List, Optional


def _echo_output(stdout: Optional[str], stderr: Optional[str]) -> None:
    for stream in (stdout, stderr):
        if stream:
            print(stream.rstrip())


def main(argv: Optional[List[str]] = None) -> int:
    target = argv[0] if argv else "head"
    command = ["alembic", "upgrade", target]
    print(f"Upgrading database schema to {target}")

    try:
        result = subprocess.run(command, check=True, capture_output=True, text=True)
    except FileNotFoundError:
        print("alembic is not installed or not on PATH", file=sys.stderr)
        return 1
    except subprocess.CalledProcessError as e:
        _echo_output(e.stdout, e.stderr)
        print(f"Upgrade to {target} failed (alembic exit code {e.returncode})", file=sys.stderr)
        return 1

    _echo_output(result.stdout, result.stderr)
    print(f"Schema is at {target}")
    return 0


if __name__ == "__main__":
    sys.exit(main(sys.argv[1:]))
