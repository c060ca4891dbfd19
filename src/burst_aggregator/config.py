"""Runtime configuration: input path and worker count."""

import os

# Environment variable naming the input file when no path is given on the CLI.
FILE_NAME_ENV = "FILE_NAME"
DEFAULT_FILE_NAME = "file.txt"


def resolve_input_path(cli_value: str | None = None) -> str:
    """Pick the input path: CLI argument, then $FILE_NAME, then file.txt."""
    if cli_value:
        return cli_value
    return os.environ.get(FILE_NAME_ENV) or DEFAULT_FILE_NAME


def default_worker_count() -> int:
    """One worker per available CPU; the coordinator mostly idles."""
    return os.cpu_count() or 1
