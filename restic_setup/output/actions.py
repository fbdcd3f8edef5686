"""Machine-readable outputs for the caller.

On GitHub Actions, ``GITHUB_OUTPUT`` names a file to which steps append
``name=value`` lines; the values become ``steps.<id>.outputs.<name>``.
Elsewhere the outputs are only printed.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from restic_setup.output.console import ConsoleProtocol

__all__ = ["write_outputs", "OUTPUT_FILE_ENV"]

OUTPUT_FILE_ENV = "GITHUB_OUTPUT"


def write_outputs(
    outputs: Mapping[str, str],
    console: ConsoleProtocol,
    output_file: Path | None = None,
) -> None:
    """Print outputs and append them to the Actions output file, if any.

    Args:
        outputs: Output names and values
        console: Log sink
        output_file: Defaults to the file named by ``GITHUB_OUTPUT``

    Raises:
        OSError: If the output file cannot be written
    """
    if output_file is None:
        env_file = os.environ.get(OUTPUT_FILE_ENV)
        output_file = Path(env_file) if env_file else None

    for name, value in outputs.items():
        console.info(f"{name}={value}")

    if output_file is None:
        return

    with open(output_file, "a", encoding="utf-8") as f:
        for name, value in outputs.items():
            f.write(f"{name}={value}\n")
