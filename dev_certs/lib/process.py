"""Run external certificate tools with bounded time and captured output."""

import subprocess
from collections.abc import Sequence
from pathlib import Path

from .errors import ToolInvocationError, ToolUnavailableError
from .logging_config import LOGGER


def run_tool(
    command: Sequence[str],
    error_cls: type[ToolInvocationError],
    timeout: float,
    input_text: str | None = None,
    cwd: Path | None = None,
) -> subprocess.CompletedProcess[str]:
    """Run command to completion, raising error_cls on any failure.

    When input_text is given it is written to the child's stdin and stdin is
    closed before waiting for exit.

    Args:
        command: Executable followed by its arguments
        error_cls: Invocation error raised for this step
        timeout: Seconds before the child is killed
        input_text: Optional payload for stdin
        cwd: Working directory for the child

    Returns:
        Completed process with captured stdout/stderr text

    Raises:
        error_cls: If the tool is missing, times out, cannot be started or
            exits non-zero. A missing tool is chained from ToolUnavailableError.
    """
    tool = command[0]
    LOGGER.debug("Running %s", " ".join(command), extra={"tool": tool})

    try:
        result = subprocess.run(
            list(command),
            input=input_text,
            capture_output=True,
            text=True,
            timeout=timeout,
            cwd=cwd,
            check=False,
        )
    except FileNotFoundError:
        unavailable = ToolUnavailableError(tool)
        raise error_cls(tool, str(unavailable)) from unavailable
    except subprocess.TimeoutExpired as e:
        raise error_cls(tool, f"timed out after {timeout}s") from e
    except OSError as e:
        raise error_cls(tool, f"could not be started: {e}") from e

    if result.returncode != 0:
        raise error_cls(tool, result.stderr.strip(), returncode=result.returncode)

    return result
