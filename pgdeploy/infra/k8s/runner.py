"""Command runner for executing shell commands.

This module provides the base command execution functionality used by
the kubectl wrappers.
"""

from __future__ import annotations

import subprocess
from collections.abc import Callable, Sequence
from pathlib import Path

from loguru import logger

from pgdeploy.infra.errors import ClusterUnavailableError

from .types import CommandResult


class CommandRunner:
    """Low-level command executor with consistent result handling.

    This class provides the foundation for executing shell commands with
    proper output capture, error handling, and streaming support.
    A missing or non-executable binary is raised as ClusterUnavailableError;
    every other failure is returned as an unsuccessful CommandResult.
    """

    def __init__(self, working_dir: Path) -> None:
        """Initialize the command runner.

        Args:
            working_dir: Directory commands are executed from.
        """
        self.working_dir = working_dir

    def run(
        self,
        cmd: Sequence[str],
        *,
        input_data: str | None = None,
        capture_output: bool = True,
    ) -> CommandResult:
        """Execute a shell command and return structured result.

        Args:
            cmd: Command and arguments as a sequence
            input_data: Optional text to send to stdin
            capture_output: Whether to capture stdout/stderr

        Returns:
            CommandResult with success status, output, and return code

        Raises:
            ClusterUnavailableError: If the executable cannot be started
        """
        logger.debug(f"Running: {' '.join(cmd)}")
        try:
            result = subprocess.run(
                list(cmd),
                cwd=self.working_dir,
                capture_output=capture_output,
                text=True,
                input=input_data,
                check=False,
            )
        except OSError as e:
            raise ClusterUnavailableError(
                f"Unable to execute {cmd[0]}", details=str(e)
            ) from e

        logger.debug(f"{cmd[0]} exited with {result.returncode}")
        return CommandResult(
            success=result.returncode == 0,
            stdout=result.stdout or "",
            stderr=result.stderr or "",
            returncode=result.returncode,
        )

    def run_streaming(
        self,
        cmd: Sequence[str],
        *,
        on_output: Callable[[str], None] | None = None,
    ) -> CommandResult:
        """Execute a shell command with real-time output streaming.

        Args:
            cmd: Command and arguments as a sequence
            on_output: Callback called with each line of output.
                      If None, output is collected but not streamed.

        Returns:
            CommandResult with success status, collected output, and return code

        Raises:
            ClusterUnavailableError: If the executable cannot be started
        """
        logger.debug(f"Streaming: {' '.join(cmd)}")
        stdout_lines: list[str] = []
        try:
            process = subprocess.Popen(
                list(cmd),
                cwd=self.working_dir,
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT,  # Merge stderr into stdout
                text=True,
            )
        except OSError as e:
            raise ClusterUnavailableError(
                f"Unable to execute {cmd[0]}", details=str(e)
            ) from e

        # Closes the pipe and reaps the child even if on_output raises
        with process:
            if process.stdout:
                for line in iter(process.stdout.readline, ""):
                    line = line.rstrip("\n")
                    stdout_lines.append(line)
                    if on_output:
                        on_output(line)
            process.wait()

        return CommandResult(
            success=process.returncode == 0,
            stdout="\n".join(stdout_lines),
            stderr="",  # stderr is merged into stdout
            returncode=process.returncode or 0,
        )
