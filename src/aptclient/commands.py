"""Thin wrapper around the external package management tools."""

import logging
import os
import subprocess

from pydantic import BaseModel, ConfigDict, computed_field

from aptclient.errors import CommandError

logger = logging.getLogger(__name__)


class CommandResult(BaseModel):
    """Exit status and captured output of a finished command."""

    model_config = ConfigDict(frozen=True)

    args: list[str]
    returncode: int
    output: bytes = b""
    stderr: bytes = b""

    @computed_field
    @property
    def success(self) -> bool:
        """True when the command exited with status 0."""
        return self.returncode == 0

    @property
    def text(self) -> str:
        """Captured output decoded for display."""
        return self.output.decode("utf-8", errors="replace")

    def check(self, action: str) -> "CommandResult":
        """Raise CommandError for a non-zero exit, otherwise return self."""
        if not self.success:
            diagnostics = (self.output + self.stderr).decode("utf-8", errors="replace").strip()
            raise CommandError(
                f"{action}: exit status {self.returncode} - {diagnostics}",
                cmd=self.args,
                returncode=self.returncode,
                output=self.output + self.stderr,
            )
        return self


def noninteractive_env() -> dict[str, str]:
    """Environment for apt-get runs that must never prompt."""
    env = os.environ.copy()
    env["DEBIAN_FRONTEND"] = "noninteractive"
    return env


def run_command(
    args: list[str],
    *,
    combine_output: bool = True,
    env: dict[str, str] | None = None,
) -> CommandResult:
    """Run a command to completion and capture what it printed.

    Args:
        args: Program and arguments to execute
        combine_output: Merge stderr into output (like a terminal would show it).
            When False, only stdout lands in output and stderr is kept apart.
        env: Environment for the child process, defaults to ours

    Returns:
        The CommandResult, whatever the exit status

    Raises:
        CommandError: If the program could not be started at all
    """
    logger.debug(f"Running {' '.join(args)}")
    try:
        proc = subprocess.run(
            args,
            stdout=subprocess.PIPE,
            stderr=subprocess.STDOUT if combine_output else subprocess.PIPE,
            env=env,
            check=False,
        )
    except OSError as e:
        raise CommandError(f"running {args[0]}: {e}", cmd=args) from e

    logger.debug(f"{args[0]} exited with status {proc.returncode}")
    return CommandResult(
        args=list(args),
        returncode=proc.returncode,
        output=proc.stdout or b"",
        stderr=proc.stderr or b"",
    )
