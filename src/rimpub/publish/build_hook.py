"""External build step run after the copy phase."""

import logging
import os
import shlex
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Sequence, Tuple, Union

from rimpub.exceptions import BuildHookError, ConfigError
from rimpub.types import PathType

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BuildHook:
    """An external command invoked with the published directory as its last argument.

    The process inherits stdout and stderr, so its output is passed straight through
    to the terminal. Only its exit code is captured.

    Attributes:
        command: Executable followed by its fixed arguments.
        cwd: Working directory for the process. Defaults to the current directory.

    Example:
        >>> hook = BuildHook.from_value("dotnet build Source/MyMod.csproj -o")
        >>> hook.command
        ('dotnet', 'build', 'Source/MyMod.csproj', '-o')
    """

    command: Tuple[str, ...]
    cwd: Optional[Path] = None

    @classmethod
    def from_value(cls, value: Union[str, Sequence[str]], cwd: Optional[PathType] = None) -> "BuildHook":
        """Create a hook from a shell-style string or an argument list.

        Raises:
            ConfigError: If the command is empty or cannot be split.
        """
        if isinstance(value, str):
            try:
                command = tuple(shlex.split(value, posix=os.name != "nt"))
            except ValueError as e:
                raise ConfigError(f"Invalid build hook command {value!r}: {e}") from e
        else:
            command = tuple(str(part) for part in value)
        if not command:
            raise ConfigError("Build hook command is empty")
        return cls(command, Path(cwd) if cwd is not None else None)

    def describe(self) -> str:
        return shlex.join(self.command)

    def run(self, target_dir: PathType) -> int:
        """Run the hook once and wait for it.

        Returns:
            The process exit code.

        Raises:
            BuildHookError: If the process cannot be started.
        """
        argv = [*self.command, str(target_dir)]
        logger.info("Running build hook: %s", shlex.join(argv))
        try:
            completed = subprocess.run(argv, cwd=self.cwd, check=False)
        except OSError as e:
            raise BuildHookError(self.describe(), e.strerror or str(e)) from e

        if completed.returncode == 0:
            logger.info("Build hook finished successfully")
        else:
            logger.warning("Build hook exited with code %d", completed.returncode)
        return completed.returncode
