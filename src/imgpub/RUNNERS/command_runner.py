# Copyright 2024 Michael Maillet, Damien Davison, Sacha Davison
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
"""
Execution of external commands in the step's working directory with inherited output streams.
"""
import logging
import subprocess
import sys
from typing import Iterable, List, Optional, TYPE_CHECKING

from ..errors import CommandError

if TYPE_CHECKING:
    from ..MODELS.engine_command import EngineCommand

logger = logging.getLogger(__name__)

DEFAULT_WORK_DIR = "/estafette-work"


class CommandRunner:
    """
    Runs one external command at a time and blocks until it exits.
    """
    def __init__(self, working_dir: str = DEFAULT_WORK_DIR):
        """
        Initializes the command runner.

        Args:
            working_dir (str): Directory every command is started in.
        """
        self.working_dir = working_dir

    def run(self, command: str, args: List[str], secret_indices: Optional[Iterable[int]] = None):
        """
        Runs a command, streaming its output to our stdout/stderr.

        Args:
            command (str): Executable to run, looked up on PATH.
            args (List[str]): Arguments, passed without a shell.
            secret_indices (Optional[Iterable[int]]): Positions in args that must not be logged.

        Raises:
            CommandError: If the command cannot be started or exits non-zero.
        """
        hidden = set(secret_indices or [])
        shown = ["*****" if i in hidden else arg for i, arg in enumerate(args)]
        logger.info("Running command '%s %s'...", command, " ".join(shown))

        # Flush our own buffered output so it is not interleaved with the child's
        sys.stdout.flush()
        sys.stderr.flush()

        try:
            result = subprocess.run(
                [command] + list(args),
                cwd=self.working_dir,
                stdout=None,
                stderr=None,
                shell=False,
            )
        except OSError as e:
            raise CommandError(command, shown, reason=str(e)) from e

        if result.returncode != 0:
            raise CommandError(command, shown, exit_code=result.returncode)

    def execute(self, engine_command: "EngineCommand"):
        """
        Runs a planned command, logging its description first.
        """
        if engine_command.description:
            logger.info(engine_command.description)
        self.run(engine_command.command, engine_command.args, engine_command.secret_indices)


class DryRunCommandRunner(CommandRunner):
    """
    Logs commands instead of running them.
    """
    def __init__(self, working_dir: str = DEFAULT_WORK_DIR):
        super().__init__(working_dir)
        self.commands: List[str] = []

    def run(self, command: str, args: List[str], secret_indices: Optional[Iterable[int]] = None):
        hidden = set(secret_indices or [])
        shown = ["*****" if i in hidden else arg for i, arg in enumerate(args)]
        line = " ".join([command] + shown)
        self.commands.append(line)
        logger.info("Would run command '%s' in %s", line, self.working_dir)
