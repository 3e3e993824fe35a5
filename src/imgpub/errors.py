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
Exceptions raised by imgpub. The CLI is the only place that turns them into an exit status.
"""
from typing import List, Optional


class ImgpubError(Exception):
    """Base class for every failure that should abort the run."""


class ConfigurationError(ImgpubError):
    """Raised when required configuration is missing or invalid."""


class CommandError(ImgpubError):
    """
    Raised when an external command exits non-zero or cannot be started.
    """
    def __init__(self, command: str, args: List[str], exit_code: Optional[int] = None, reason: str = ""):
        self.command = command
        self.args_list = list(args)
        self.exit_code = exit_code
        self.reason = reason
        if exit_code is not None:
            message = f"Command '{command}' failed with exit code {exit_code}"
        else:
            message = f"Command '{command}' could not be executed: {reason}"
        super().__init__(message)
