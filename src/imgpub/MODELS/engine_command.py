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
Models for single invocations planned against the container engine or the shell.
"""
from enum import Enum
from typing import List, Optional, Set

from pydantic import BaseModel, ConfigDict

ENGINE = "docker"


class OperationKind(str, Enum):
    """
    What a planned command does, used for logging and for inspecting plans.
    """
    MKDIR = "mkdir"
    COPY = "copy"
    LOGIN = "login"
    BUILD = "build"
    TAG = "tag"
    PUSH = "push"
    PULL = "pull"


class EngineCommand(BaseModel):
    """
    One external command, with the indices of arguments that must never be logged.
    """
    model_config = ConfigDict(frozen=True)

    kind: OperationKind
    command: str
    args: List[str]
    description: str = ""
    secret_indices: Set[int] = set()

    @property
    def masked_args(self) -> List[str]:
        return ["*****" if i in self.secret_indices else arg for i, arg in enumerate(self.args)]

    def summary(self, masked: bool = True) -> str:
        """
        Get the command line as a single string.

        :param masked: Replace secret arguments with asterisks.
        """
        args = self.masked_args if masked else self.args
        return " ".join([self.command] + args)

    @property
    def target(self) -> Optional[str]:
        """Get the last argument, which is the image or path the command acts on."""
        return self.args[-1] if self.args else None
