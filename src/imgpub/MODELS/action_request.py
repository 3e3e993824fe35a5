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
The immutable request describing one run of the publication step.
"""
from enum import Enum
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, field_validator, model_validator

from ..REGISTRY.image_reference import ImageReference
from ..UTILS.tag_sanitizer import sanitize


class Action(str, Enum):
    """
    Operations the step can perform.
    """
    BUILD = "build"
    PUSH = "push"
    TAG = "tag"


class ActionRequest(BaseModel):
    """
    Everything the planner needs for one invocation, validated once at startup.

    The source repository is the one that already holds the image locally
    (after a build) or in the registry (for the tag action). It is always the
    first entry of repositories.
    """
    model_config = ConfigDict(frozen=True)

    action: Action
    repositories: List[str]
    source_repository: str = ""
    container: str
    tags: List[str] = []
    build_version: str = ""
    default_tag: str = ""

    # Build only
    path: str = "."
    dockerfile: str = "Dockerfile"
    copy_list: List[str] = []
    build_args: List[str] = []

    @model_validator(mode="before")
    @classmethod
    def _derive_defaults(cls, data: Any) -> Any:
        if isinstance(data, dict):
            data = dict(data)
            repositories = data.get("repositories") or []
            if not data.get("source_repository") and repositories:
                data["source_repository"] = repositories[0]
            # Always derived, so every reference of a run shares the sanitized build version
            data["default_tag"] = sanitize(data.get("build_version") or "")
        return data

    @field_validator("repositories")
    @classmethod
    def _require_repository(cls, value: List[str]) -> List[str]:
        if not value:
            raise ValueError("at least one repository is required")
        return value

    @field_validator("container")
    @classmethod
    def _require_container(cls, value: str) -> str:
        if not value:
            raise ValueError("container name is required")
        return value

    @model_validator(mode="after")
    def _check_source_repository(self) -> "ActionRequest":
        if self.source_repository != self.repositories[0]:
            raise ValueError(
                f"source repository {self.source_repository} must be the first of the repositories"
            )
        return self

    def image(self, repository: str, tag: Optional[str] = None) -> ImageReference:
        """
        Get the reference for this run's container in a repository, under the default tag unless one is given.
        """
        return ImageReference(
            repository=repository,
            container=self.container,
            tag=self.default_tag if tag is None else tag,
        )

    @property
    def source_image(self) -> ImageReference:
        return self.image(self.source_repository)
