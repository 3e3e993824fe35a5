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
Image reference handling.
References are always built from their parts, never parsed, and render as 'repository/container:tag'.
"""
from typing import List

from pydantic import BaseModel, ConfigDict


class ImageReference(BaseModel):
    """
    Reference to one image in one repository under one tag.

    Examples:
        - ImageReference(repository="extensions", container="docker", tag="1.0.0") -> extensions/docker:1.0.0
        - ImageReference(repository="gcr.io/project", container="app", tag="dev") -> gcr.io/project/app:dev
    """
    model_config = ConfigDict(frozen=True)

    repository: str
    container: str
    tag: str

    @property
    def full_name(self) -> str:
        """Get the rendered reference passed to the engine."""
        return f"{self.repository}/{self.container}:{self.tag}"

    @property
    def path_segments(self) -> List[str]:
        return self.full_name.split("/")

    @property
    def repository_path(self) -> str:
        """
        Get every path segment except the trailing 'container:tag' one.

        This is what credential records are matched against.
        """
        return "/".join(self.path_segments[:-1])

    def with_tag(self, tag: str) -> "ImageReference":
        """Get the same image under another tag."""
        return ImageReference(repository=self.repository, container=self.container, tag=tag)

    def in_repository(self, repository: str) -> "ImageReference":
        """Get the same image and tag in another repository."""
        return ImageReference(repository=repository, container=self.container, tag=self.tag)

    def __str__(self) -> str:
        return self.full_name

    def __repr__(self) -> str:
        return f"ImageReference({self.full_name})"
