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
Models for private container registry credentials.
"""
from typing import Optional

from pydantic import BaseModel, ConfigDict, SecretStr


class CredentialRecord(BaseModel):
    """
    Username and password for one repository, e.g. 'docker.io/estafette' or 'extensions'.
    """
    model_config = ConfigDict(frozen=True)

    repository: str = ""
    username: str = ""
    password: SecretStr = SecretStr("")

    @property
    def registry_host(self) -> Optional[str]:
        """
        Get the registry host to log in to.

        A repository without a slash lives on the default registry, so no host is returned.
        """
        segments = self.repository.split("/")
        if len(segments) > 1:
            return segments[0]
        return None
