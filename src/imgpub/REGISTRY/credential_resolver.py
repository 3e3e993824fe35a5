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
Lookup of registry credentials for image references.
"""
from typing import Optional, Sequence

from ..MODELS.credentials import CredentialRecord
from .image_reference import ImageReference


class CredentialResolver:
    """
    Finds the credential record that applies to an image.
    """
    def __init__(self, credentials: Optional[Sequence[CredentialRecord]] = None):
        """
        Args:
            credentials: Known credentials, searched in the given order.
        """
        self.credentials = list(credentials or [])

    def resolve(self, image_ref: ImageReference) -> Optional[CredentialRecord]:
        """
        Get the first credential whose repository equals the repository path of the image.

        Args:
            image_ref: Image about to be pulled, built or pushed.

        Returns:
            The matching record, or None for images that need no login.
        """
        return resolve(self.credentials, image_ref)


def resolve(credentials: Sequence[CredentialRecord], image_ref: ImageReference) -> Optional[CredentialRecord]:
    repository_path = image_ref.repository_path
    for credential in credentials:
        if credential.repository == repository_path:
            return credential
    return None
