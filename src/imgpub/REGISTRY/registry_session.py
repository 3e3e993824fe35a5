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
Logging in to private registries before images are pulled or pushed.
"""
import logging
from typing import Optional, Sequence

from ..MODELS.credentials import CredentialRecord
from ..MODELS.engine_command import ENGINE, EngineCommand, OperationKind
from ..RUNNERS.command_runner import CommandRunner
from .credential_resolver import CredentialResolver
from .image_reference import ImageReference

logger = logging.getLogger(__name__)


class RegistrySession:
    """
    Issues 'docker login' for images whose repository has a known credential.

    Images without a matching credential are assumed to be public and are
    left alone. Logging in again for the same registry is harmless, so a login
    is planned before every operation that needs one.
    """

    def __init__(self, credentials: Optional[Sequence[CredentialRecord]] = None,
                 resolver: Optional[CredentialResolver] = None):
        self.resolver = resolver or CredentialResolver(credentials)

    def login_command(self, image_ref: ImageReference) -> Optional[EngineCommand]:
        """
        Get the login command required before accessing image_ref, if any.
        """
        credential = self.resolver.resolve(image_ref)
        if credential is None:
            return None

        args = [
            "login",
            "--username",
            credential.username,
            "--password",
            credential.password.get_secret_value(),
        ]
        host = credential.registry_host
        if host:
            args.append(host)

        return EngineCommand(
            kind=OperationKind.LOGIN,
            command=ENGINE,
            args=args,
            description=f"Logging in to repository {credential.repository} for image {image_ref}",
            secret_indices={4},
        )

    def login_if_required(self, image_ref: ImageReference, runner: CommandRunner) -> bool:
        """
        Logs in for image_ref when a credential matches.

        :return: True if a login was performed.
        :raises CommandError: If the login fails.
        """
        command = self.login_command(image_ref)
        if command is None:
            logger.debug("No credentials for %s, skipping login", image_ref)
            return False
        runner.execute(command)
        return True
