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
Planning and execution of build, push and tag runs across repositories and tags.
"""
import logging
from typing import Callable, Dict, List, Mapping, Optional

from ..BUILDERS.image_builder import ImageBuilder
from ..errors import ConfigurationError
from ..MODELS.action_request import Action, ActionRequest
from ..MODELS.engine_command import ENGINE, EngineCommand, OperationKind
from ..REGISTRY.image_reference import ImageReference
from ..REGISTRY.registry_session import RegistrySession
from ..RUNNERS.command_runner import CommandRunner

logger = logging.getLogger(__name__)


class PublicationPlanner:
    """
    Computes the ordered docker invocations that replicate one image over all
    requested repositories and tags, then runs them one by one.

    Each step depends on the tag created by the step before it, so nothing
    runs in parallel and the first failure stops the run. Already pushed
    tags are not rolled back.
    """
    def __init__(self, session: RegistrySession, runner: Optional[CommandRunner] = None,
                 builder: Optional[ImageBuilder] = None, environ: Optional[Mapping[str, str]] = None):
        """
        Initializes the planner.

        :param session: Decides which operations need a registry login first.
        :param runner: Executes planned commands; only needed by execute().
        :param builder: Assembles build commands; created from environ when omitted.
        :param environ: Source of build argument values.
        """
        self.session = session
        self.runner = runner
        self.builder = builder or ImageBuilder(environ)
        self._planners: Dict[Action, Callable[[ActionRequest], List[EngineCommand]]] = {
            Action.BUILD: self.plan_build,
            Action.PUSH: self.plan_push,
            Action.TAG: self.plan_tag,
        }

    def plan(self, request: ActionRequest) -> List[EngineCommand]:
        """
        Returns every command the request needs, in execution order.
        """
        return self._planners[request.action](request)

    def execute(self, request: ActionRequest) -> List[EngineCommand]:
        """
        Plans the request and runs the commands in order.

        :return: The commands that were run.
        :raises CommandError: As soon as one command fails.
        """
        if self.runner is None:
            raise ConfigurationError("No command runner configured")

        commands = self.plan(request)
        logger.info("Running %s with %d commands", request.action.value, len(commands))
        for command in commands:
            self.runner.execute(command)
        return commands

    def plan_build(self, request: ActionRequest) -> List[EngineCommand]:
        commands = self.builder.staging_commands(request)
        # Only the primary target is checked; base image registries are not inspected
        self._append_login(commands, request.source_image)
        commands.append(self.builder.build_command(request))
        return commands

    def plan_push(self, request: ActionRequest) -> List[EngineCommand]:
        source = request.source_image
        commands = []
        for i, repository in enumerate(request.repositories):
            target = request.image(repository)
            # The build already tagged the source repository with the default tag
            if i > 0:
                commands.append(self._tag(source, target))
            self._append_login(commands, target)
            commands.append(self._push(target))

            self._append_extra_tags(commands, request, source, repository)
        return commands

    def plan_tag(self, request: ActionRequest) -> List[EngineCommand]:
        """
        Retags an image that was pushed by an earlier run.

        The source image is pulled first because nothing was built locally.
        It is not pushed again under its default tag.
        """
        source = request.source_image
        commands = []
        self._append_login(commands, source)
        commands.append(self._pull(source))

        for i, repository in enumerate(request.repositories):
            if i > 0:
                target = request.image(repository)
                commands.append(self._tag(source, target))
                self._append_login(commands, target)
                commands.append(self._push(target))

            self._append_extra_tags(commands, request, source, repository)
        return commands

    def _append_extra_tags(self, commands: List[EngineCommand], request: ActionRequest,
                           source: ImageReference, repository: str):
        for tag in request.tags:
            target = request.image(repository, tag)
            commands.append(self._tag(source, target))
            self._append_login(commands, target)
            commands.append(self._push(target))

    def _append_login(self, commands: List[EngineCommand], image_ref: ImageReference):
        login = self.session.login_command(image_ref)
        if login is not None:
            commands.append(login)

    def _tag(self, source: ImageReference, target: ImageReference) -> EngineCommand:
        return EngineCommand(
            kind=OperationKind.TAG,
            command=ENGINE,
            args=["tag", str(source), str(target)],
            description=f"Tagging container image {target}",
        )

    def _push(self, target: ImageReference) -> EngineCommand:
        return EngineCommand(
            kind=OperationKind.PUSH,
            command=ENGINE,
            args=["push", str(target)],
            description=f"Pushing container image {target}",
        )

    def _pull(self, source: ImageReference) -> EngineCommand:
        return EngineCommand(
            kind=OperationKind.PULL,
            command=ENGINE,
            args=["pull", str(source)],
            description=f"Pulling container image {source}",
        )
