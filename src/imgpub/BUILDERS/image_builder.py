"""
Builders for the commands that stage a build context and run 'docker build'.
"""
import os
from typing import List, Mapping, Optional

from ..MODELS.action_request import ActionRequest
from ..MODELS.engine_command import ENGINE, EngineCommand, OperationKind

DEFAULT_PATH = "."


class ImageBuilder:
    """
    Translates a build request into the commands that produce the image locally.

    One build tags the image for every repository and tag combination, so the
    push action never has to tag the first repository's default tag itself.
    """
    def __init__(self, environ: Optional[Mapping[str, str]] = None):
        """
        Initializes the ImageBuilder.

        :param environ: Source of build argument values; defaults to the process environment.
        """
        self.environ = os.environ if environ is None else environ

    def copy_list(self, request: ActionRequest) -> List[str]:
        """
        Returns the files and directories to copy into the build path.

        When building outside the current directory the Dockerfile has to be
        copied along, unless it is already listed.
        """
        items = list(request.copy_list)
        if request.path != DEFAULT_PATH and request.dockerfile not in items:
            items.append(request.dockerfile)
        return items

    def staging_commands(self, request: ActionRequest) -> List[EngineCommand]:
        """
        Creates the build directory and copies every listed item into it.
        """
        commands = [
            EngineCommand(
                kind=OperationKind.MKDIR,
                command="mkdir",
                args=["-p", request.path],
                description=f"Ensuring build directory {request.path} exists",
            )
        ]
        for item in self.copy_list(request):
            commands.append(
                EngineCommand(
                    kind=OperationKind.COPY,
                    command="cp",
                    args=["-r", item, request.path],
                    description=f"Copying {item} to {request.path}",
                )
            )
        return commands

    def tag_arguments(self, request: ActionRequest) -> List[str]:
        args = []
        for repository in request.repositories:
            args.extend(["--tag", str(request.image(repository))])
            for tag in request.tags:
                args.extend(["--tag", str(request.image(repository, tag))])
        return args

    def build_arg_arguments(self, request: ActionRequest) -> List[str]:
        """
        Passes each named environment variable as a build argument, empty when unset.
        """
        args = []
        for name in request.build_args:
            args.extend(["--build-arg", f"{name}={self.environ.get(name, '')}"])
        return args

    def build_command(self, request: ActionRequest) -> EngineCommand:
        """
        Returns the single 'docker build' invocation for the request.
        """
        args = ["build"]
        args.extend(self.tag_arguments(request))
        args.extend(self.build_arg_arguments(request))
        args.extend(["--file", f"{request.path}/{request.dockerfile}", request.path])
        return EngineCommand(
            kind=OperationKind.BUILD,
            command=ENGINE,
            args=args,
            description=f"Building docker image {request.source_image}...",
        )
