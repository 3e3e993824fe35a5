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
Unit tests for build command assembly.
"""
from imgpub.BUILDERS.image_builder import ImageBuilder
from imgpub.MODELS.action_request import ActionRequest
from imgpub.MODELS.engine_command import OperationKind


def make_request(**overrides):
    values = dict(action="build", repositories=["a", "b"], container="app", build_version="1.0", tags=["dev"])
    values.update(overrides)
    return ActionRequest(**values)


class TestImageBuilder:
    """Tests for ImageBuilder."""

    def test_staging_in_current_directory(self):
        """Test that the Dockerfile is not copied when building in place."""
        commands = ImageBuilder(environ={}).staging_commands(make_request())
        assert [c.summary() for c in commands] == ["mkdir -p ."]

    def test_dockerfile_added_for_other_path(self):
        builder = ImageBuilder(environ={})
        request = make_request(path="./publish", copy_list=["bin"])
        assert builder.copy_list(request) == ["bin", "Dockerfile"]
        commands = builder.staging_commands(request)
        assert [c.kind for c in commands] == [OperationKind.MKDIR, OperationKind.COPY, OperationKind.COPY]
        assert commands[2].args == ["-r", "Dockerfile", "./publish"]

    def test_dockerfile_not_duplicated(self):
        request = make_request(path="./publish", copy_list=["Dockerfile"])
        assert ImageBuilder(environ={}).copy_list(request) == ["Dockerfile"]

    def test_build_command(self):
        """Test that every repository and tag combination is tagged in one build."""
        builder = ImageBuilder(environ={"FOO": "bar"})
        command = builder.build_command(make_request(build_args=["FOO", "UNSET"]))
        assert command.kind == OperationKind.BUILD
        assert command.args == [
            "build",
            "--tag", "a/app:1.0",
            "--tag", "a/app:dev",
            "--tag", "b/app:1.0",
            "--tag", "b/app:dev",
            "--build-arg", "FOO=bar",
            "--build-arg", "UNSET=",
            "--file", "./Dockerfile",
            ".",
        ]

    def test_build_command_custom_dockerfile(self):
        request = make_request(path="publish", dockerfile="Dockerfile.prod", tags=[])
        command = ImageBuilder(environ={}).build_command(request)
        assert command.args[-3:] == ["--file", "publish/Dockerfile.prod", "publish"]
