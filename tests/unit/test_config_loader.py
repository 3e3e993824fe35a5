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
Unit tests for turning options and environment into a request.
"""
import os

import pytest
from imgpub.errors import ConfigurationError
from imgpub.MODELS.action_request import Action, ActionRequest
from imgpub.PARSERS.config_loader import build_request, load_credentials, load_environment
from imgpub.PARSERS.list_parser import split_list


ENVIRON = {"ESTAFETTE_BUILD_VERSION": "1.0.0-feature/x", "ESTAFETTE_LABEL_APP": "myapp"}


class TestSplitList:
    """Tests for comma separated values."""

    def test_split(self):
        assert split_list("a,b,c") == ["a", "b", "c"]

    def test_empty(self):
        assert split_list("") == []
        assert split_list(None) == []

    def test_single(self):
        assert split_list("extensions") == ["extensions"]


class TestBuildRequest:
    """Tests for build_request."""

    def test_defaults(self):
        request = build_request("push", "extensions,gcr.io/team", environ=ENVIRON)
        assert request.action == Action.PUSH
        assert request.repositories == ["extensions", "gcr.io/team"]
        assert request.source_repository == "extensions"
        assert request.container == "myapp"
        assert request.default_tag == "1.0.0-feature-x"
        assert request.tags == []
        assert request.path == "."
        assert request.dockerfile == "Dockerfile"

    def test_container_overrides_app_label(self):
        request = build_request("build", "extensions", container="docker", environ=ENVIRON)
        assert request.container == "docker"

    def test_lists_are_split(self):
        request = build_request(
            "build", "extensions", tags="dev,latest", copy="Dockerfile,bin", args="FOO,BAR", environ=ENVIRON
        )
        assert request.tags == ["dev", "latest"]
        assert request.copy_list == ["Dockerfile", "bin"]
        assert request.build_args == ["FOO", "BAR"]

    def test_missing_repositories(self):
        with pytest.raises(ConfigurationError) as exc:
            build_request("push", "", environ=ENVIRON)
        assert "repositories" in str(exc.value)

    def test_unknown_action(self):
        with pytest.raises(ConfigurationError) as exc:
            build_request("deploy", "extensions", environ=ENVIRON)
        assert "build, push or tag" in str(exc.value)

    def test_missing_action(self):
        with pytest.raises(ConfigurationError):
            build_request(None, "extensions", environ=ENVIRON)

    def test_empty_entry_is_kept_verbatim(self):
        request = build_request("push", "a,", environ=ENVIRON)
        assert request.repositories == ["a", ""]
        assert str(request.image("")) == "/myapp:1.0.0-feature-x"

    def test_missing_container(self):
        with pytest.raises(ConfigurationError) as exc:
            build_request("push", "extensions", environ={})
        assert "container" in str(exc.value)


class TestActionRequest:
    """Tests for request validation."""

    def test_empty_repositories_rejected(self):
        with pytest.raises(ValueError):
            ActionRequest(action="push", repositories=[], container="app")

    def test_source_repository_must_be_first(self):
        with pytest.raises(ValueError):
            ActionRequest(action="push", repositories=["a", "b"], source_repository="b", container="app")

    def test_default_tag_always_follows_build_version(self):
        request = ActionRequest(
            action="push", repositories=["a"], container="app", build_version="feature/x", default_tag="other tag"
        )
        assert request.default_tag == "feature-x"
        assert str(request.source_image) == "a/app:feature-x"

    def test_source_image(self):
        request = ActionRequest(action="tag", repositories=["a", "b"], container="app", build_version="1.0")
        assert str(request.source_image) == "a/app:1.0"
        assert str(request.image("b", "dev")) == "b/app:dev"


class TestEnvironment:
    """Tests for environment loading."""

    def test_load_credentials(self):
        environ = {"ESTAFETTE_CI_REPOSITORY_CREDENTIALS_JSON": '[{"repository": "a", "username": "u", "password": "p"}]'}
        assert [c.repository for c in load_credentials(environ)] == ["a"]
        assert load_credentials({}) == []

    def test_load_environment_file(self, tmp_path, monkeypatch):
        env_file = tmp_path / "step.env"
        env_file.write_text("IMGPUB_TEST_ONLY=from-file\nIMGPUB_TEST_KEPT=from-file\n")
        monkeypatch.delenv("IMGPUB_TEST_ONLY", raising=False)
        monkeypatch.setenv("IMGPUB_TEST_KEPT", "from-env")

        assert load_environment(str(env_file)) is True
        assert os.environ["IMGPUB_TEST_ONLY"] == "from-file"
        assert os.environ["IMGPUB_TEST_KEPT"] == "from-env"
        os.environ.pop("IMGPUB_TEST_ONLY", None)

    def test_missing_environment_file(self, tmp_path):
        assert load_environment(str(tmp_path / "missing.env")) is False

    def test_stray_env_file_in_working_directory_is_ignored(self, tmp_path, monkeypatch):
        (tmp_path / ".env").write_text("IMGPUB_TEST_STRAY=from-dotenv\n")
        monkeypatch.chdir(tmp_path)
        monkeypatch.delenv("IMGPUB_ENV_FILE", raising=False)
        monkeypatch.delenv("IMGPUB_TEST_STRAY", raising=False)

        assert load_environment() is False
        assert "IMGPUB_TEST_STRAY" not in os.environ

    def test_env_file_named_by_variable(self, tmp_path, monkeypatch):
        env_file = tmp_path / "step.env"
        env_file.write_text("IMGPUB_TEST_NAMED=from-file\n")
        monkeypatch.setenv("IMGPUB_ENV_FILE", str(env_file))
        monkeypatch.delenv("IMGPUB_TEST_NAMED", raising=False)

        assert load_environment() is True
        assert os.environ["IMGPUB_TEST_NAMED"] == "from-file"
        os.environ.pop("IMGPUB_TEST_NAMED", None)
