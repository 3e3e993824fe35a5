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
Turns raw option and environment values into a validated ActionRequest.
"""
import logging
import os
from typing import List, Mapping, Optional

from dotenv import load_dotenv
from pydantic import ValidationError

from ..errors import ConfigurationError
from ..MODELS.action_request import ActionRequest
from ..MODELS.credentials import CredentialRecord
from .credentials_parser import CredentialsParser
from .list_parser import split_list

logger = logging.getLogger(__name__)

BUILD_VERSION_ENV = "ESTAFETTE_BUILD_VERSION"
APP_LABEL_ENV = "ESTAFETTE_LABEL_APP"
CREDENTIALS_ENV = "ESTAFETTE_CI_REPOSITORY_CREDENTIALS_JSON"
ENV_FILE_ENV = "IMGPUB_ENV_FILE"

REPOSITORIES_HINT = "Set 'repositories:' to list at least one '- <repository>' (for example '- extensions')"
ACTION_HINT = "Set 'action: <action>' on this step to build, push or tag"


def load_environment(env_file: Optional[str] = None) -> bool:
    """
    Loads a .env file into the process environment without overriding variables that are already set.

    Nothing is loaded unless a file is named, since the working directory is
    the checkout being built and its .env must not feed build arguments.

    :param env_file: Path of the file; defaults to $IMGPUB_ENV_FILE.
    :return: True if a file was found and loaded.
    """
    path = env_file or os.environ.get(ENV_FILE_ENV)
    if not path or not os.path.isfile(path):
        return False
    logger.debug("Loading environment from %s", path)
    return load_dotenv(path, override=False)


def load_credentials(environ: Optional[Mapping[str, str]] = None) -> List[CredentialRecord]:
    environ = os.environ if environ is None else environ
    return CredentialsParser.parse_from_string(environ.get(CREDENTIALS_ENV))


def _describe(error: ValidationError) -> str:
    problems = []
    for item in error.errors():
        field = ".".join(str(part) for part in item["loc"]) or "request"
        if field == "repositories" and not item.get("input"):
            problems.append(REPOSITORIES_HINT)
        elif field == "action":
            problems.append(ACTION_HINT)
        else:
            problems.append(f"{field}: {item['msg']}")
    return "; ".join(problems)


def build_request(
    action: Optional[str],
    repositories: Optional[str],
    container: Optional[str] = None,
    tags: Optional[str] = None,
    path: str = ".",
    dockerfile: str = "Dockerfile",
    copy: Optional[str] = None,
    args: Optional[str] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> ActionRequest:
    """
    Builds the request for this run from comma separated option values.

    The container falls back to the app label and the default tag is derived
    from the build version, both read from environ.

    :raises ConfigurationError: If repositories are missing, the action is unknown or no container name is available.
    """
    environ = os.environ if environ is None else environ

    repository_list = split_list(repositories)
    if not repository_list:
        raise ConfigurationError(REPOSITORIES_HINT)

    try:
        return ActionRequest(
            action=action or "",
            repositories=repository_list,
            container=container or environ.get(APP_LABEL_ENV, ""),
            tags=split_list(tags),
            build_version=environ.get(BUILD_VERSION_ENV, ""),
            path=path or ".",
            dockerfile=dockerfile or "Dockerfile",
            copy_list=split_list(copy),
            build_args=split_list(args),
        )
    except ValidationError as e:
        raise ConfigurationError(_describe(e)) from e
