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
Conversion of arbitrary build versions into values usable as image tags.

A tag may contain ASCII letters, digits, underscores, periods and dashes.
Docker additionally limits tags to 128 characters and forbids a leading
period or dash; those two rules are reported by tag_warnings() but not
enforced, so the default tag always equals the sanitized build version.
"""
import re
from typing import List

INVALID_TAG_CHARACTERS = re.compile(r"[^a-zA-Z0-9_.\-]+")
MAX_TAG_LENGTH = 128


def sanitize(build_version: str) -> str:
    """
    Replaces every run of characters that are not allowed in a tag with a single dash.

    Examples:
        - 1.2.3-rc.1 -> 1.2.3-rc.1
        - feature/foo bar -> feature-foo-bar
    """
    return INVALID_TAG_CHARACTERS.sub("-", build_version)


def tag_warnings(tag: str) -> List[str]:
    """
    Lists the reasons a registry may still reject a sanitized tag.
    """
    warnings = []
    if len(tag) > MAX_TAG_LENGTH:
        warnings.append(f"tag is {len(tag)} characters long, registries accept at most {MAX_TAG_LENGTH}")
    if tag.startswith((".", "-")):
        warnings.append("tag starts with a period or dash")
    if not tag:
        warnings.append("tag is empty")
    return warnings
