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
Parser for the JSON array of repository credentials supplied by the CI runner.
"""
import json
import logging
from typing import List, Optional

from pydantic import TypeAdapter, ValidationError

from ..MODELS.credentials import CredentialRecord

logger = logging.getLogger(__name__)

_CREDENTIAL_LIST = TypeAdapter(List[CredentialRecord])


class CredentialsParser:
    """
    Parser for repository credentials.

    Input looks like::

        [{"repository": "docker.io/estafette", "username": "user", "password": "secret"}]

    Anything that is not such an array results in no credentials at all.
    Publication then continues unauthenticated.
    """
    @staticmethod
    def parse_from_string(content: Optional[str]) -> List[CredentialRecord]:
        """
        Parses credentials from a JSON string.

        Args:
            content (Optional[str]): The raw JSON, possibly empty or unset.

        Returns:
            List[CredentialRecord]: The credentials in their original order.
        """
        if not content:
            return []

        try:
            data = json.loads(content)
        except (ValueError, RecursionError) as e:
            # JSONDecodeError is a ValueError; deeply nested arrays exhaust the decoder stack
            logger.warning("Ignoring repository credentials, they are not valid JSON: %s", type(e).__name__)
            return []

        try:
            credentials = _CREDENTIAL_LIST.validate_python(data)
        except ValidationError as e:
            logger.warning("Ignoring repository credentials, %d entries are malformed", e.error_count())
            return []

        logger.debug("Loaded credentials for %d repositories", len(credentials))
        return credentials
