# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
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

"""Runtime settings of the Nile MCP Server."""

import os
from .constants import (
    DEFAULT_API_BASE_URL,
    DEFAULT_CONNECT_TIMEOUT,
    DEFAULT_HEARTBEAT_INTERVAL,
    DEFAULT_REQUEST_TIMEOUT,
    DEFAULT_SERVER_HOST,
    DEFAULT_SERVER_PORT,
    SERVER_MODE_SSE,
    SERVER_MODE_STDIO,
)
from .exceptions import ConfigurationError
from pydantic import BaseModel, Field, SecretStr, field_validator
from pydantic import ValidationError as PydanticValidationError
from typing import Any, Dict, Literal, Mapping, Optional


# Environment variable for each setting
ENVIRONMENT_VARIABLES = {
    'api_key': 'NILE_API_KEY',
    'workspace_slug': 'NILE_WORKSPACE_SLUG',
    'api_base_url': 'NILE_API_BASE_URL',
    'mode': 'MCP_SERVER_MODE',
    'host': 'MCP_SERVER_HOST',
    'port': 'MCP_SERVER_PORT',
    'heartbeat_interval': 'MCP_HEARTBEAT_INTERVAL',
    'request_timeout': 'NILE_REQUEST_TIMEOUT',
    'connect_timeout': 'NILE_CONNECT_TIMEOUT',
    'log_level': 'LOG_LEVEL',
}

LOG_LEVELS = ('TRACE', 'DEBUG', 'INFO', 'SUCCESS', 'WARNING', 'ERROR', 'CRITICAL')


class ServerConfig(BaseModel):
    """Validated server settings."""

    api_key: SecretStr
    workspace_slug: str = Field(min_length=1)
    api_base_url: str = DEFAULT_API_BASE_URL
    mode: Literal['stdio', 'sse'] = SERVER_MODE_STDIO
    host: str = DEFAULT_SERVER_HOST
    port: int = Field(default=DEFAULT_SERVER_PORT, ge=1, le=65535)
    heartbeat_interval: float = Field(default=DEFAULT_HEARTBEAT_INTERVAL, gt=0)
    request_timeout: float = Field(default=DEFAULT_REQUEST_TIMEOUT, gt=0)
    connect_timeout: float = Field(default=DEFAULT_CONNECT_TIMEOUT, gt=0)
    log_level: str = 'INFO'

    @field_validator('api_key')
    @classmethod
    def _api_key_not_blank(cls, value: SecretStr) -> SecretStr:
        if not value.get_secret_value().strip():
            raise ValueError('must not be empty')
        return value

    @field_validator('mode', mode='before')
    @classmethod
    def _lower_mode(cls, value: Any) -> Any:
        return value.strip().lower() if isinstance(value, str) else value

    @field_validator('log_level')
    @classmethod
    def _known_level(cls, value: str) -> str:
        level = value.strip().upper()
        if level not in LOG_LEVELS:
            raise ValueError(f'must be one of {", ".join(LOG_LEVELS)}')
        return level

    @property
    def is_sse(self) -> bool:
        """Whether the HTTP event-stream transport is selected."""
        return self.mode == SERVER_MODE_SSE

    @classmethod
    def from_env(
        cls,
        environ: Optional[Mapping[str, str]] = None,
        overrides: Optional[Dict[str, Any]] = None,
    ) -> 'ServerConfig':
        """Build the settings from environment variables.

        Args:
            environ: Variables to read, ``os.environ`` by default
            overrides: Values that win over the environment, e.g. from CLI flags;
                None values are ignored

        Returns:
            The validated settings

        Raises:
            ConfigurationError: If a setting is missing or invalid
        """
        environ = os.environ if environ is None else environ
        values: Dict[str, Any] = {}
        for field, variable in ENVIRONMENT_VARIABLES.items():
            value = environ.get(variable)
            if value is not None and value != '':
                values[field] = value
        for field, value in (overrides or {}).items():
            if value is not None:
                values[field] = value

        try:
            return cls.model_validate(values)
        except PydanticValidationError as e:
            problems = []
            for error in e.errors():
                field = str(error['loc'][0]) if error.get('loc') else ''
                variable = ENVIRONMENT_VARIABLES.get(field, field)
                problems.append(f'{variable}: {error["msg"]}')
            raise ConfigurationError('Invalid configuration: ' + '; '.join(problems)) from e
