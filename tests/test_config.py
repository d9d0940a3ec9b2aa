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

"""Tests for server configuration."""

import pytest
from nile_mcp_server.config import ServerConfig
from nile_mcp_server.exceptions import ConfigurationError


REQUIRED = {'NILE_API_KEY': 'key-1', 'NILE_WORKSPACE_SLUG': 'acme'}


class TestServerConfig:
    """Test cases for ServerConfig.from_env."""

    def test_defaults(self):
        """Test the defaults when only the required settings are present."""
        config = ServerConfig.from_env(REQUIRED)

        assert config.api_key.get_secret_value() == 'key-1'
        assert config.workspace_slug == 'acme'
        assert config.api_base_url == 'https://global.thenile.dev'
        assert config.mode == 'stdio'
        assert config.port == 3000
        assert config.heartbeat_interval == 30.0
        assert config.request_timeout == 30.0
        assert config.connect_timeout == 10.0
        assert config.log_level == 'INFO'
        assert not config.is_sse

    def test_environment_values(self):
        """Test every variable is read and coerced."""
        config = ServerConfig.from_env(
            {
                **REQUIRED,
                'NILE_API_BASE_URL': 'https://api.test',
                'MCP_SERVER_MODE': 'SSE',
                'MCP_SERVER_HOST': '127.0.0.1',
                'MCP_SERVER_PORT': '8080',
                'MCP_HEARTBEAT_INTERVAL': '5',
                'NILE_REQUEST_TIMEOUT': '12.5',
                'NILE_CONNECT_TIMEOUT': '3',
                'LOG_LEVEL': 'debug',
            }
        )

        assert config.is_sse
        assert config.api_base_url == 'https://api.test'
        assert config.port == 8080
        assert config.heartbeat_interval == 5.0
        assert config.request_timeout == 12.5
        assert config.connect_timeout == 3.0
        assert config.log_level == 'DEBUG'

    def test_overrides_win(self):
        """Test overrides replace environment values and None is ignored."""
        config = ServerConfig.from_env(
            {**REQUIRED, 'MCP_SERVER_PORT': '8080'}, overrides={'port': 9090, 'mode': None}
        )

        assert config.port == 9090
        assert config.mode == 'stdio'

    def test_missing_required(self):
        """Test missing settings name their environment variables."""
        with pytest.raises(ConfigurationError) as excinfo:
            ServerConfig.from_env({})

        assert 'NILE_API_KEY' in str(excinfo.value)
        assert 'NILE_WORKSPACE_SLUG' in str(excinfo.value)

    @pytest.mark.parametrize(
        'variable,value',
        [
            ('MCP_SERVER_MODE', 'websocket'),
            ('MCP_SERVER_PORT', 'http'),
            ('MCP_SERVER_PORT', '70000'),
            ('MCP_HEARTBEAT_INTERVAL', '0'),
            ('LOG_LEVEL', 'LOUD'),
            ('NILE_API_KEY', '   '),
        ],
    )
    def test_invalid_values(self, variable, value):
        """Test invalid settings are configuration errors."""
        with pytest.raises(ConfigurationError, match=variable):
            ServerConfig.from_env({**REQUIRED, variable: value})

    def test_api_key_not_in_repr(self):
        """Test the API key is never rendered."""
        assert 'key-1' not in repr(ServerConfig.from_env(REQUIRED))
