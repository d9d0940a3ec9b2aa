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

"""Global pytest fixtures for Nile MCP Server tests."""

import httpx
import json
import os
import pytest
from nile_mcp_server.api import NileApiClient
from nile_mcp_server.common.context import ToolContext
from nile_mcp_server.credentials import CredentialResolver
from nile_mcp_server.executor import SqlExecutor
from nile_mcp_server.models import ConnectionDescriptor
from pydantic import SecretStr
from types import SimpleNamespace
from typing import Any, Dict, List, Optional, Tuple
from unittest.mock import AsyncMock, MagicMock


TEST_API_BASE_URL = 'https://api.test.thenile.dev'
TEST_WORKSPACE = 'acme'


@pytest.fixture(scope='session', autouse=True)
def tests_setup_and_teardown():
    """Mock environment variables for testing."""
    old_environ = dict(os.environ)
    os.environ.update(
        {
            'NILE_API_KEY': 'mock_api_key',  # pragma: allowlist secret
            'NILE_WORKSPACE_SLUG': TEST_WORKSPACE,
        }
    )

    yield
    os.environ.clear()
    os.environ.update(old_environ)


class FakeNileApi:
    """Stands in for the Nile control plane behind an httpx.MockTransport.

    Responses are keyed by method and path relative to the workspace, e.g.
    ``('GET', 'databases/db1')``. Every request is recorded.
    """

    def __init__(self):
        self.routes: Dict[Tuple[str, str], Tuple[int, Any]] = {}
        self.requests: List[httpx.Request] = []
        self.prefix = f'/workspaces/{TEST_WORKSPACE}/'

    def add(self, method: str, path: str, status: int = 200, body: Any = None) -> None:
        self.routes[(method, path)] = (status, body)

    def calls(self, method: Optional[str] = None) -> List[str]:
        return [
            f'{request.method} {request.url.path[len(self.prefix):]}'
            for request in self.requests
            if method is None or request.method == method
        ]

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path[len(self.prefix):]
        status, body = self.routes.get((request.method, path), (404, {'message': 'not found'}))
        if body is None:
            return httpx.Response(status)
        if isinstance(body, str):
            return httpx.Response(status, text=body)
        return httpx.Response(status, content=json.dumps(body).encode('utf-8'))

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)


@pytest.fixture
def fake_api():
    """A fresh fake control plane."""
    return FakeNileApi()


@pytest.fixture
def api_client(fake_api):
    """NileApiClient wired to the fake control plane."""
    return NileApiClient(
        api_key='mock_api_key',  # pragma: allowlist secret
        workspace_slug=TEST_WORKSPACE,
        base_url=TEST_API_BASE_URL,
        transport=fake_api.transport(),
    )


@pytest.fixture
def sample_database() -> Dict[str, Any]:
    """A READY database as returned by the control plane."""
    return {
        'id': 'db-0001',
        'name': 'db1',
        'region': 'AWS_US_WEST_2',
        'status': 'READY',
        'apiHost': 'https://api.us-west-2.db.example.dev/v2/databases/db-0001',
        'dbHost': 'us-west-2.db.example.dev',
        'workspace': {'id': 'ws-1', 'slug': TEST_WORKSPACE},
    }


@pytest.fixture
def sample_credential() -> Dict[str, Any]:
    """A freshly created credential, secret included."""
    return {
        'id': 'cred-123',
        'username': 'cred-123',
        'password': 'pw-xyz',  # pragma: allowlist secret
        'created': '2025-01-01T00:00:00Z',
    }


def make_statement(
    columns: List[str], rows: List[Dict[str, Any]], status: Optional[str] = None
) -> MagicMock:
    """Build a prepared statement double with asyncpg's interface."""
    statement = MagicMock()
    statement.fetch = AsyncMock(return_value=rows)
    statement.get_attributes.return_value = tuple(
        SimpleNamespace(name=name, type=SimpleNamespace(oid=25)) for name in columns
    )
    statement.get_statusmsg.return_value = (
        status if status is not None else f'SELECT {len(rows)}'
    )
    return statement


def make_connection(statement: Optional[MagicMock] = None, error: Exception = None) -> MagicMock:
    """Build a connection double whose prepare() yields the statement or raises."""
    connection = MagicMock()
    if error is not None:
        connection.prepare = AsyncMock(side_effect=error)
    else:
        connection.prepare = AsyncMock(return_value=statement)
    connection.close = AsyncMock()
    return connection


@pytest.fixture
def descriptor() -> ConnectionDescriptor:
    """A resolved descriptor for db1."""
    return ConnectionDescriptor(
        host='us-west-2.db.example.dev',
        database='db1',
        user='cred-123',
        secret=SecretStr('pw-xyz'),
    )


@pytest.fixture
def mock_resolver(descriptor):
    """A resolver that always returns the db1 descriptor."""
    resolver = MagicMock(spec=CredentialResolver)
    resolver.resolve = AsyncMock(return_value=descriptor)
    return resolver


@pytest.fixture
def mock_executor():
    """An executor double; set execute.return_value or side_effect per test."""
    executor = MagicMock(spec=SqlExecutor)
    executor.execute = AsyncMock()
    return executor


@pytest.fixture
def tool_context(api_client, mock_resolver, mock_executor):
    """Tool context over the fake control plane with doubles for SQL."""
    return ToolContext(api=api_client, resolver=mock_resolver, executor=mock_executor)


@pytest.fixture
def statement_factory():
    """Factory for prepared statement doubles."""
    return make_statement


@pytest.fixture
def connection_factory():
    """Factory for connection doubles."""
    return make_connection
