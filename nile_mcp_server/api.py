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

"""Client for the Nile control-plane API."""

import httpx
import time
from .common.server import SERVER_NAME, SERVER_VERSION
from .constants import DEFAULT_API_BASE_URL, DEFAULT_REQUEST_TIMEOUT
from .exceptions import UpstreamError
from .models import Credential, DatabaseRecord, Region
from loguru import logger
from pydantic import ValidationError as PydanticValidationError
from typing import Any, Dict, List, Optional
from urllib.parse import quote


class NileApiClient:
    """Issues authenticated requests against the Nile control plane.

    No connection state is kept between calls: every request opens and closes
    its own HTTP client.
    """

    def __init__(
        self,
        api_key: str,
        workspace_slug: str,
        base_url: str = DEFAULT_API_BASE_URL,
        timeout: float = DEFAULT_REQUEST_TIMEOUT,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        log=logger,
    ):
        """Initialize the client.

        Args:
            api_key: Nile API key sent as a bearer token
            workspace_slug: Workspace all requests are scoped to
            base_url: Control-plane base URL
            timeout: Per-request timeout in seconds
            transport: Optional httpx transport, used to stub the API in tests
            log: Logger used for request events
        """
        self._api_key = api_key
        self._workspace_slug = workspace_slug
        self._base_url = base_url.rstrip('/')
        self._timeout = timeout
        self._transport = transport
        self._log = log.bind(component='nile_api')

    @property
    def workspace_slug(self) -> str:
        """The workspace this client is scoped to."""
        return self._workspace_slug

    def _url(self, *segments: str) -> str:
        path = '/'.join(quote(segment, safe='') for segment in segments)
        return f'{self._base_url}/workspaces/{quote(self._workspace_slug, safe="")}/{path}'

    async def _request(
        self, method: str, url: str, json_body: Optional[Dict[str, Any]] = None
    ) -> Any:
        """Send one request and return the decoded JSON body.

        Raises:
            UpstreamError: On a transport failure or a non-2xx response
        """
        headers = {
            'Authorization': f'Bearer {self._api_key}',
            'Accept': 'application/json',
            'User-Agent': f'{SERVER_NAME}/{SERVER_VERSION}',
        }
        start = time.perf_counter()
        try:
            async with httpx.AsyncClient(
                timeout=self._timeout, transport=self._transport
            ) as client:
                response = await client.request(method, url, headers=headers, json=json_body)
        except httpx.HTTPError as e:
            self._log.bind(operation=f'{method} {url}', outcome='transport_error').error(
                f'{method} {url} failed: {e}'
            )
            raise UpstreamError(f'Could not reach the Nile API: {e}') from e

        duration_ms = (time.perf_counter() - start) * 1000.0
        self._log.bind(
            operation=f'{method} {url}',
            status=response.status_code,
            duration_ms=round(duration_ms, 1),
        ).info(f'{method} {url} - Status: {response.status_code}')

        data = self._decode(response)
        if response.is_success:
            return data

        if isinstance(data, dict):
            message = data.get('message') or data.get('error') or response.reason_phrase
            raise UpstreamError(str(message), status=response.status_code, error=data.get('error'))
        raise UpstreamError(
            response.text or response.reason_phrase or f'HTTP {response.status_code}',
            status=response.status_code,
        )

    @staticmethod
    def _decode(response: httpx.Response) -> Any:
        if not response.content:
            return None
        try:
            return response.json()
        except ValueError:
            return None

    @staticmethod
    def _parse(model, data: Any, what: str):
        try:
            return model.model_validate(data)
        except PydanticValidationError as e:
            raise UpstreamError(f'Unexpected {what} payload from the Nile API: {e}') from e

    async def create_database(self, name: str, region: Region) -> DatabaseRecord:
        """Create a database in the workspace."""
        data = await self._request(
            'POST', self._url('databases'), {'databaseName': name, 'region': region.value}
        )
        return self._parse(DatabaseRecord, data, 'database')

    async def list_databases(self) -> List[DatabaseRecord]:
        """List all databases in the workspace."""
        data = await self._request('GET', self._url('databases'))
        return [self._parse(DatabaseRecord, item, 'database') for item in data or []]

    async def get_database(self, name: str) -> DatabaseRecord:
        """Fetch one database by name."""
        data = await self._request('GET', self._url('databases', name))
        return self._parse(DatabaseRecord, data, 'database')

    async def delete_database(self, name: str) -> None:
        """Delete a database by name."""
        await self._request('DELETE', self._url('databases', name))

    async def list_credentials(self, database_name: str) -> List[Credential]:
        """List the credentials of a database; secrets are never included."""
        data = await self._request('GET', self._url('databases', database_name, 'credentials'))
        return [self._parse(Credential, item, 'credential') for item in data or []]

    async def create_credential(self, database_name: str) -> Credential:
        """Mint a new credential for a database.

        The returned credential is the only place its secret is ever revealed.
        """
        data = await self._request('POST', self._url('databases', database_name, 'credentials'))
        credential = self._parse(Credential, data, 'credential')
        self._log.bind(operation='create_credential', database=database_name).info(
            f'Created credential {credential.id} for database {database_name}'
        )
        return credential
