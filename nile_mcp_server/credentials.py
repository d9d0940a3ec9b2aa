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

"""Resolution of connection descriptors for Nile databases."""

from .api import NileApiClient
from .constants import DEFAULT_DB_PORT, ERROR_MISSING_SECRET, REGION_HOSTS
from .exceptions import CredentialError, DatabaseNotReadyError
from .models import ConnectionDescriptor, DatabaseRecord, DatabaseStatus
from loguru import logger
from typing import Optional


class CredentialResolver:
    """Produces a ConnectionDescriptor for a named database.

    A fresh credential is minted on every resolution. The platform reveals a
    credential's secret only when it is created, so descriptors are never
    cached and never reused across calls.
    """

    def __init__(self, api: NileApiClient, log=logger):
        """Initialize the resolver.

        Args:
            api: Client for the Nile control plane
            log: Logger used for resolution events
        """
        self._api = api
        self._log = log.bind(component='credential_resolver')

    async def resolve(
        self, database_name: str, connection_string: Optional[str] = None
    ) -> ConnectionDescriptor:
        """Resolve a connection descriptor for a database.

        Args:
            database_name: Name of the database to connect to
            connection_string: Explicit ``postgres://`` URL; when given no
                upstream call is made

        Returns:
            A descriptor holding host, port, database, user and secret

        Raises:
            CredentialError: If the override is malformed or the minted
                credential carries no secret
            DatabaseNotReadyError: If the database has no host yet
            UpstreamError: If a control-plane call fails
        """
        if connection_string:
            descriptor = ConnectionDescriptor.from_url(connection_string)
            self._log.bind(operation='resolve', database=database_name).debug(
                f'Using supplied connection string for host {descriptor.host}'
            )
            return descriptor

        credential = await self._api.create_credential(database_name)
        if credential.secret is None:
            raise CredentialError(ERROR_MISSING_SECRET)

        database = await self._api.get_database(database_name)
        host = self.database_host(database)

        self._log.bind(operation='resolve', database=database_name).info(
            f'Resolved credential {credential.id} for {host}'
        )
        return ConnectionDescriptor(
            host=host,
            port=DEFAULT_DB_PORT,
            database=database_name,
            user=credential.id,
            secret=credential.secret,
        )

    @staticmethod
    def database_host(database: DatabaseRecord) -> str:
        """Return the host a database accepts connections on.

        Raises:
            DatabaseNotReadyError: If the record has no host and the database
                is not READY yet
        """
        if database.db_host:
            return database.db_host
        if database.status != DatabaseStatus.READY:
            status = database.status.value if database.status else None
            raise DatabaseNotReadyError(database.name, status)
        return REGION_HOSTS[database.region]
