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

"""Execution of single SQL statements against Nile databases."""

import asyncio
import asyncpg
import ssl
import time
from .constants import DEFAULT_CONNECT_TIMEOUT
from .credentials import CredentialResolver
from .exceptions import DatabaseConnectionError, QueryError
from .models import ConnectionDescriptor, FieldInfo, QueryResult
from enum import Enum
from loguru import logger
from typing import Any, Callable, Optional, Sequence


class ExecutionPhase(Enum):
    """Lifecycle phase of one statement execution."""

    IDLE = 'idle'
    RESOLVING_CREDENTIAL = 'resolving_credential'
    CONNECTING = 'connecting'
    EXECUTING = 'executing'
    CLOSING = 'closing'
    DONE = 'done'
    FAILED = 'failed'


class _Execution:
    """Tracks the phase of a single call and logs every transition."""

    def __init__(self, log, database_name: str):
        self.phase = ExecutionPhase.IDLE
        self._log = log
        self._database_name = database_name

    def advance(self, phase: ExecutionPhase) -> None:
        self._log.bind(
            operation='execute', database=self._database_name, phase=phase.value
        ).debug(f'{self.phase.value} -> {phase.value}')
        self.phase = phase


def build_ssl_context() -> ssl.SSLContext:
    """TLS context for Nile endpoints; the certificate chain is not verified."""
    context = ssl.create_default_context()
    context.check_hostname = False
    context.verify_mode = ssl.CERT_NONE
    return context


def parse_row_count(status: Optional[str]) -> Optional[int]:
    """Extract the affected row count from a command status such as ``INSERT 0 3``."""
    if not status:
        return None
    last = status.rsplit(' ', 1)[-1]
    return int(last) if last.isdigit() else None


class SqlExecutor:
    """Runs one statement per call on a short-lived connection.

    Phases of a call: IDLE, RESOLVING_CREDENTIAL, CONNECTING, EXECUTING,
    CLOSING, DONE. Any failure after IDLE ends in FAILED. Once a connection
    was opened it is closed exactly once, whatever the outcome.
    """

    def __init__(
        self,
        resolver: CredentialResolver,
        connect: Callable[..., Any] = asyncpg.connect,
        connect_timeout: float = DEFAULT_CONNECT_TIMEOUT,
        log=logger,
    ):
        """Initialize the executor.

        Args:
            resolver: Produces the connection descriptor for each call
            connect: Coroutine function opening a connection, asyncpg.connect
                by default
            connect_timeout: Seconds to wait for a connection
            log: Logger used for execution events
        """
        self._resolver = resolver
        self._connect = connect
        self._connect_timeout = connect_timeout
        self._log = log.bind(component='sql_executor')

    async def execute(
        self,
        database_name: str,
        query: str,
        connection_string: Optional[str] = None,
        params: Sequence[Any] = (),
    ) -> QueryResult:
        """Execute one statement and collect its result.

        Args:
            database_name: Name of the database to run against
            query: The SQL statement
            connection_string: Optional explicit connection string
            params: Positional parameters bound to ``$1``, ``$2``, ...

        Returns:
            The fields, rows and row count of the statement

        Raises:
            CredentialError: If no usable credential could be produced
            DatabaseNotReadyError: If the database has no host yet
            UpstreamError: If a control-plane call failed
            DatabaseConnectionError: If the connection could not be opened
            QueryError: If the database rejected or failed the statement
        """
        execution = _Execution(self._log, database_name)
        try:
            execution.advance(ExecutionPhase.RESOLVING_CREDENTIAL)
            descriptor = await self._resolver.resolve(database_name, connection_string)

            execution.advance(ExecutionPhase.CONNECTING)
            connection = await self._open(descriptor)
            try:
                execution.advance(ExecutionPhase.EXECUTING)
                result = await self._run(connection, database_name, query, params)
            finally:
                execution.advance(ExecutionPhase.CLOSING)
                # A cancelled call still finishes releasing its connection.
                await asyncio.shield(self._close(connection, database_name))
        except BaseException:
            execution.advance(ExecutionPhase.FAILED)
            raise

        execution.advance(ExecutionPhase.DONE)
        return result

    async def _open(self, descriptor: ConnectionDescriptor):
        try:
            return await self._connect(
                host=descriptor.host,
                port=descriptor.port,
                user=descriptor.user,
                password=descriptor.secret.get_secret_value(),
                database=descriptor.database,
                ssl=build_ssl_context(),
                timeout=self._connect_timeout,
            )
        except asyncio.TimeoutError as e:
            raise DatabaseConnectionError(
                f'Timed out connecting to {descriptor.host}:{descriptor.port} '
                f'after {self._connect_timeout:g}s'
            ) from e
        except (OSError, asyncpg.PostgresError, asyncpg.InterfaceError) as e:
            raise DatabaseConnectionError(
                f'Could not connect to {descriptor.host}:{descriptor.port}: {e}'
            ) from e

    async def _run(self, connection, database_name: str, query: str, params: Sequence[Any]):
        start = time.perf_counter()
        try:
            statement = await connection.prepare(query)
            records = await statement.fetch(*params)
        except asyncpg.PostgresError as e:
            self._log.bind(
                operation='execute',
                database=database_name,
                outcome='query_error',
                duration_ms=round((time.perf_counter() - start) * 1000.0, 1),
            ).warning(f'Statement failed: {e}')
            position = getattr(e, 'position', None)
            raise QueryError(
                getattr(e, 'message', None) or str(e),
                detail=getattr(e, 'detail', None),
                hint=getattr(e, 'hint', None),
                position=str(position) if position else None,
                code=getattr(e, 'sqlstate', None),
            ) from e
        except ValueError as e:
            raise QueryError(str(e)) from e
        except (OSError, asyncpg.InterfaceError) as e:
            raise DatabaseConnectionError(f'Connection lost while executing: {e}') from e

        fields = [
            FieldInfo(name=attribute.name, type_id=attribute.type.oid)
            for attribute in statement.get_attributes()
        ]
        rows = [list(record.values()) for record in records]
        row_count = parse_row_count(statement.get_statusmsg())

        self._log.bind(
            operation='execute',
            database=database_name,
            outcome='ok',
            duration_ms=round((time.perf_counter() - start) * 1000.0, 1),
        ).info(f'Statement returned {len(rows)} rows')
        return QueryResult(
            fields=fields,
            rows=rows,
            row_count=row_count if row_count is not None else len(rows),
        )

    async def _close(self, connection, database_name: str) -> None:
        try:
            await connection.close()
        except (OSError, asyncpg.PostgresError, asyncpg.InterfaceError) as e:
            self._log.bind(operation='close', database=database_name).warning(
                f'Error closing connection: {e}'
            )
