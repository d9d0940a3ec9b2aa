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

"""Tool to execute SQL against a Nile database."""

from ...common.context import ToolContext
from ...common.decorator import handle_exceptions
from ...common.utils import text_result
from ...models import ToolArguments
from ...renderer import render
from loguru import logger
from mcp.types import CallToolResult
from pydantic import Field
from typing import Optional


EXECUTE_SQL_TOOL_DESCRIPTION = """Executes a SQL query on a Nile database.

<use_case>
Use this tool to run a single SQL statement against a database and read its
result as a table.
</use_case>

<important_notes>
1. Exactly one statement is executed per call
2. Unless connectionString is given, a new credential is created for every call
3. The database must be READY
4. Errors reported by Postgres are returned with their detail and hint
</important_notes>

## Response structure
A table with one column per result field, followed by `<n> rows returned.`
"""


class ExecuteSqlArgs(ToolArguments):
    """Arguments of execute-sql."""

    database_name: str = Field(alias='databaseName', description='Name of the database to query')
    query: str = Field(description='SQL query to execute')
    connection_string: Optional[str] = Field(
        default=None,
        alias='connectionString',
        description='Connection string to use for the query',
    )


@handle_exceptions
async def execute_sql(context: ToolContext, args: ExecuteSqlArgs) -> CallToolResult:
    """Run the statement and render its result table."""
    logger.info(f'Executing SQL query on database {args.database_name}')
    result = await context.executor.execute(
        args.database_name, args.query, connection_string=args.connection_string
    )
    return text_result(render(result))
