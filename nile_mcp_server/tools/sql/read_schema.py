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

"""Tool to read the column layout of tables in a Nile database."""

from ...common.context import ToolContext
from ...common.decorator import handle_exceptions
from ...common.utils import text_result
from ...constants import FAILED_READ_SCHEMA
from ...exceptions import ToolError
from ...models import ToolArguments
from ...renderer import render
from mcp.types import CallToolResult
from pydantic import Field
from typing import Optional


READ_SCHEMA_TOOL_DESCRIPTION = """Reads the schema of the tables in a Nile database.

<use_case>
Use this tool before writing SQL to discover tables, their columns, data types
and defaults. Pass tableName to restrict the output to one table.
</use_case>
"""

SCHEMA_NAME = 'public'

SCHEMA_COLUMNS = 'table_name, column_name, data_type, is_nullable, column_default'

ALL_TABLES_QUERY = (
    f'SELECT {SCHEMA_COLUMNS} FROM information_schema.columns '
    'WHERE table_schema = $1 ORDER BY table_name, ordinal_position'
)

ONE_TABLE_QUERY = (
    f'SELECT {SCHEMA_COLUMNS} FROM information_schema.columns '
    'WHERE table_schema = $1 AND table_name = $2 ORDER BY ordinal_position'
)


class ReadSchemaArgs(ToolArguments):
    """Arguments of read-schema."""

    database_name: str = Field(
        alias='databaseName', description='Name of the database to read the schema of'
    )
    table_name: Optional[str] = Field(
        default=None, alias='tableName', description='Only describe this table'
    )
    connection_string: Optional[str] = Field(
        default=None,
        alias='connectionString',
        description='Connection string to use instead of creating a credential',
    )


@handle_exceptions(prefix=FAILED_READ_SCHEMA)
async def read_schema(context: ToolContext, args: ReadSchemaArgs) -> CallToolResult:
    if args.table_name:
        query, params = ONE_TABLE_QUERY, (SCHEMA_NAME, args.table_name)
    else:
        query, params = ALL_TABLES_QUERY, (SCHEMA_NAME,)

    result = await context.executor.execute(
        args.database_name, query, connection_string=args.connection_string, params=params
    )
    if args.table_name and not result.rows:
        raise ToolError(f'Table "{args.table_name}" not found in schema {SCHEMA_NAME}')
    return text_result(render(result))
