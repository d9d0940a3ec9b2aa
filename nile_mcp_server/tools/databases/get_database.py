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

"""Tool to get the details of a Nile database."""

from ...common.context import ToolContext
from ...common.decorator import handle_exceptions
from ...common.utils import text_result
from ...constants import FAILED_GET_DATABASE
from ...models import DatabaseRecord, ToolArguments
from mcp.types import CallToolResult
from pydantic import Field


GET_DATABASE_TOOL_DESCRIPTION = """Gets details of a specific database.

## Response structure
- `Name`, `ID` and `Region` of the database
- `Status`: provisioning status; SQL can only run once it is READY
- `API Host` and `DB Host`: endpoints of the database, when assigned
"""

NOT_AVAILABLE = 'Not available'


class GetDatabaseArgs(ToolArguments):
    """Arguments of get-database."""

    name: str = Field(description='Name of the database to get details for')


def format_database_details(database: DatabaseRecord) -> str:
    """Render every known attribute of a database, one per line."""
    return (
        'Database Details:\n'
        f'Name: {database.name}\n'
        f'ID: {database.id}\n'
        f'Region: {database.region.value}\n'
        f'Status: {database.status.value if database.status else "UNKNOWN"}\n'
        f'API Host: {database.api_host or NOT_AVAILABLE}\n'
        f'DB Host: {database.db_host or NOT_AVAILABLE}'
    )


@handle_exceptions(prefix=FAILED_GET_DATABASE)
async def get_database(context: ToolContext, args: GetDatabaseArgs) -> CallToolResult:
    database = await context.api.get_database(args.name)
    return text_result(format_database_details(database))
