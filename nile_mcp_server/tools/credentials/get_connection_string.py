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

"""Tool to build a connection string for a Nile database."""

from ...common.context import ToolContext
from ...common.decorator import handle_exceptions
from ...common.utils import text_result
from ...constants import FAILED_CONNECTION_STRING, SECRET_WARNING
from ...models import ToolArguments
from mcp.types import CallToolResult
from pydantic import Field


GET_CONNECTION_STRING_TOOL_DESCRIPTION = """Gets a PostgreSQL connection string for a database.

<use_case>
Use this tool to obtain a postgres:// URL for connecting to a database from
another client. A new credential is created on every call.
</use_case>

<important_notes>
1. The database must be READY
2. The connection string embeds a password that will not be shown again
</important_notes>
"""


class GetConnectionStringArgs(ToolArguments):
    """Arguments of get-connection-string."""

    database_name: str = Field(
        alias='databaseName', description='Name of the database to get connection string for'
    )


@handle_exceptions(prefix=FAILED_CONNECTION_STRING)
async def get_connection_string(
    context: ToolContext, args: GetConnectionStringArgs
) -> CallToolResult:
    descriptor = await context.resolver.resolve(args.database_name)
    return text_result(
        f'Connection string:\n{descriptor.to_url()}\n\n'
        + SECRET_WARNING.format('connection string')
    )
