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

"""Tool to list the databases of the workspace."""

from ...common.context import ToolContext
from ...common.decorator import handle_exceptions
from ...common.utils import text_result
from ...constants import FAILED_LIST_DATABASES
from ...models import DatabaseRecord, ToolArguments
from mcp.types import CallToolResult


LIST_DATABASES_TOOL_DESCRIPTION = 'Lists all databases in the workspace'


class ListDatabasesArgs(ToolArguments):
    """list-databases takes no arguments."""


def format_database_summary(database: DatabaseRecord) -> str:
    """One list entry: name and id, then region and status."""
    status = database.status.value if database.status else 'UNKNOWN'
    return (
        f'- {database.name} (ID: {database.id})\n'
        f'  Region: {database.region.value}\n'
        f'  Status: {status}'
    )


@handle_exceptions(prefix=FAILED_LIST_DATABASES)
async def list_databases(context: ToolContext, args: ListDatabasesArgs) -> CallToolResult:
    databases = await context.api.list_databases()
    text = f'Found {len(databases)} databases:\n\n' + '\n'.join(
        format_database_summary(database) for database in databases
    )
    return text_result(text.rstrip())
