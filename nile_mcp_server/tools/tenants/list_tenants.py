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

"""Tool to list the tenants of a Nile database."""

from ...common.context import ToolContext
from ...common.decorator import handle_exceptions
from ...common.utils import text_result
from ...constants import FAILED_LIST_TENANTS
from ...models import ToolArguments
from ...renderer import format_cell
from mcp.types import CallToolResult
from pydantic import Field


LIST_TENANTS_TOOL_DESCRIPTION = """Lists the tenants of a Nile database.

Deleted tenants are left out; the newest tenant is listed first.
"""

LIST_TENANTS_QUERY = (
    'SELECT id, name, created, updated FROM tenants '
    'WHERE deleted IS NULL ORDER BY created DESC'
)

TENANT_COLUMNS = (('ID', 'id'), ('Name', 'name'), ('Created', 'created'), ('Updated', 'updated'))


class ListTenantsArgs(ToolArguments):
    """Arguments of list-tenants."""

    database_name: str = Field(
        alias='databaseName', description='Name of the database to list tenants from'
    )


@handle_exceptions(prefix=FAILED_LIST_TENANTS)
async def list_tenants(context: ToolContext, args: ListTenantsArgs) -> CallToolResult:
    result = await context.executor.execute(args.database_name, LIST_TENANTS_QUERY)
    if not result.rows:
        return text_result('No tenants found')

    lines = [
        '| ' + ' | '.join(title for title, _ in TENANT_COLUMNS) + ' |',
        '|' + '|'.join('---' for _ in TENANT_COLUMNS) + '|',
    ]
    for tenant in result.records():
        lines.append(
            '| ' + ' | '.join(format_cell(tenant.get(key)) for _, key in TENANT_COLUMNS) + ' |'
        )
    lines.append('')
    lines.append(f'{len(result.rows)} tenants found.')
    return text_result('\n'.join(lines))
