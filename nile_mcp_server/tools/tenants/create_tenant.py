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

"""Tool to create a tenant in a Nile database."""

from ...common.context import ToolContext
from ...common.decorator import handle_exceptions
from ...common.utils import text_result
from ...constants import FAILED_CREATE_TENANT
from ...exceptions import ToolError
from ...models import ToolArguments
from ...renderer import format_value
from loguru import logger
from mcp.types import CallToolResult
from pydantic import Field


CREATE_TENANT_TOOL_DESCRIPTION = """Creates a new tenant in a Nile database.

## Response structure
- `ID`: identifier generated for the tenant
- `Name`, `Created` and `Updated` of the new tenant
"""

INSERT_TENANT_QUERY = 'INSERT INTO tenants (name) VALUES ($1) RETURNING id, name, created, updated'


class CreateTenantArgs(ToolArguments):
    """Arguments of create-tenant."""

    database_name: str = Field(
        alias='databaseName', description='Name of the database to create tenant in'
    )
    name: str = Field(description='Name of the tenant')


@handle_exceptions(prefix=FAILED_CREATE_TENANT)
async def create_tenant(context: ToolContext, args: CreateTenantArgs) -> CallToolResult:
    result = await context.executor.execute(
        args.database_name, INSERT_TENANT_QUERY, params=(args.name,)
    )
    if not result.rows:
        raise ToolError('the insert returned no row')

    tenant = result.records()[0]
    logger.success(f'Created tenant {tenant.get("id")} in database {args.database_name}')
    return text_result(
        'Tenant created successfully:\n'
        f'ID: {format_value(tenant.get("id"))}\n'
        f'Name: {format_value(tenant.get("name"))}\n'
        f'Created: {format_value(tenant.get("created"))}\n'
        f'Updated: {format_value(tenant.get("updated"))}'
    )
