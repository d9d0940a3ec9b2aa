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

"""Tool to delete a tenant from a Nile database."""

from ...common.context import ToolContext
from ...common.decorator import handle_exceptions
from ...common.utils import text_result
from ...constants import FAILED_DELETE_TENANT, SUCCESS_DELETED_TENANT
from ...exceptions import ToolError
from ...models import ToolArguments
from loguru import logger
from mcp.types import CallToolResult
from pydantic import Field


DELETE_TENANT_TOOL_DESCRIPTION = """Deletes a tenant from a Nile database.

<important_notes>
1. The tenant row is removed permanently
2. Deleting an unknown tenant id is reported as an error
</important_notes>
"""

DELETE_TENANT_QUERY = 'DELETE FROM tenants WHERE id = $1 RETURNING id, name'


class DeleteTenantArgs(ToolArguments):
    """Arguments of delete-tenant."""

    database_name: str = Field(alias='databaseName', description='Name of the database')
    tenant_id: str = Field(alias='tenantId', description='ID of the tenant to delete')


@handle_exceptions(prefix=FAILED_DELETE_TENANT)
async def delete_tenant(context: ToolContext, args: DeleteTenantArgs) -> CallToolResult:
    result = await context.executor.execute(
        args.database_name, DELETE_TENANT_QUERY, params=(args.tenant_id,)
    )
    if not result.rows:
        raise ToolError(f'Tenant with ID {args.tenant_id} not found')

    tenant = result.records()[0]
    logger.warning(f'Deleted tenant {tenant.get("id")} from database {args.database_name}')
    return text_result(SUCCESS_DELETED_TENANT.format(name=tenant.get('name'), id=tenant.get('id')))
