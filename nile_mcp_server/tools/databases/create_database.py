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

"""Tool to create a Nile database."""

from ...common.context import ToolContext
from ...common.decorator import handle_exceptions
from ...common.utils import text_result
from ...constants import FAILED_CREATE_DATABASE, SUCCESS_CREATED_DATABASE
from ...models import Region, ToolArguments
from loguru import logger
from mcp.types import CallToolResult
from pydantic import Field


CREATE_DATABASE_TOOL_DESCRIPTION = """Creates a new Nile database.

<use_case>
Use this tool to provision a new Postgres database in the current Nile workspace.
</use_case>

<important_notes>
1. Database names must be unique within the workspace
2. A new database starts in a provisioning state and cannot accept SQL until it is READY
3. Use list-regions to see the regions a database can be created in
</important_notes>
"""


class CreateDatabaseArgs(ToolArguments):
    """Arguments of create-database."""

    name: str = Field(description='Name of the database')
    region: Region = Field(description='Region where the database should be created')


@handle_exceptions(prefix=FAILED_CREATE_DATABASE)
async def create_database(context: ToolContext, args: CreateDatabaseArgs) -> CallToolResult:
    """Create a database and report its id, region and status."""
    logger.info(f'Creating database {args.name} in {args.region.value}')
    database = await context.api.create_database(args.name, args.region)
    logger.success(f'Created database {database.name} ({database.id})')
    return text_result(
        SUCCESS_CREATED_DATABASE.format(
            name=database.name,
            id=database.id,
            region=database.region.value,
            status=database.status.value if database.status else 'UNKNOWN',
        )
    )
