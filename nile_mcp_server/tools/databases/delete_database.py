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

"""Tool to delete a Nile database."""

from ...common.context import ToolContext
from ...common.decorator import handle_exceptions
from ...common.utils import text_result
from ...constants import FAILED_DELETE_DATABASE, SUCCESS_DELETED_DATABASE
from ...models import ToolArguments
from loguru import logger
from mcp.types import CallToolResult
from pydantic import Field


DELETE_DATABASE_TOOL_DESCRIPTION = """Deletes a database.

<important_notes>
1. This is a destructive operation that permanently deletes the database and its data
2. The operation cannot be undone
</important_notes>
"""


class DeleteDatabaseArgs(ToolArguments):
    """Arguments of delete-database."""

    name: str = Field(description='Name of the database to delete')


@handle_exceptions(prefix=FAILED_DELETE_DATABASE)
async def delete_database(context: ToolContext, args: DeleteDatabaseArgs) -> CallToolResult:
    logger.warning(f'Deleting database {args.name}')
    await context.api.delete_database(args.name)
    return text_result(SUCCESS_DELETED_DATABASE.format(args.name))
