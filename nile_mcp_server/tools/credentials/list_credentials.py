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

"""Tool to list the credentials of a Nile database."""

from ...common.context import ToolContext
from ...common.decorator import handle_exceptions
from ...common.utils import text_result
from ...constants import FAILED_LIST_CREDENTIALS
from ...models import ToolArguments
from mcp.types import CallToolResult
from pydantic import Field


LIST_CREDENTIALS_TOOL_DESCRIPTION = """Lists all credentials for a database.

Secrets are never returned by this tool; they are only shown once, when a
credential is created.
"""


class ListCredentialsArgs(ToolArguments):
    """Arguments of list-credentials."""

    database_name: str = Field(
        alias='databaseName', description='Name of the database to list credentials for'
    )


@handle_exceptions(prefix=FAILED_LIST_CREDENTIALS)
async def list_credentials(context: ToolContext, args: ListCredentialsArgs) -> CallToolResult:
    credentials = await context.api.list_credentials(args.database_name)
    if not credentials:
        return text_result(f'No credentials found for database "{args.database_name}"')

    lines = [f'Found {len(credentials)} credentials for database "{args.database_name}":', '']
    for credential in credentials:
        created = f' (created: {credential.created_at})' if credential.created_at else ''
        lines.append(f'- {credential.id}{created}')
    return text_result('\n'.join(lines))
