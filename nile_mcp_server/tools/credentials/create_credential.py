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

"""Tool to create a credential for a Nile database."""

from ...common.context import ToolContext
from ...common.decorator import handle_exceptions
from ...common.utils import text_result
from ...constants import ERROR_MISSING_SECRET, FAILED_CREATE_CREDENTIAL, SECRET_WARNING
from ...exceptions import CredentialError
from ...models import ToolArguments
from mcp.types import CallToolResult
from pydantic import Field


CREATE_CREDENTIAL_TOOL_DESCRIPTION = """Creates a new credential for a database.

<important_notes>
1. The response contains the credential's password
2. The password is shown only once and cannot be retrieved again
</important_notes>
"""


class CreateCredentialArgs(ToolArguments):
    """Arguments of create-credential."""

    database_name: str = Field(
        alias='databaseName', description='Name of the database to create a credential for'
    )


@handle_exceptions(prefix=FAILED_CREATE_CREDENTIAL)
async def create_credential(context: ToolContext, args: CreateCredentialArgs) -> CallToolResult:
    """Mint a credential and reveal its secret, this one time only."""
    credential = await context.api.create_credential(args.database_name)
    if credential.secret is None:
        raise CredentialError(ERROR_MISSING_SECRET)

    return text_result(
        f'Credential created for database "{args.database_name}":\n'
        f'ID: {credential.id}\n'
        f'Username: {credential.username or credential.id}\n'
        f'Password: {credential.secret.get_secret_value()}\n\n'
        + SECRET_WARNING.format('credential')
    )
