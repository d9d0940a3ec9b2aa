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

"""Tools for Nile credential operations."""

from .list_credentials import (
    LIST_CREDENTIALS_TOOL_DESCRIPTION,
    ListCredentialsArgs,
    list_credentials,
)
from .create_credential import (
    CREATE_CREDENTIAL_TOOL_DESCRIPTION,
    CreateCredentialArgs,
    create_credential,
)
from .get_connection_string import (
    GET_CONNECTION_STRING_TOOL_DESCRIPTION,
    GetConnectionStringArgs,
    get_connection_string,
)

__all__ = [
    'LIST_CREDENTIALS_TOOL_DESCRIPTION',
    'ListCredentialsArgs',
    'list_credentials',
    'CREATE_CREDENTIAL_TOOL_DESCRIPTION',
    'CreateCredentialArgs',
    'create_credential',
    'GET_CONNECTION_STRING_TOOL_DESCRIPTION',
    'GetConnectionStringArgs',
    'get_connection_string',
]
