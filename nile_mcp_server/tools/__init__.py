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

"""Tool registration for the Nile MCP Server."""

from ..common.context import ToolContext
from ..dispatcher import Dispatcher
from .credentials import (
    CREATE_CREDENTIAL_TOOL_DESCRIPTION,
    GET_CONNECTION_STRING_TOOL_DESCRIPTION,
    LIST_CREDENTIALS_TOOL_DESCRIPTION,
    CreateCredentialArgs,
    GetConnectionStringArgs,
    ListCredentialsArgs,
    create_credential,
    get_connection_string,
    list_credentials,
)
from .databases import (
    CREATE_DATABASE_TOOL_DESCRIPTION,
    DELETE_DATABASE_TOOL_DESCRIPTION,
    GET_DATABASE_TOOL_DESCRIPTION,
    LIST_DATABASES_TOOL_DESCRIPTION,
    CreateDatabaseArgs,
    DeleteDatabaseArgs,
    GetDatabaseArgs,
    ListDatabasesArgs,
    create_database,
    delete_database,
    get_database,
    list_databases,
)
from .regions import LIST_REGIONS_TOOL_DESCRIPTION, ListRegionsArgs, list_regions
from .sql import (
    EXECUTE_SQL_TOOL_DESCRIPTION,
    READ_SCHEMA_TOOL_DESCRIPTION,
    ExecuteSqlArgs,
    ReadSchemaArgs,
    execute_sql,
    read_schema,
)
from .tenants import (
    CREATE_TENANT_TOOL_DESCRIPTION,
    DELETE_TENANT_TOOL_DESCRIPTION,
    LIST_TENANTS_TOOL_DESCRIPTION,
    CreateTenantArgs,
    DeleteTenantArgs,
    ListTenantsArgs,
    create_tenant,
    delete_tenant,
    list_tenants,
)
from functools import partial


TOOLS = [
    # Database management
    ('create-database', CREATE_DATABASE_TOOL_DESCRIPTION, CreateDatabaseArgs, create_database),
    ('list-databases', LIST_DATABASES_TOOL_DESCRIPTION, ListDatabasesArgs, list_databases),
    ('get-database', GET_DATABASE_TOOL_DESCRIPTION, GetDatabaseArgs, get_database),
    ('delete-database', DELETE_DATABASE_TOOL_DESCRIPTION, DeleteDatabaseArgs, delete_database),
    # Credential management
    ('list-credentials', LIST_CREDENTIALS_TOOL_DESCRIPTION, ListCredentialsArgs, list_credentials),
    (
        'create-credential',
        CREATE_CREDENTIAL_TOOL_DESCRIPTION,
        CreateCredentialArgs,
        create_credential,
    ),
    (
        'get-connection-string',
        GET_CONNECTION_STRING_TOOL_DESCRIPTION,
        GetConnectionStringArgs,
        get_connection_string,
    ),
    # Regions
    ('list-regions', LIST_REGIONS_TOOL_DESCRIPTION, ListRegionsArgs, list_regions),
    # SQL
    ('execute-sql', EXECUTE_SQL_TOOL_DESCRIPTION, ExecuteSqlArgs, execute_sql),
    ('read-schema', READ_SCHEMA_TOOL_DESCRIPTION, ReadSchemaArgs, read_schema),
    # Tenants
    ('create-tenant', CREATE_TENANT_TOOL_DESCRIPTION, CreateTenantArgs, create_tenant),
    ('delete-tenant', DELETE_TENANT_TOOL_DESCRIPTION, DeleteTenantArgs, delete_tenant),
    ('list-tenants', LIST_TENANTS_TOOL_DESCRIPTION, ListTenantsArgs, list_tenants),
]


def register_tools(dispatcher: Dispatcher, context: ToolContext) -> None:
    """Register every tool of the server, bound to the given context.

    Args:
        dispatcher: The dispatcher to register with
        context: Collaborators the handlers call out to
    """
    for name, description, argument_model, handler in TOOLS:
        dispatcher.register(name, description, argument_model, partial(handler, context))
