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

"""Tools for Nile database operations."""

from .create_database import (
    CREATE_DATABASE_TOOL_DESCRIPTION,
    CreateDatabaseArgs,
    create_database,
)
from .list_databases import LIST_DATABASES_TOOL_DESCRIPTION, ListDatabasesArgs, list_databases
from .get_database import GET_DATABASE_TOOL_DESCRIPTION, GetDatabaseArgs, get_database
from .delete_database import (
    DELETE_DATABASE_TOOL_DESCRIPTION,
    DeleteDatabaseArgs,
    delete_database,
)

__all__ = [
    'CREATE_DATABASE_TOOL_DESCRIPTION',
    'CreateDatabaseArgs',
    'create_database',
    'LIST_DATABASES_TOOL_DESCRIPTION',
    'ListDatabasesArgs',
    'list_databases',
    'GET_DATABASE_TOOL_DESCRIPTION',
    'GetDatabaseArgs',
    'get_database',
    'DELETE_DATABASE_TOOL_DESCRIPTION',
    'DeleteDatabaseArgs',
    'delete_database',
]
