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

"""Tools for Nile tenant operations."""

from .create_tenant import CREATE_TENANT_TOOL_DESCRIPTION, CreateTenantArgs, create_tenant
from .delete_tenant import DELETE_TENANT_TOOL_DESCRIPTION, DeleteTenantArgs, delete_tenant
from .list_tenants import LIST_TENANTS_TOOL_DESCRIPTION, ListTenantsArgs, list_tenants

__all__ = [
    'CREATE_TENANT_TOOL_DESCRIPTION',
    'CreateTenantArgs',
    'create_tenant',
    'DELETE_TENANT_TOOL_DESCRIPTION',
    'DeleteTenantArgs',
    'delete_tenant',
    'LIST_TENANTS_TOOL_DESCRIPTION',
    'ListTenantsArgs',
    'list_tenants',
]
