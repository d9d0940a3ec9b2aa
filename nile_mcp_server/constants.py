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

"""Constants for Nile MCP Server."""

from .models import Region


# Error Messages
ERROR_UNKNOWN_TOOL = "Unknown tool: '{}'"
ERROR_INVALID_ARGUMENTS = "Invalid arguments for tool '{}': {}"
ERROR_MISSING_SECRET = 'missing secret'
ERROR_INVALID_CONNECTION_STRING = 'Invalid connection string: {}'
ERROR_NO_SESSION = 'No active SSE connection. Please establish an SSE connection first at {}'
ERROR_INVALID_SESSION = 'Invalid session ID'
ERROR_INVALID_BODY = 'Request body must be a JSON object'

# Error prefixes used when rendering failed operations
FAILED_CREATE_DATABASE = 'Failed to create database'
FAILED_LIST_DATABASES = 'Failed to list databases'
FAILED_GET_DATABASE = 'Failed to get database details'
FAILED_DELETE_DATABASE = 'Failed to delete database'
FAILED_LIST_CREDENTIALS = 'Failed to list credentials'
FAILED_CREATE_CREDENTIAL = 'Failed to create credentials'
FAILED_CONNECTION_STRING = 'Failed to get connection string'
FAILED_READ_SCHEMA = 'Failed to read schema'
FAILED_CREATE_TENANT = 'Failed to create tenant'
FAILED_DELETE_TENANT = 'Failed to delete tenant'
FAILED_LIST_TENANTS = 'Failed to list tenants'

# Success Messages
SUCCESS_CREATED_DATABASE = (
    'Database "{name}" created successfully with ID {id} in region {region}. Status: {status}'
)
SUCCESS_DELETED_DATABASE = 'Database "{}" has been successfully deleted.'
SUCCESS_DELETED_TENANT = 'Tenant "{name}" (ID: {id}) has been successfully deleted.'
SECRET_WARNING = 'IMPORTANT: This {} contains credentials that will not be shown again.'

# Control plane
DEFAULT_API_BASE_URL = 'https://global.thenile.dev'
DEFAULT_REQUEST_TIMEOUT = 30.0

# Database endpoints
DEFAULT_DB_PORT = 5432
DEFAULT_CONNECT_TIMEOUT = 10.0
REGION_HOSTS = {
    Region.AWS_US_WEST_2: 'us-west-2.db.thenile.dev',
    Region.AWS_EU_CENTRAL_1: 'eu-central-1.db.thenile.dev',
}

# Transports
SERVER_MODE_STDIO = 'stdio'
SERVER_MODE_SSE = 'sse'
DEFAULT_SERVER_HOST = '0.0.0.0'
DEFAULT_SERVER_PORT = 3000
DEFAULT_HEARTBEAT_INTERVAL = 30.0
SSE_STREAM_PATH = '/sse'
SSE_MESSAGE_PATH = '/messages'
