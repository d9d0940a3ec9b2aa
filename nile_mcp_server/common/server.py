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

"""Common MCP server configuration."""

from .. import __version__


SERVER_NAME = 'nile-mcp-server'

SERVER_VERSION = __version__

SERVER_INSTRUCTIONS = """
This server provides access to the Nile managed Postgres platform.

Key capabilities:
- Database Management: Create, list, inspect and delete Nile databases
- Credential Management: List credentials, mint new ones and build connection strings
- Tenant Management: Create, list and delete tenants of a database
- Data Access: Run SQL statements and read table schemas

New credentials and connection strings contain secrets that are shown only once.
A database must be READY before SQL can be executed against it.
"""
