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

"""Custom exceptions for the Nile MCP Server."""

from typing import Optional


class NileMCPException(Exception):
    """Base exception for Nile MCP Server."""

    pass


class ConfigurationError(NileMCPException):
    """Exception raised when the server settings are missing or invalid."""

    pass


class ValidationError(NileMCPException):
    """Exception raised when a tool call is rejected before its handler runs.

    Covers unknown tool names and arguments that do not satisfy the tool's
    argument schema. Surfaced to the peer as a protocol error, never as a
    tool result.
    """

    def __init__(self, tool_name: str, message: str):
        """Initialize the ValidationError.

        Args:
            tool_name: The name of the tool that was called
            message: Why the call was rejected
        """
        self.tool_name = tool_name
        super().__init__(message)


class DispatcherClosedError(NileMCPException):
    """Exception raised when a tool is called after the dispatcher was closed."""

    def __init__(self, tool_name: str):
        """Initialize the DispatcherClosedError.

        Args:
            tool_name: The name of the tool that was called
        """
        self.tool_name = tool_name
        super().__init__(f"Cannot call tool '{tool_name}': the server is shutting down.")


class ToolError(NileMCPException):
    """Base class for domain failures that are reported as error results."""

    kind = 'Operation failed'

    def __init__(self, message: str):
        """Initialize the ToolError.

        Args:
            message: Human readable description of the failure
        """
        self.message = message
        super().__init__(message)


class UpstreamError(ToolError):
    """Exception raised when the Nile control-plane API does not succeed."""

    kind = 'Nile API error'

    def __init__(self, message: str, status: Optional[int] = None, error: Optional[str] = None):
        """Initialize the UpstreamError.

        Args:
            message: The message returned by the platform, verbatim
            status: HTTP status code, when a response was received
            error: The platform's short error code, when present
        """
        self.status = status
        self.error = error
        super().__init__(message)


class DatabaseNotReadyError(ToolError):
    """Exception raised when a database has no host to connect to yet."""

    kind = 'Database not ready'

    def __init__(self, database: str, status: Optional[str] = None):
        """Initialize the DatabaseNotReadyError.

        Args:
            database: Name of the database
            status: The provisioning status reported by the platform
        """
        self.database = database
        self.status = status
        super().__init__(
            f'Database "{database}" is not ready for connections yet '
            f'(status: {status or "unknown"}). Try again once it is READY.'
        )


class CredentialError(ToolError):
    """Exception raised when a usable credential cannot be produced."""

    kind = 'Credential error'


class DatabaseConnectionError(ToolError):
    """Exception raised when the database connection cannot be established."""

    kind = 'Connection failed'


class QueryError(ToolError):
    """Exception raised when the database rejects or fails a statement."""

    kind = 'Query execution failed'

    def __init__(
        self,
        message: str,
        detail: Optional[str] = None,
        hint: Optional[str] = None,
        position: Optional[str] = None,
        code: Optional[str] = None,
    ):
        """Initialize the QueryError.

        Args:
            message: Primary error message from the engine
            detail: Optional secondary detail
            hint: Optional suggestion on how to fix the statement
            position: Optional cursor position of the error in the statement
            code: Optional SQLSTATE code
        """
        self.detail = detail
        self.hint = hint
        self.position = position
        self.code = code
        super().__init__(message)
