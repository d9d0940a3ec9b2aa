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

"""JSON-RPC method routing shared by every transport."""

import json
from .common.server import SERVER_INSTRUCTIONS, SERVER_NAME, SERVER_VERSION
from .dispatcher import Dispatcher
from .exceptions import DispatcherClosedError, ValidationError
from loguru import logger
from mcp.types import (
    INTERNAL_ERROR,
    INVALID_PARAMS,
    INVALID_REQUEST,
    LATEST_PROTOCOL_VERSION,
    METHOD_NOT_FOUND,
    PARSE_ERROR,
)
from typing import Any, Dict, Optional


JSONRPC_VERSION = '2.0'


def error_response(request_id: Any, code: int, message: str) -> Dict[str, Any]:
    """Build a JSON-RPC error envelope."""
    return {
        'jsonrpc': JSONRPC_VERSION,
        'id': request_id,
        'error': {'code': code, 'message': message},
    }


def success_response(request_id: Any, result: Dict[str, Any]) -> Dict[str, Any]:
    """Build a JSON-RPC result envelope."""
    return {'jsonrpc': JSONRPC_VERSION, 'id': request_id, 'result': result}


class McpProtocol:
    """Answers MCP requests on behalf of one Dispatcher.

    Transports hand every inbound message to ``handle`` (or ``handle_text``
    for raw frames) and write back whatever it returns. ``None`` means the
    message needs no reply.
    """

    def __init__(self, dispatcher: Dispatcher, log=logger):
        """Initialize the protocol handler.

        Args:
            dispatcher: The dispatcher tool calls are routed to
            log: Logger used for protocol events
        """
        self._dispatcher = dispatcher
        self._log = log.bind(component='protocol')

    @property
    def dispatcher(self) -> Dispatcher:
        """The dispatcher tool calls are routed to."""
        return self._dispatcher

    async def handle_text(self, text: str) -> Optional[Dict[str, Any]]:
        """Decode one frame and handle it."""
        try:
            message = json.loads(text)
        except ValueError as e:
            self._log.warning(f'Discarding unparsable frame: {e}')
            return error_response(None, PARSE_ERROR, f'Parse error: {e}')
        return await self.handle(message)

    async def handle(self, message: Any) -> Optional[Dict[str, Any]]:
        """Handle one decoded JSON-RPC message.

        Args:
            message: The decoded message

        Returns:
            The response envelope, or None for notifications and responses
        """
        if not isinstance(message, dict) or message.get('jsonrpc') != JSONRPC_VERSION:
            return error_response(
                message.get('id') if isinstance(message, dict) else None,
                INVALID_REQUEST,
                'Invalid Request',
            )

        method = message.get('method')
        if method is None:
            # A response to something we never send; nothing to answer.
            return None
        if not isinstance(method, str):
            return error_response(message.get('id'), INVALID_REQUEST, 'Invalid Request')

        if 'id' not in message:
            self._log.bind(operation=method).debug(f'Received notification {method}')
            return None

        request_id = message['id']
        params = message.get('params') or {}
        if not isinstance(params, dict):
            return error_response(request_id, INVALID_PARAMS, 'params must be an object')

        try:
            if method == 'initialize':
                return success_response(request_id, self._initialize(params))
            if method == 'ping':
                return success_response(request_id, {})
            if method == 'tools/list':
                return success_response(request_id, self._list_tools())
            if method == 'tools/call':
                return success_response(request_id, await self._call_tool(params))
            return error_response(request_id, METHOD_NOT_FOUND, f'Method not found: {method}')
        except ValidationError as e:
            self._log.bind(operation=e.tool_name, outcome='rejected').warning(str(e))
            return error_response(request_id, INVALID_PARAMS, str(e))
        except DispatcherClosedError as e:
            self._log.bind(operation=e.tool_name, outcome='rejected').warning(str(e))
            return error_response(request_id, INTERNAL_ERROR, str(e))
        except Exception as e:
            self._log.bind(operation=method, outcome='internal_error').exception(
                f'Unexpected error handling {method}: {e}'
            )
            return error_response(request_id, INTERNAL_ERROR, f'Internal error: {e}')

    def _initialize(self, params: Dict[str, Any]) -> Dict[str, Any]:
        client = params.get('clientInfo') or {}
        self._log.info(
            f'Client initialized: {client.get("name", "unknown")} {client.get("version", "")}'.rstrip()
        )
        return {
            'protocolVersion': params.get('protocolVersion') or LATEST_PROTOCOL_VERSION,
            'capabilities': {'tools': {'listChanged': False}},
            'serverInfo': {'name': SERVER_NAME, 'version': SERVER_VERSION},
            'instructions': SERVER_INSTRUCTIONS.strip(),
        }

    def _list_tools(self) -> Dict[str, Any]:
        return {
            'tools': [
                tool.model_dump(by_alias=True, exclude_none=True, mode='json')
                for tool in self._dispatcher.list()
            ]
        }

    async def _call_tool(self, params: Dict[str, Any]) -> Dict[str, Any]:
        name = params.get('name')
        if not isinstance(name, str) or not name:
            raise ValidationError('', 'tools/call requires a tool name')
        result = await self._dispatcher.call(name, params.get('arguments'))
        return result.model_dump(by_alias=True, exclude_none=True, mode='json')
