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

"""Registry and dispatcher for the tools exposed by the server."""

import time
from .constants import ERROR_INVALID_ARGUMENTS, ERROR_UNKNOWN_TOOL
from .exceptions import DispatcherClosedError, ValidationError
from dataclasses import dataclass
from loguru import logger
from mcp.types import CallToolResult, Tool
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError
from typing import Any, Awaitable, Callable, Dict, List, Mapping, Optional, Type


ToolHandler = Callable[[BaseModel], Awaitable[CallToolResult]]


@dataclass(frozen=True)
class RegisteredTool:
    """A tool known to the dispatcher."""

    name: str
    description: str
    argument_model: Type[BaseModel]
    handler: ToolHandler

    def definition(self) -> Tool:
        """Describe the tool for ``tools/list``."""
        return Tool(
            name=self.name,
            description=self.description,
            inputSchema=self.argument_model.model_json_schema(by_alias=True),
        )


def describe_validation_error(error: PydanticValidationError) -> str:
    """Summarize pydantic errors as ``field: message`` pairs."""
    parts = []
    for item in error.errors():
        location = '.'.join(str(part) for part in item.get('loc', ()))
        parts.append(f'{location}: {item.get("msg")}' if location else str(item.get('msg')))
    return '; '.join(parts)


class Dispatcher:
    """Routes tool calls to their handlers.

    Arguments are validated against the tool's argument model before the
    handler runs. Handlers report domain failures as error results; anything
    else they raise propagates to the caller.
    """

    def __init__(self, log=logger):
        """Initialize an empty dispatcher."""
        self._tools: Dict[str, RegisteredTool] = {}
        self._closed = False
        self._log = log.bind(component='dispatcher')

    @property
    def closed(self) -> bool:
        """Whether close() has been called."""
        return self._closed

    def register(
        self,
        name: str,
        description: str,
        argument_model: Type[BaseModel],
        handler: ToolHandler,
    ) -> None:
        """Register a tool.

        Raises:
            ValueError: If a tool with the same name is already registered
        """
        if name in self._tools:
            raise ValueError(f"Tool '{name}' is already registered")
        self._tools[name] = RegisteredTool(name, description, argument_model, handler)

    def list(self) -> List[Tool]:
        """Return the definitions of all registered tools, in registration order."""
        return [tool.definition() for tool in self._tools.values()]

    async def call(self, name: str, arguments: Optional[Mapping[str, Any]]) -> CallToolResult:
        """Validate the arguments and run the tool.

        Args:
            name: Name of the tool
            arguments: Argument mapping supplied by the peer; None means none

        Returns:
            The tool result, with ``isError`` set for domain failures

        Raises:
            DispatcherClosedError: If the dispatcher was closed
            ValidationError: If the tool is unknown or the arguments are invalid
        """
        if self._closed:
            raise DispatcherClosedError(name)

        tool = self._tools.get(name)
        if tool is None:
            raise ValidationError(name, ERROR_UNKNOWN_TOOL.format(name))

        if arguments is None:
            arguments = {}
        if not isinstance(arguments, Mapping):
            raise ValidationError(
                name, ERROR_INVALID_ARGUMENTS.format(name, 'arguments must be an object')
            )
        try:
            parsed = tool.argument_model.model_validate(dict(arguments))
        except PydanticValidationError as e:
            raise ValidationError(
                name, ERROR_INVALID_ARGUMENTS.format(name, describe_validation_error(e))
            ) from e

        start = time.perf_counter()
        result = await tool.handler(parsed)
        self._log.bind(
            operation=name,
            outcome='error' if result.isError else 'ok',
            duration_ms=round((time.perf_counter() - start) * 1000.0, 1),
        ).info(f'Tool {name} completed')
        return result

    def close(self) -> None:
        """Reject every later call."""
        self._closed = True
        self._log.info('Dispatcher closed')
