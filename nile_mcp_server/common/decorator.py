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

"""Decorators used by the Nile MCP Server."""

from ..exceptions import QueryError, ToolError
from ..renderer import render_error
from .utils import error_result
from functools import wraps
from inspect import iscoroutinefunction
from loguru import logger
from typing import Any, Callable, Optional


def handle_exceptions(func: Optional[Callable] = None, *, prefix: Optional[str] = None):
    """Decorator to turn domain failures of a tool handler into error results.

    Every ``ToolError`` raised by the wrapped handler is logged and rendered as
    a ``CallToolResult`` with ``isError`` set. Any other exception is a fault
    of the server itself and propagates unchanged.

    Can be applied bare (``@handle_exceptions``) or with a message prefix
    (``@handle_exceptions(prefix='Failed to create database')``).

    Args:
        func: The function to wrap
        prefix: Label put in front of the error message; defaults to the
            ``kind`` of the raised error

    Returns:
        The wrapped function that handles exceptions
    """

    def decorator(handler: Callable) -> Callable:
        @wraps(handler)
        async def wrapper(*args: Any, **kwargs: Any):
            try:
                if iscoroutinefunction(handler):
                    return await handler(*args, **kwargs)
                return handler(*args, **kwargs)
            except ToolError as error:
                label = prefix or error.kind
                logger.bind(operation=handler.__name__, outcome='error').warning(
                    f'{label}: {error.message}'
                )
                if isinstance(error, QueryError):
                    return error_result(
                        render_error(
                            label,
                            error.message,
                            detail=error.detail,
                            hint=error.hint,
                            position=error.position,
                        )
                    )
                return error_result(render_error(label, error.message))

        return wrapper

    if func is not None:
        return decorator(func)
    return decorator
