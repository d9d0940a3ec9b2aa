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

"""General utility functions for the Nile MCP Server."""

from mcp.types import CallToolResult, TextContent


def text_result(text: str) -> CallToolResult:
    """Build a successful tool result holding one text block."""
    return CallToolResult(content=[TextContent(type='text', text=text)], isError=False)


def error_result(text: str) -> CallToolResult:
    """Build a failed tool result holding one text block."""
    return CallToolResult(content=[TextContent(type='text', text=text)], isError=True)


def result_text(result: CallToolResult) -> str:
    """Concatenate the text blocks of a tool result.

    Args:
        result: The tool result

    Returns:
        The text of every text block, joined by newlines
    """
    return '\n'.join(block.text for block in result.content if isinstance(block, TextContent))
