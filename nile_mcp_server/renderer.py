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

"""Plain-text rendering of query results and errors."""

from .models import QueryResult
from typing import Any, List, Optional


NULL_TOKEN = 'NULL'
SEPARATOR_CELL = '---'


def format_value(value: Any) -> str:
    """Format a single cell value."""
    if value is None:
        return NULL_TOKEN
    return str(value)


def format_cell(value: Any) -> str:
    """Format a value for a table cell so it stays on one line in its column."""
    text = format_value(value).replace('|', '\\|')
    return text.replace('\r\n', ' ').replace('\r', ' ').replace('\n', ' ')


def render(result: QueryResult) -> str:
    """Render a query result as a markdown-style table followed by a row count.

    Args:
        result: The query result to render

    Returns:
        The rendered text; the last line is always ``<n> rows returned.``
    """
    lines: List[str] = []
    names = [field.name for field in result.fields]

    if names:
        lines.append('| ' + ' | '.join(format_cell(name) for name in names) + ' |')
        lines.append('|' + '|'.join(SEPARATOR_CELL for _ in names) + '|')
        for row in result.rows:
            cells = [
                format_cell(row[index] if index < len(row) else None)
                for index in range(len(names))
            ]
            lines.append('| ' + ' | '.join(cells) + ' |')
        lines.append('')

    lines.append(f'{result.row_count} rows returned.')
    return '\n'.join(lines)


def render_error(
    kind: str,
    message: str,
    detail: Optional[str] = None,
    hint: Optional[str] = None,
    position: Optional[str] = None,
) -> str:
    """Render a failure as text.

    The message comes first, then the optional detail, hint and position, each
    on its own line. Absent parts are left out entirely.

    Args:
        kind: Short label of what failed, e.g. ``Query execution failed``
        message: The primary error message
        detail: Optional detail supplied by the failing system
        hint: Optional corrective hint supplied by the failing system
        position: Optional position of the error in the submitted statement

    Returns:
        The rendered error text
    """
    lines = [f'{kind}: {message}' if kind else message]
    if detail:
        lines.append(f'Detail: {detail}')
    if hint:
        lines.append(f'Hint: {hint}')
    if position:
        lines.append(f'Position: {position}')
    return '\n'.join(lines)
