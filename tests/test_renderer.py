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

"""Tests for the result renderer."""

from nile_mcp_server.models import FieldInfo, QueryResult
from nile_mcp_server.renderer import format_cell, format_value, render, render_error


def make_result(columns, rows, row_count=None):
    return QueryResult(
        fields=[FieldInfo(name=name) for name in columns],
        rows=rows,
        row_count=len(rows) if row_count is None else row_count,
    )


class TestRender:
    """Test cases for render."""

    def test_single_row_table(self):
        """Test the canonical one-row table."""
        result = make_result(['id', 'name'], [{'id': 1, 'name': 'Test'}])

        assert render(result) == '| id | name |\n|---|---|\n| 1 | Test |\n\n1 rows returned.'

    def test_table_shape(self):
        """Test a table with f fields and r rows has r + 2 table lines."""
        rows = [{'a': i, 'b': i * 2, 'c': str(i)} for i in range(5)]
        lines = render(make_result(['a', 'b', 'c'], rows)).split('\n')

        table = [line for line in lines if line.startswith('|')]
        assert len(table) == 5 + 2
        assert all(line.count('|') == 3 + 1 for line in table)
        assert lines[-1] == '5 rows returned.'

    def test_empty_result_keeps_header(self):
        """Test a result with fields and no rows."""
        result = make_result(['id'], [])

        assert render(result) == '| id |\n|---|\n\n0 rows returned.'

    def test_no_fields(self):
        """Test a command without a result set only reports the count."""
        assert render(make_result([], [], row_count=3)) == '3 rows returned.'

    def test_null_and_missing_values(self):
        """Test None and missing keys render as NULL."""
        result = make_result(['a', 'b'], [{'a': None}])

        assert '| NULL | NULL |' in render(result)

    def test_row_count_from_command(self):
        """Test the summary uses the reported row count."""
        result = make_result(['id'], [{'id': 1}], row_count=7)

        assert render(result).endswith('7 rows returned.')

    def test_render_is_deterministic(self):
        """Test rendering the same result twice gives identical text."""
        result = make_result(['x', 'y'], [{'x': 1.5, 'y': 'a'}, {'x': None, 'y': 'b'}])

        assert render(result) == render(result)

    def test_duplicate_column_names_keep_their_values(self):
        """Test columns sharing a name are rendered by position."""
        result = QueryResult(
            fields=[FieldInfo(name='?column?'), FieldInfo(name='?column?')],
            rows=[[1, 2]],
            row_count=1,
        )

        assert render(result) == '| ?column? | ?column? |\n|---|---|\n| 1 | 2 |\n\n1 rows returned.'

    def test_pipes_and_newlines_stay_inside_their_cell(self):
        """Test cell text cannot add columns or rows to the table."""
        result = make_result(['a', 'b'], [{'a': 'x|y', 'b': 'line1\nline2\r\nline3'}])

        lines = render(result).split('\n')

        assert lines == [
            '| a | b |',
            '|---|---|',
            '| x\\|y | line1 line2 line3 |',
            '',
            '1 rows returned.',
        ]

    def test_format_value(self):
        """Test single cell formatting."""
        assert format_value(None) == 'NULL'
        assert format_value(True) == 'True'
        assert format_value('') == ''


class TestRenderError:
    """Test cases for render_error."""

    def test_message_only(self):
        """Test an error without detail or hint."""
        assert render_error('Query execution failed', 'boom') == 'Query execution failed: boom'

    def test_all_parts_in_order(self):
        """Test detail, hint and position follow the message in that order."""
        text = render_error('Failed to delete tenant', 'msg', detail='d', hint='h', position='4')

        assert text.split('\n') == [
            'Failed to delete tenant: msg',
            'Detail: d',
            'Hint: h',
            'Position: 4',
        ]

    def test_hint_without_detail(self):
        """Test absent parts are left out entirely."""
        assert render_error('X', 'msg', hint='h') == 'X: msg\nHint: h'


class TestFormatCell:
    """Test cases for format_cell."""

    def test_escapes_pipe(self):
        """Test a pipe is escaped."""
        assert format_cell('a|b|c') == 'a\\|b\\|c'

    def test_folds_line_breaks(self):
        """Test every kind of line break becomes a space."""
        assert format_cell('a\nb\r\nc\rd') == 'a b c d'

    def test_null(self):
        """Test None is still NULL."""
        assert format_cell(None) == 'NULL'
