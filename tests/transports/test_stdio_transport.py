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

"""Tests for the stdio transport."""

import asyncio
import json
import pytest
from nile_mcp_server.common.utils import text_result
from nile_mcp_server.dispatcher import Dispatcher
from nile_mcp_server.models import ToolArguments
from nile_mcp_server.protocol import McpProtocol
from nile_mcp_server.transports.stdio import StdioBinding
from pydantic import Field


class WaitArgs(ToolArguments):
    key: str = Field(description='Name of the call')


class BufferWriter:
    """Collects everything written, like a StreamWriter over a pipe."""

    def __init__(self):
        self.data = bytearray()

    def write(self, data: bytes) -> None:
        self.data.extend(data)

    async def drain(self) -> None:
        await asyncio.sleep(0)

    def messages(self):
        return [json.loads(line) for line in self.data.decode('utf-8').splitlines()]


def frame(message) -> bytes:
    return (json.dumps(message) + '\n').encode('utf-8')


def call(request_id, name, arguments):
    return {
        'jsonrpc': '2.0',
        'id': request_id,
        'method': 'tools/call',
        'params': {'name': name, 'arguments': arguments},
    }


@pytest.fixture
def released():
    return asyncio.Event()


@pytest.fixture
def protocol(released):
    async def slow(args):
        await released.wait()
        return text_result(f'slow {args.key}')

    async def fast(args):
        released.set()
        return text_result(f'fast {args.key}')

    dispatcher = Dispatcher()
    dispatcher.register('slow', 'Waits for fast', WaitArgs, slow)
    dispatcher.register('fast', 'Releases slow', WaitArgs, fast)
    return McpProtocol(dispatcher)


class TestStdioBinding:
    """Test cases for StdioBinding."""

    @pytest.mark.asyncio
    async def test_replies_until_eof(self, protocol):
        """Test each request gets exactly one line and EOF ends the loop."""
        reader = asyncio.StreamReader()
        writer = BufferWriter()
        reader.feed_data(frame({'jsonrpc': '2.0', 'id': 1, 'method': 'ping'}))
        reader.feed_data(b'\n')
        reader.feed_data(frame({'jsonrpc': '2.0', 'method': 'notifications/initialized'}))
        reader.feed_data(frame(call(2, 'fast', {'key': 'a'})))
        reader.feed_eof()

        await asyncio.wait_for(StdioBinding(protocol, reader, writer).run(), timeout=5)

        replies = {message['id']: message for message in writer.messages()}
        assert set(replies) == {1, 2}
        assert replies[2]['result']['content'][0]['text'] == 'fast a'
        assert protocol.dispatcher.closed

    @pytest.mark.asyncio
    async def test_pipelined_calls_interleave(self, protocol):
        """Test a later call can complete while an earlier one is still running."""
        reader = asyncio.StreamReader()
        writer = BufferWriter()
        reader.feed_data(frame(call('s', 'slow', {'key': '1'})))
        reader.feed_data(frame(call('f', 'fast', {'key': '2'})))
        reader.feed_eof()

        await asyncio.wait_for(StdioBinding(protocol, reader, writer).run(), timeout=5)

        assert [message['id'] for message in writer.messages()] == ['f', 's']

    @pytest.mark.asyncio
    async def test_parse_error_reply(self, protocol):
        """Test a garbage line is answered with a parse error and serving continues."""
        reader = asyncio.StreamReader()
        writer = BufferWriter()
        reader.feed_data(b'{oops\n')
        reader.feed_data(frame({'jsonrpc': '2.0', 'id': 3, 'method': 'ping'}))
        reader.feed_eof()

        await asyncio.wait_for(StdioBinding(protocol, reader, writer).run(), timeout=5)

        first, second = writer.messages()
        assert first['error']['code'] == -32700
        assert second['id'] == 3

    @pytest.mark.asyncio
    async def test_stop_cancels_in_flight_calls(self, protocol):
        """Test stop() ends the loop, cancels running calls and closes the dispatcher."""
        reader = asyncio.StreamReader()
        writer = BufferWriter()
        binding = StdioBinding(protocol, reader, writer)
        reader.feed_data(frame(call('s', 'slow', {'key': '1'})))

        task = asyncio.create_task(binding.run())
        await asyncio.sleep(0.05)
        binding.stop()

        with pytest.raises(asyncio.CancelledError):
            await task
        assert writer.messages() == []
        assert protocol.dispatcher.closed

    @pytest.mark.asyncio
    async def test_oversized_frame_is_rejected_and_serving_continues(self, protocol):
        """Test a frame over the read limit gets an error reply without ending the session."""
        reader = asyncio.StreamReader(limit=64)
        writer = BufferWriter()
        oversized = {'jsonrpc': '2.0', 'id': 1, 'method': 'ping', 'params': {'pad': 'x' * 200}}
        reader.feed_data(frame(oversized))
        reader.feed_data(frame({'jsonrpc': '2.0', 'id': 2, 'method': 'ping'}))
        reader.feed_eof()

        await asyncio.wait_for(StdioBinding(protocol, reader, writer).run(), timeout=5)

        first, second = writer.messages()
        assert first['id'] is None
        assert first['error']['code'] == -32600
        assert second == {'jsonrpc': '2.0', 'id': 2, 'result': {}}
        assert protocol.dispatcher.closed
