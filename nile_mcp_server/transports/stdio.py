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

"""Newline-delimited JSON-RPC over stdin and stdout."""

import asyncio
import json
import sys
from ..protocol import McpProtocol, error_response
from loguru import logger
from mcp.types import INVALID_REQUEST
from typing import Any, Dict, Optional, Set


# Upper bound on a single inbound frame
STDIO_READ_LIMIT = 16 * 1024 * 1024


async def open_stdio_streams():
    """Wrap the process's stdin and stdout in asyncio streams."""
    loop = asyncio.get_running_loop()
    reader = asyncio.StreamReader(limit=STDIO_READ_LIMIT)
    await loop.connect_read_pipe(lambda: asyncio.StreamReaderProtocol(reader), sys.stdin)
    transport, protocol = await loop.connect_write_pipe(
        asyncio.streams.FlowControlMixin, sys.stdout
    )
    writer = asyncio.StreamWriter(transport, protocol, reader, loop)
    return reader, writer


class StdioBinding:
    """Serves one peer over a duplex byte stream.

    Inbound frames are read in order. Every request runs as its own task, so
    a slow call does not hold up the ones behind it; replies are written one
    whole line at a time and may leave in a different order than their
    requests arrived.
    """

    def __init__(self, protocol: McpProtocol, reader=None, writer=None, log=logger):
        """Initialize the binding.

        Args:
            protocol: Handles every decoded frame
            reader: Optional stream to read from, stdin when omitted
            writer: Optional stream to write to, stdout when omitted
            log: Logger used for transport events
        """
        self._protocol = protocol
        self._reader = reader
        self._writer = writer
        self._write_lock = asyncio.Lock()
        self._in_flight: Set[asyncio.Task] = set()
        self._main_task: Optional[asyncio.Task] = None
        self._log = log.bind(component='stdio')

    async def run(self) -> None:
        """Serve until the input reaches EOF or stop() is called.

        Calls still running at EOF are awaited; on stop() they are cancelled.
        The dispatcher is closed either way.
        """
        self._main_task = asyncio.current_task()
        if self._reader is None or self._writer is None:
            self._reader, self._writer = await open_stdio_streams()

        self._log.info('Serving MCP over stdio')
        try:
            while True:
                try:
                    line = await self._reader.readline()
                except ValueError as e:
                    self._log.bind(outcome='frame_too_large').warning(
                        f'Dropped an oversized inbound frame: {e}'
                    )
                    await self.send(
                        error_response(None, INVALID_REQUEST, 'Message exceeds the size limit')
                    )
                    continue
                if not line:
                    break
                text = line.decode('utf-8', errors='replace').strip()
                if not text:
                    continue
                task = asyncio.create_task(self._serve(text))
                self._in_flight.add(task)
                task.add_done_callback(self._in_flight.discard)

            self._log.info('Input closed, waiting for in-flight calls')
            if self._in_flight:
                await asyncio.gather(*self._in_flight)
        finally:
            for task in list(self._in_flight):
                task.cancel()
            self._protocol.dispatcher.close()
            self._log.info('Stdio transport stopped')

    def stop(self) -> None:
        """Cancel the read loop and every call still running."""
        if self._main_task is not None and not self._main_task.done():
            self._main_task.cancel()

    async def _serve(self, text: str) -> None:
        response = await self._protocol.handle_text(text)
        if response is not None:
            await self.send(response)

    async def send(self, message: Dict[str, Any]) -> None:
        """Write one message as a single line."""
        data = (json.dumps(message, separators=(',', ':')) + '\n').encode('utf-8')
        async with self._write_lock:
            try:
                self._writer.write(data)
                await self._writer.drain()
            except (ConnectionError, OSError) as e:
                self._log.bind(outcome='write_failed').error(f'Could not write reply: {e}')
