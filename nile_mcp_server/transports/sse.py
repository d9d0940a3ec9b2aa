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

"""HTTP event stream transport with a POST side channel."""

import asyncio
import json
import uvicorn
import uuid
from ..constants import (
    DEFAULT_HEARTBEAT_INTERVAL,
    ERROR_INVALID_BODY,
    ERROR_INVALID_SESSION,
    ERROR_NO_SESSION,
    SSE_MESSAGE_PATH,
    SSE_STREAM_PATH,
)
from ..protocol import JSONRPC_VERSION, McpProtocol
from loguru import logger
from starlette.applications import Starlette
from starlette.requests import Request
from starlette.responses import JSONResponse, StreamingResponse
from starlette.routing import Route
from typing import Any, AsyncIterator, Dict, Optional, Set


HEARTBEAT_EVENT = 'event: heartbeat\ndata: {"type":"ping"}\n\n'


def format_event(event: str, data: str) -> str:
    """Encode one server-sent event."""
    lines = ''.join(f'data: {line}\n' for line in data.split('\n'))
    return f'event: {event}\n{lines}\n'


def to_jsonrpc(body: Dict[str, Any]) -> Dict[str, Any]:
    """Accept either a JSON-RPC message or the short ``{name, arguments}`` form."""
    if 'jsonrpc' in body or 'name' not in body:
        return body
    return {
        'jsonrpc': JSONRPC_VERSION,
        'id': body.get('id', uuid.uuid4().hex),
        'method': 'tools/call',
        'params': {'name': body['name'], 'arguments': body.get('arguments') or {}},
    }


class SseSession:
    """One open event stream and the calls posted against it."""

    def __init__(self, session_id: str):
        """Initialize the session.

        Args:
            session_id: Token the peer quotes when posting messages
        """
        self.id = session_id
        self.queue: asyncio.Queue = asyncio.Queue()
        self.tasks: Set[asyncio.Task] = set()
        self.closed = False

    def send(self, message: Dict[str, Any]) -> bool:
        """Queue a message for the stream; False if the session is gone."""
        if self.closed:
            return False
        self.queue.put_nowait(message)
        return True

    def spawn(self, coro) -> asyncio.Task:
        """Run a call as a task owned by this session."""
        task = asyncio.create_task(coro)
        self.tasks.add(task)
        task.add_done_callback(self.tasks.discard)
        return task

    def close(self, cancel_calls: bool = False) -> None:
        """End the stream, optionally cancelling the calls still running."""
        if not self.closed:
            self.closed = True
            self.queue.put_nowait(None)
        if cancel_calls:
            for task in list(self.tasks):
                task.cancel()


class SseBinding:
    """Serves any number of peers over server-sent events.

    ``GET /sse`` opens a session and streams its replies. ``POST /messages``
    delivers one message for a session and is acknowledged with 202 before
    the call completes; the reply arrives on the session's stream.
    """

    def __init__(
        self,
        protocol: McpProtocol,
        heartbeat_interval: float = DEFAULT_HEARTBEAT_INTERVAL,
        log=logger,
    ):
        """Initialize the binding.

        Args:
            protocol: Handles every posted message
            heartbeat_interval: Seconds of idle stream before a heartbeat is sent
            log: Logger used for transport events
        """
        self._protocol = protocol
        self._heartbeat_interval = heartbeat_interval
        self._sessions: Dict[str, SseSession] = {}
        self._log = log.bind(component='sse')
        self.app = Starlette(
            routes=[
                Route(SSE_STREAM_PATH, self.handle_stream, methods=['GET']),
                Route(SSE_MESSAGE_PATH, self.handle_message, methods=['POST']),
                Route('/health', self.handle_health, methods=['GET']),
            ]
        )

    @property
    def sessions(self) -> Dict[str, SseSession]:
        """Currently open sessions by token."""
        return self._sessions

    def open_session(self) -> SseSession:
        """Register a new session under a fresh token."""
        session = SseSession(uuid.uuid4().hex)
        self._sessions[session.id] = session
        self._log.bind(session=session.id).info(
            f'SSE session opened ({len(self._sessions)} active)'
        )
        return session

    def release(self, session_id: str) -> None:
        """Forget a session; replies still owed to it are dropped."""
        session = self._sessions.pop(session_id, None)
        if session is not None:
            session.close()
            self._log.bind(session=session_id).info(
                f'SSE session closed ({len(self._sessions)} active)'
            )

    def close_all(self) -> None:
        """Close every session and cancel the calls they still run."""
        for session in list(self._sessions.values()):
            session.close(cancel_calls=True)
        self._sessions.clear()

    def find_session(self, session_id: Optional[str]) -> Optional[SseSession]:
        """Look up a session; without a token, the only open session is used."""
        if session_id:
            return self._sessions.get(session_id)
        if len(self._sessions) == 1:
            return next(iter(self._sessions.values()))
        return None

    async def handle_stream(self, request: Request) -> StreamingResponse:
        session = self.open_session()
        return StreamingResponse(
            self._events(session),
            media_type='text/event-stream',
            headers={
                'Cache-Control': 'no-cache',
                'Connection': 'keep-alive',
                'X-Accel-Buffering': 'no',
            },
        )

    async def _events(self, session: SseSession) -> AsyncIterator[str]:
        try:
            yield format_event('endpoint', f'{SSE_MESSAGE_PATH}?sessionId={session.id}')
            while True:
                try:
                    message = await asyncio.wait_for(
                        session.queue.get(), timeout=self._heartbeat_interval
                    )
                except asyncio.TimeoutError:
                    yield HEARTBEAT_EVENT
                    continue
                if message is None:
                    break
                yield format_event('message', json.dumps(message, separators=(',', ':')))
        finally:
            self.release(session.id)

    async def handle_message(self, request: Request) -> JSONResponse:
        try:
            body = await request.json()
        except ValueError:
            return JSONResponse({'error': 'Invalid JSON'}, status_code=400)
        if not isinstance(body, dict):
            return JSONResponse({'error': ERROR_INVALID_BODY}, status_code=400)

        session_id = request.query_params.get('sessionId') or body.pop('sessionId', None)
        session = self.find_session(session_id)
        if session is None:
            if session_id:
                return JSONResponse({'error': ERROR_INVALID_SESSION}, status_code=400)
            return JSONResponse(
                {'error': ERROR_NO_SESSION.format(SSE_STREAM_PATH)}, status_code=400
            )

        session.spawn(self._process(session, to_jsonrpc(body)))
        return JSONResponse({'status': 'accepted'}, status_code=202)

    async def handle_health(self, request: Request) -> JSONResponse:
        return JSONResponse({'status': 'healthy', 'sessions': len(self._sessions)})

    async def _process(self, session: SseSession, message: Dict[str, Any]) -> None:
        response = await self._protocol.handle(message)
        if response is None:
            return
        if not session.send(response):
            self._log.bind(session=session.id, outcome='dropped').warning(
                f'Session closed before reply {response.get("id")} could be delivered'
            )


class SseServer(uvicorn.Server):
    """Uvicorn server that closes every SSE session when asked to exit."""

    def __init__(self, config: uvicorn.Config, binding: SseBinding):
        """Initialize the server.

        Args:
            config: Uvicorn configuration serving ``binding.app``
            binding: The binding whose sessions are closed on exit
        """
        super().__init__(config)
        self._binding = binding

    def handle_exit(self, sig, frame) -> None:
        self._binding.close_all()
        super().handle_exit(sig, frame)
