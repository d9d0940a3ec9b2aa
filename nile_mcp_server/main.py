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

"""Nile MCP Server implementation."""

import argparse
import asyncio
import os
import signal
import sys
import uvicorn
from .api import NileApiClient
from .common.context import ToolContext
from .common.server import SERVER_VERSION
from .config import LOG_LEVELS, ServerConfig
from .credentials import CredentialResolver
from .dispatcher import Dispatcher
from .exceptions import ConfigurationError
from .executor import SqlExecutor
from .protocol import McpProtocol
from .tools import register_tools
from .transports.sse import SseBinding, SseServer
from .transports.stdio import StdioBinding
from dotenv import load_dotenv
from loguru import logger
from typing import List, Optional


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse the command line; every flag overrides its environment variable."""
    parser = argparse.ArgumentParser(
        description='An MCP server for managing Nile databases, tenants and SQL'
    )
    parser.add_argument(
        '--mode', choices=['stdio', 'sse'], help='Transport to serve (MCP_SERVER_MODE)'
    )
    parser.add_argument('--host', type=str, help='Interface to bind in sse mode (MCP_SERVER_HOST)')
    parser.add_argument('--port', type=int, help='Port to listen on in sse mode (MCP_SERVER_PORT)')
    parser.add_argument('--log-level', type=str, help='Log level (LOG_LEVEL)')
    return parser.parse_args(argv)


def configure_logging(level: str) -> None:
    """Send all logs to stderr; stdout belongs to the stdio transport."""
    logger.remove()
    logger.add(sys.stderr, level=level.upper())


def build_protocol(config: ServerConfig) -> McpProtocol:
    """Wire the API client, resolver, executor and tools into a protocol handler."""
    api = NileApiClient(
        api_key=config.api_key.get_secret_value(),
        workspace_slug=config.workspace_slug,
        base_url=config.api_base_url,
        timeout=config.request_timeout,
    )
    resolver = CredentialResolver(api)
    executor = SqlExecutor(resolver, connect_timeout=config.connect_timeout)
    dispatcher = Dispatcher()
    register_tools(dispatcher, ToolContext(api=api, resolver=resolver, executor=executor))
    return McpProtocol(dispatcher)


async def serve_stdio(protocol: McpProtocol) -> None:
    """Serve over stdin and stdout until EOF, SIGINT or SIGTERM."""
    binding = StdioBinding(protocol)
    loop = asyncio.get_running_loop()
    for sig in (signal.SIGINT, signal.SIGTERM):
        loop.add_signal_handler(sig, binding.stop)
    try:
        await binding.run()
    except asyncio.CancelledError:
        logger.info('Shutdown requested')
    finally:
        for sig in (signal.SIGINT, signal.SIGTERM):
            loop.remove_signal_handler(sig)


async def serve_sse(protocol: McpProtocol, config: ServerConfig) -> None:
    """Serve the HTTP event-stream transport until SIGINT or SIGTERM."""
    binding = SseBinding(protocol, heartbeat_interval=config.heartbeat_interval)
    server = SseServer(
        uvicorn.Config(
            binding.app,
            host=config.host,
            port=config.port,
            log_level='info' if config.log_level == 'SUCCESS' else config.log_level.lower(),
        ),
        binding,
    )
    logger.info(f'SSE endpoint: http://{config.host}:{config.port}/sse')
    try:
        await server.serve()
    finally:
        binding.close_all()
        protocol.dispatcher.close()


def main(argv: Optional[List[str]] = None):
    """Run the MCP server with CLI argument support."""
    args = parse_args(argv)
    load_dotenv()

    initial_level = (args.log_level or os.environ.get('LOG_LEVEL') or 'INFO').strip().upper()
    configure_logging(initial_level if initial_level in LOG_LEVELS else 'INFO')

    try:
        config = ServerConfig.from_env(
            overrides={
                'mode': args.mode,
                'host': args.host,
                'port': args.port,
                'log_level': args.log_level,
            }
        )
    except ConfigurationError as e:
        logger.error(str(e))
        sys.exit(1)

    configure_logging(config.log_level)

    logger.info(f'Starting Nile MCP Server v{SERVER_VERSION}')
    logger.info(f'Workspace: {config.workspace_slug}')
    logger.info(f'Transport: {config.mode}')

    protocol = build_protocol(config)
    if config.is_sse:
        asyncio.run(serve_sse(protocol, config))
    else:
        asyncio.run(serve_stdio(protocol))


if __name__ == '__main__':
    main()
