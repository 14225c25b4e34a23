#!/usr/bin/env python3
"""
Main entry point for the RCON command-line client.

Connects to the server, authenticates, and executes the commands given
as arguments. Without arguments, commands are read from stdin one per
line until EOF. Configuration is loaded from environment variables.
"""

from typing import List, Optional
import asyncio
import os
import sys

from client.connection import RconConnection
from client.transport import StreamTransport, open_transport
from config.settings import Config
from utils.logging import setup_logging, get_logger
from utils.exceptions import (
    AuthenticationError,
    ConfigurationError,
    RconError,
)

logger = get_logger(__name__)


class ClientApplication:
    """Main application class for the RCON client."""

    def __init__(self, config: Optional[Config] = None):
        """Initialize application."""
        self.config = config or Config()
        self.transport: Optional[StreamTransport] = None

    async def run(self, commands: List[str]) -> int:
        """
        Run the client application.

        Args:
            commands: Commands to execute; read from stdin when empty

        Returns:
            Process exit code
        """
        try:
            logger.info("Loading configuration...")
            client_config = self.config.load_client_config()
            connection_config = self.config.load_connection_config()

            logger.info(
                f"Configuration loaded: "
                f"server={client_config.host}:{client_config.port}, "
                f"multiple_responses={connection_config.multiple_responses}"
            )

            self.transport = await open_transport(client_config.host, client_config.port)
            connection = RconConnection(self.transport, connection_config)

            await connection.authenticate(client_config.password)

            if commands:
                for command in commands:
                    await self._execute(connection, command)
            else:
                await self._execute_stdin(connection)

            return 0

        except ConfigurationError as e:
            logger.error(f"Configuration error: {e}")
            logger.error(
                "Please check your environment variables. "
                "See .env.example for required configuration."
            )
            return 1
        except ValueError as e:
            logger.error(f"Configuration validation error: {e}")
            return 1
        except AuthenticationError:
            logger.error("Authentication failed: check RCON_PASSWORD")
            return 1
        except RconError as e:
            logger.error(f"RCON error: {e}")
            return 1
        except OSError as e:
            logger.error(f"Connection error: {e}")
            return 1
        finally:
            if self.transport:
                await self.transport.close()
                self.transport = None

    async def _execute(self, connection: RconConnection, command: str) -> None:
        """Execute one command and print its response."""
        logger.debug(f"Executing command: {command}")
        responses = await connection.execute_command(command)
        output = ''.join(responses)
        if output:
            print(output.rstrip('\n'))

    async def _execute_stdin(self, connection: RconConnection) -> None:
        """Execute commands read from stdin until EOF."""
        loop = asyncio.get_running_loop()

        while True:
            line = await loop.run_in_executor(None, sys.stdin.readline)
            if not line:
                break

            command = line.strip()
            if command:
                await self._execute(connection, command)


async def main(argv: List[str]) -> int:
    """Main entry point."""
    # Get log level from environment
    log_level = os.getenv('LOG_LEVEL', 'INFO')

    # Setup logging
    setup_logging(log_level)

    app = ClientApplication()
    return await app.run(argv)


def cli() -> None:
    """Console script entry point."""
    try:
        sys.exit(asyncio.run(main(sys.argv[1:])))
    except KeyboardInterrupt:
        print("\nInterrupted", file=sys.stderr)
        sys.exit(130)


if __name__ == '__main__':
    cli()
