"""
SonarQube exporter entry point.

Usage:
    python -m sonarqube_exporter [--host HOST] [--port PORT]
                                 [--sonarqube-url URL] [--sonarqube-token TOKEN]

Environment Variables:
    SONARQUBE_URL - SonarQube server URL
    SONARQUBE_TOKEN - SonarQube authentication token
    EXPORTER_HOST - Host to bind (default: 0.0.0.0)
    EXPORTER_PORT - Port to bind (default: 9090)
    EXPORTER_LOG_LEVEL - Log level (DEBUG, INFO, WARNING, ERROR)
"""

import asyncio
import signal
import sys
from typing import List, Optional

from .config import ConfigError, get_config, setup_logging
from .exporter import create_server


async def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    try:
        config = get_config(sys.argv[1:] if argv is None else argv)
        config.validate()
    except ConfigError as e:
        logger = setup_logging()
        logger.error(f"Failed to load configuration: {e}")
        return 1

    logger = setup_logging(config.log_level)
    logger.info("Starting SonarQube Prometheus Exporter")
    logger.info(f"SonarQube URL: {config.sonarqube_url}")
    logger.info(f"Server address: {config.address}")

    server = create_server(config)

    # Handle shutdown signals
    shutdown_event = asyncio.Event()

    def signal_handler():
        logger.info("Shutdown requested...")
        shutdown_event.set()

    loop = asyncio.get_running_loop()
    for sig in (signal.SIGINT, signal.SIGTERM):
        try:
            loop.add_signal_handler(sig, signal_handler)
        except NotImplementedError:
            # Windows doesn't support add_signal_handler
            signal.signal(sig, lambda s, f: loop.call_soon_threadsafe(signal_handler))

    exit_code = 0
    try:
        await server.start()
        logger.info(f"Metrics available at http://{config.address}/metrics")
        await shutdown_event.wait()
    except OSError as e:
        logger.error(f"Failed to start server: {e}")
        exit_code = 1
    finally:
        try:
            await server.stop()
        except asyncio.TimeoutError:
            logger.error("Server forced to shutdown")
            exit_code = 1

    if exit_code == 0:
        logger.info("Server exited")
    return exit_code


def run() -> None:
    """Console script entry point."""
    sys.exit(asyncio.run(main()))


if __name__ == "__main__":
    run()
