"""
Hue Platform - Main Entry Point
"""

import asyncio
import signal
import sys
import logging
import os

from config_loader import load_config, resolve_config, setup_logging
from services.hue_platform import HuePlatform

logger = logging.getLogger(__name__)

async def main():
    """Main entry point"""

    platform = None

    def signal_handler():
        logger.info("Received shutdown signal, stopping...")
        if platform:
            asyncio.create_task(platform.stop())

    loop = asyncio.get_running_loop()
    for signum in (signal.SIGINT, signal.SIGTERM):
        try:
            loop.add_signal_handler(signum, signal_handler)
        except NotImplementedError:
            # Windows event loops have no signal handler support
            pass

    try:
        config_path = os.environ.get('CONFIG_FILE', 'config/config.yaml')
        config = load_config(config_path)
        setup_logging(config)
        logger.info(f"Using configuration file: {config_path}")

        platform = HuePlatform(resolve_config(config['hue']))
        accessory_list = await platform.run()

        if not accessory_list:
            logger.warning("No accessories exposed - exiting")
            return 1

    except Exception as e:
        logger.error(f"Platform failed: {e}")
        return 1
    finally:
        if platform:
            await platform.stop()

    return 0

def run():
    """Console script entry point"""
    try:
        exit_code = asyncio.run(main())
        sys.exit(exit_code)
    except KeyboardInterrupt:
        print("\nPlatform stopped by user")
        sys.exit(0)

if __name__ == "__main__":
    run()
