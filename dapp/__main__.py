import argparse
import logging
import sys
from pathlib import Path

from dapp.config import ConfigError, NodeConfig, load_config
from dapp.dispatcher import RollupDispatcher
from dapp.state import DAppState
from rollup.client import RollupClient
from rollup.exceptions import TransportError


def setup_logging(config: NodeConfig):
    """Setup logging based on configuration"""
    log_level = getattr(logging, config.logging.level, logging.INFO)
    log_format = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    handlers = [logging.StreamHandler(sys.stdout)]
    if config.logging.file:
        log_file = Path(config.logging.file)
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(level=log_level, format=log_format, handlers=handlers, force=True)


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="To-upper rollup dApp node")
    parser.add_argument(
        "--config",
        "-c",
        default=None,
        help="Path to YAML config (default: dapp_config.yaml)",
    )
    parser.add_argument("--rollup-url", default=None, help="Rollup HTTP server URL")
    parser.add_argument("--log-level", default=None, help="DEBUG, INFO, WARNING, ...")
    args = parser.parse_args(argv)

    try:
        config = load_config(args.config, rollup_url=args.rollup_url, log_level=args.log_level)
    except ConfigError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return 1

    setup_logging(config)
    logging.info(f"HTTP rollup_server url is {config.rollup_server_url}")

    client = RollupClient(config.rollup_server_url, timeout=config.request_timeout)
    dispatcher = RollupDispatcher(client, DAppState(), idle_sleep=config.idle_sleep)
    try:
        dispatcher.run()
    except TransportError:
        return 1
    except KeyboardInterrupt:
        logging.info("Interrupted, shutting down")
        dispatcher.stop()
    return 0


if __name__ == "__main__":
    sys.exit(main())
