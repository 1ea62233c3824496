"""Run command — load the config, then serve until terminated.

Config and bind failures are logged and turned into exit status 1.
"""

import argparse
import logging

from staticroute.cli._logging import configure_logging
from staticroute.config import load_config
from staticroute.errors import BindError, ConfigurationError

logger = logging.getLogger("staticroute.cli")


def run(args: argparse.Namespace) -> None:
    """Load ``args.config`` and start the server."""
    configure_logging(args.log_level)

    try:
        config = load_config(args.config)
    except ConfigurationError as exc:
        logger.error("failed to load config: %s", exc)
        raise SystemExit(1) from exc

    from staticroute.server.run import ServerNotInstalledError, run_server

    try:
        run_server(config, log_level=args.log_level)
    except (BindError, ServerNotInstalledError) as exc:
        logger.error("%s", exc)
        raise SystemExit(1) from exc
