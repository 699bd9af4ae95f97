"""Handler for 'jiraban sync' command."""

import logging
import os
import sys

from jiraban.cli._common import error, output_json, setup_logging
from jiraban.config import Config
from jiraban.errors import ConfigError, TrackerError
from jiraban.sync import run_sync

logger = logging.getLogger(__name__)


def sync(args) -> int:
    """One-shot sync: fetch issues, write issue files and the board."""
    setup_logging(args.verbose)

    environ = dict(os.environ)
    if args.vault:
        environ["OBSIDIAN_VAULT_PATH"] = args.vault
    if args.jql:
        environ["JIRA_JQL"] = args.jql
    try:
        config = Config.from_env(environ, env_file=args.env_file)
    except ConfigError as e:
        return error(str(e), args.json)

    logger.info("starting sync for %s", config.jira_host)
    try:
        result = run_sync(config)
    except TrackerError as e:
        return error(str(e), args.json)

    if args.json:
        output_json(result.as_dict())
    else:
        print(
            f"created: {len(result.created)}, updated: {len(result.updated)}, "
            f"unchanged: {len(result.unchanged)}"
        )
        if result.board_path:
            print(f"board: {result.board_path}")
        for failure in result.failures:
            print(f"error: {failure}", file=sys.stderr)

    return 0 if result.ok else 1
