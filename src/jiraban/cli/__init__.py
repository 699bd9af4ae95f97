"""CLI argument parser and dispatch for jiraban."""

import argparse

from jiraban.cli.render import render_cmd
from jiraban.cli.sync import sync as sync_cmd


def build_parser() -> argparse.ArgumentParser:
    """Build the full CLI argument parser."""
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("--json", action="store_true", help="Machine-readable JSON output")
    common.add_argument("-v", "--verbose", action="store_true", help="Debug logging")

    parser = argparse.ArgumentParser(
        prog="jiraban",
        description="Sync Jira issues into an Obsidian vault",
        parents=[common],
    )

    commands = parser.add_subparsers(dest="command")

    # --- sync ---
    sync_p = commands.add_parser("sync", help="Fetch issues and write the vault files", parents=[common])
    sync_p.add_argument("--vault", help="Vault path (overrides OBSIDIAN_VAULT_PATH)")
    sync_p.add_argument("--jql", help="JQL query (overrides JIRA_JQL)")
    sync_p.add_argument("--env-file", default=".env", help="Path to .env file (default: .env)")
    sync_p.set_defaults(func=sync_cmd)

    # --- render ---
    render_p = commands.add_parser("render", help="Render an ADF JSON document to Markdown", parents=[common])
    render_p.add_argument("file", help="ADF JSON file, or - for stdin")
    render_p.set_defaults(func=render_cmd)

    return parser
