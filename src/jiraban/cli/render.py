"""Handler for 'jiraban render' command."""

import json
import sys

from jiraban.cli._common import error, output_json
from jiraban.renderer import render


def render_cmd(args) -> int:
    """Print the Markdown rendering of an ADF document."""
    try:
        if args.file == "-":
            raw = json.load(sys.stdin)
        else:
            with open(args.file, encoding="utf-8") as f:
                raw = json.load(f)
    except OSError as e:
        return error(f"cannot read {args.file}: {e.strerror or e}", args.json)
    except ValueError as e:
        return error(f"invalid JSON in {args.file}: {e}", args.json)

    markdown = render(raw)
    if args.json:
        output_json({"markdown": markdown})
    else:
        sys.stdout.write(markdown)
    return 0
