"""Zonesync CLI: apply a batch of DNS changes from the command line.

Usage examples::

    zonesync --project-id my-project changes.json
    zonesync -c '{"project_id": "p", "workers": 4}' --dry-run - < changes.json

The change file holds ``{"create": [...], "update": [...], "delete": [...]}``
where every item is an endpoint (``dnsName``, ``recordType``, ``targets``,
``recordTTL``).
"""

from __future__ import annotations

import argparse
import json
import sys
from typing import Any, TextIO

from pydantic import ValidationError

from zonesync.base.context import Context
from zonesync.base.exceptions import ZonesyncError
from zonesync.base.models import Endpoint


def _build_parser() -> argparse.ArgumentParser:
    """Build the argparse parser for the ``zonesync`` CLI.

    Returns:
        Configured :class:`~argparse.ArgumentParser`.
    """
    parser = argparse.ArgumentParser(
        prog="zonesync",
        description="Apply DNS record changes to the STACKIT DNS API",
    )
    parser.add_argument(
        "--config", "-c",
        type=str,
        default="{}",
        help='JSON config string (e.g. \'{"project_id":"p","workers":4}\')',
    )
    parser.add_argument("--project-id", help="Project owning the zones")
    parser.add_argument("--workers", "-w", type=int, help="Worker threads per change kind")
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Log intended changes without calling the API",
    )
    parser.add_argument(
        "--timeout", "-t",
        type=float,
        default=None,
        help="Deadline in seconds for the whole pass",
    )
    parser.add_argument(
        "changes",
        help="Path to the JSON change file, or '-' for stdin",
    )
    return parser


def _load_changes(stream: TextIO) -> dict[str, list[Endpoint]]:
    raw = json.load(stream)
    if not isinstance(raw, dict):
        raise ValueError("change file must hold a JSON object")
    return {
        kind: [Endpoint.model_validate(item) for item in raw.get(kind) or []]
        for kind in ("create", "update", "delete")
    }


def main(argv: list[str] | None = None) -> None:
    """CLI entry point.

    Parses arguments, builds a provider via :func:`create_provider`,
    applies the change file and prints the per-phase report as JSON.

    Args:
        argv: Optional argument list (defaults to ``sys.argv``).
    """
    parser = _build_parser()
    ns = parser.parse_args(argv)

    try:
        config: dict[str, Any] = json.loads(ns.config)
    except json.JSONDecodeError as e:
        print(f"Invalid --config JSON: {e}", file=sys.stderr)
        sys.exit(1)
    if not isinstance(config, dict):
        print("Invalid --config JSON: expected an object", file=sys.stderr)
        sys.exit(1)
    if ns.project_id:
        config["project_id"] = ns.project_id
    if ns.workers is not None:
        config["workers"] = ns.workers
    if ns.dry_run:
        config["dry_run"] = True

    try:
        if ns.changes == "-":
            changes = _load_changes(sys.stdin)
        else:
            with open(ns.changes, encoding="utf-8") as fh:
                changes = _load_changes(fh)
    except (OSError, ValueError, ValidationError) as e:
        print(f"Invalid change file: {e}", file=sys.stderr)
        sys.exit(1)

    # Lazy-import to keep --help free of the HTTP stack
    from zonesync.factory import create_provider

    try:
        provider = create_provider(config)
        report = provider.apply_changes(
            Context(timeout=ns.timeout),
            changes["create"],
            changes["update"],
            changes["delete"],
        )
    except ZonesyncError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    print(json.dumps(report.as_dict(), indent=2))


if __name__ == "__main__":
    main()
