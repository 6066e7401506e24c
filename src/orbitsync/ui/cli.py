from __future__ import annotations

import argparse
import json
import logging
import sys
from signal import SIGINT, signal
from typing import TYPE_CHECKING, Any

from dotenv import load_dotenv

from orbitsync.app import import_orbit_members, read_note
from orbitsync.config import (
    DEFAULT_VAULT_NAME,
    ConfigurationError,
    configure_logging,
    load_import_options,
)
from orbitsync.domain.reconciliation import MergeConflictOption
from orbitsync.ui.decisions import PromptDecisionSource, ScriptedDecisionSource

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType

    from orbitsync.domain.ports import DecisionSource

log = logging.getLogger(__name__)

_DECISION_CHOICES: dict[str, MergeConflictOption] = {
    "overwrite": MergeConflictOption.OVERWRITE_LOCAL,
    "skip": MergeConflictOption.SKIP,
    "skip_all": MergeConflictOption.SKIP_ALL,
}


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Import Orbit members into a note vault")
    subparsers = parser.add_subparsers(dest="command", required=True)

    import_cmd = subparsers.add_parser("import", help="Import workspace members")
    import_cmd.add_argument(
        "--orbit-id",
        type=str,
        help="Import a single member by Orbit id instead of the whole workspace",
    )
    import_cmd.add_argument(
        "--dest-name",
        type=str,
        help="Note name to write to instead of people.<name>",
    )
    import_cmd.add_argument(
        "--overwrite-all",
        action="store_true",
        help="Overwrite every conflicting note without asking",
    )
    import_cmd.add_argument(
        "--vault",
        type=str,
        default=DEFAULT_VAULT_NAME,
        help="Vault to import into (default: %(default)s)",
    )
    import_cmd.add_argument(
        "--decision",
        dest="decisions",
        action="append",
        choices=sorted(_DECISION_CHOICES),
        default=[],
        help="Answer for the next conflict, in queue order; repeat for more",
    )
    import_cmd.add_argument(
        "--frontmatter",
        action="append",
        default=[],
        metavar="KEY=VALUE",
        help="Extra metadata written to every imported note; repeat for more",
    )
    import_cmd.add_argument(
        "--workers",
        type=int,
        help="Concurrent note updates (defaults to config)",
    )

    show = subparsers.add_parser("show", help="Print the metadata of a stored note")
    show.add_argument("fname", type=str, help="Note name, e.g. people.alice")
    show.add_argument(
        "--vault",
        type=str,
        default=DEFAULT_VAULT_NAME,
        help="Vault to read from (default: %(default)s)",
    )

    return parser.parse_args(list(argv))


def _parse_frontmatter(pairs: Sequence[str]) -> dict[str, Any]:
    frontmatter: dict[str, Any] = {}
    for pair in pairs:
        key, separator, value = pair.partition("=")
        if not separator or not key.strip():
            raise ValueError(f"Invalid frontmatter entry {pair!r}; expected KEY=VALUE")
        frontmatter[key.strip()] = value
    return frontmatter


def _decision_source(args: argparse.Namespace) -> DecisionSource | None:
    if args.overwrite_all:
        return None
    if args.decisions:
        return ScriptedDecisionSource([_DECISION_CHOICES[value] for value in args.decisions])
    return PromptDecisionSource()


def _run_import(args: argparse.Namespace) -> None:
    options = load_import_options(
        orbit_id=args.orbit_id,
        dest_name=args.dest_name,
        overwrite_all=args.overwrite_all,
        vault_name=args.vault,
        frontmatter=_parse_frontmatter(args.frontmatter),
        update_workers=args.workers,
    )
    result = import_orbit_members(options, decide=_decision_source(args))
    log.info(
        "Import finished: fetched=%s, created=%s, updated=%s, conflicts=%s, "
        "overwritten=%s, skipped=%s",
        result.fetched,
        len(result.created),
        len(result.updated),
        result.conflicts,
        result.overwritten,
        result.skipped,
    )


def _run_show(args: argparse.Namespace) -> None:
    note = read_note(args.fname, vault_name=args.vault)
    if note is None:
        raise LookupError(f"No note named {args.fname} in vault {args.vault}")
    print(json.dumps(note.custom, indent=2, default=str))  # noqa: T201


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    configure_logging()
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    try:
        parsed_args = _parse_args(args_list)
    except ValueError:
        log.exception("CLI validation error")
        sys.exit(2)

    try:
        if parsed_args.command == "import":
            _run_import(parsed_args)
        elif parsed_args.command == "show":
            _run_show(parsed_args)
        else:
            raise ValueError(f"Unsupported command: {parsed_args.command}")  # noqa: TRY301
    except (ConfigurationError, ValueError) as exc:
        log.error("Invalid input: %s", exc)  # noqa: TRY400
        sys.exit(2)
    except Exception:
        log.exception("Fatal error during import")
        sys.exit(1)


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Handle SIGINT (Ctrl+C) gracefully."""
    log.info("Closed by user (Ctrl+C)")
    sys.exit(0)


def run() -> None:
    load_dotenv()
    signal(SIGINT, sigint_handler)
    main()


if __name__ == "__main__":
    run()
