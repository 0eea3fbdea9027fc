from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from signal import SIGINT, signal
from typing import TYPE_CHECKING, Any

from dotenv import load_dotenv
from pydantic import BaseModel, ValidationError

from relsync.adapters.sync_api import (
    CreateRelationshipPayload,
    HistoryMigrationResponse,
    MergePrisonerRestrictionsPayload,
    MergeRelationshipsPayload,
    MigrateHistoryPayload,
    MigratePrisonerRestrictionsPayload,
    PrisonerMergePayload,
    PrisonerMergeResponse,
    RelationshipResponse,
    RelationshipsChangedResponse,
    ResetPrisonerRestrictionsPayload,
    ResetRelationshipsPayload,
    RestrictionsChangedResponse,
    SingleActiveMergeResponse,
    SingleActiveValuePayload,
    SingleActiveValueResponse,
    snapshot_document,
    status_for,
    translate_create_relationship,
    translate_merge_prisoner_restrictions,
    translate_merge_relationships,
    translate_migrate_history,
    translate_migrate_prisoner_restrictions,
    translate_prisoner_merge,
    translate_reset_prisoner_restrictions,
    translate_reset_relationships,
    translate_single_active_value,
)
from relsync.app import (
    create_relationship,
    merge_domestic_status,
    merge_number_of_children,
    merge_prisoner,
    merge_prisoner_restrictions,
    merge_relationships,
    migrate_domestic_status,
    migrate_number_of_children,
    migrate_prisoner_restrictions,
    reconcile_contact,
    reconcile_prisoner,
    replace_prisoner_restrictions_on_merge,
    reset_prisoner_restrictions,
    reset_relationships,
    update_domestic_status,
    update_number_of_children,
)
from relsync.config import configure_logging
from relsync.domain.errors import RequestValidationError

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType

log = logging.getLogger(__name__)

_FILE_COMMANDS: dict[str, str] = {
    "merge-relationships": "Merge the relationships of two prisoner numbers",
    "reset-relationships": "Replace all relationships of one prisoner number",
    "create-relationship": "Create a single prisoner contact relationship",
    "merge-prisoner": "Merge number of children, domestic status and prisoner restrictions",
    "reset-restrictions": "Replace all prisoner restrictions of one prisoner number",
    "merge-restrictions": "Move every prisoner restriction of the removed prisoner to the kept one",
    "replace-restrictions": "Replace both prisoners' restrictions with a list under the kept one",
    "merge-domestic-status": "Merge the domestic status history of two prisoner numbers",
    "merge-number-of-children": "Merge the number-of-children history of two prisoner numbers",
    "update-domestic-status": "Record a new current domestic status",
    "update-number-of-children": "Record a new current number of children",
    "migrate-domestic-status": "Load domestic status history from the legacy system",
    "migrate-number-of-children": "Load number-of-children history from the legacy system",
    "migrate-restrictions": "Load prisoner restrictions from the legacy system",
}


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Merge, reset and reconcile prisoner contacts")
    subparsers = parser.add_subparsers(dest="command", required=True)

    for name, help_text in _FILE_COMMANDS.items():
        command = subparsers.add_parser(name, help=help_text)
        command.add_argument(
            "--file",
            type=Path,
            required=True,
            help="Path to a JSON request body ('-' reads standard input)",
        )

    contact = subparsers.add_parser("reconcile-contact", help="Print a contact snapshot")
    contact.add_argument("--contact-id", type=int, required=True, help="Contact identifier")

    prisoner = subparsers.add_parser("reconcile-prisoner", help="Print a prisoner snapshot")
    prisoner.add_argument(
        "--prisoner-number",
        type=str,
        required=True,
        help="Prisoner number, e.g. A1234BC",
    )

    return parser.parse_args(list(argv))


def _read_payload[TPayload: BaseModel](path: Path, model: type[TPayload]) -> TPayload:
    raw = sys.stdin.read() if str(path) == "-" else path.read_text(encoding="utf-8")
    return model.model_validate_json(raw)


def _emit(document: dict[str, Any]) -> None:
    sys.stdout.write(json.dumps(document, indent=2, sort_keys=True))
    sys.stdout.write("\n")


def _run(args: argparse.Namespace) -> dict[str, Any]:  # noqa: C901, PLR0911, PLR0912
    command: str = args.command
    if command == "merge-relationships":
        payload = _read_payload(args.file, MergeRelationshipsPayload)
        outcome = merge_relationships(translate_merge_relationships(payload))
        return RelationshipsChangedResponse.model_validate(outcome.result).to_document()
    if command == "reset-relationships":
        payload = _read_payload(args.file, ResetRelationshipsPayload)
        outcome = reset_relationships(translate_reset_relationships(payload))
        return RelationshipsChangedResponse.model_validate(outcome.result).to_document()
    if command == "create-relationship":
        payload = _read_payload(args.file, CreateRelationshipPayload)
        created = create_relationship(translate_create_relationship(payload))
        return RelationshipResponse.model_validate(created.result).to_document()
    if command == "merge-prisoner":
        payload = _read_payload(args.file, PrisonerMergePayload)
        merged = merge_prisoner(translate_prisoner_merge(payload))
        return PrisonerMergeResponse.model_validate(merged.result).to_document()
    if command == "reset-restrictions":
        payload = _read_payload(args.file, ResetPrisonerRestrictionsPayload)
        reset = reset_prisoner_restrictions(translate_reset_prisoner_restrictions(payload))
        return RestrictionsChangedResponse.model_validate(reset.result).to_document()
    if command == "merge-restrictions":
        payload = _read_payload(args.file, PrisonerMergePayload)
        moved = merge_prisoner_restrictions(translate_prisoner_merge(payload))
        return RestrictionsChangedResponse.model_validate(moved.result).to_document()
    if command == "replace-restrictions":
        payload = _read_payload(args.file, MergePrisonerRestrictionsPayload)
        replaced = replace_prisoner_restrictions_on_merge(
            translate_merge_prisoner_restrictions(payload)
        )
        return RestrictionsChangedResponse.model_validate(replaced.result).to_document()
    if command == "merge-domestic-status":
        payload = _read_payload(args.file, PrisonerMergePayload)
        status_merge = merge_domestic_status(translate_prisoner_merge(payload))
        return SingleActiveMergeResponse.model_validate(status_merge.result).to_document()
    if command == "merge-number-of-children":
        payload = _read_payload(args.file, PrisonerMergePayload)
        children_merge = merge_number_of_children(translate_prisoner_merge(payload))
        return SingleActiveMergeResponse.model_validate(children_merge.result).to_document()
    if command == "update-domestic-status":
        payload = _read_payload(args.file, SingleActiveValuePayload)
        status = update_domestic_status(translate_single_active_value(payload))
        return SingleActiveValueResponse.model_validate(status.result).to_document()
    if command == "update-number-of-children":
        payload = _read_payload(args.file, SingleActiveValuePayload)
        children = update_number_of_children(translate_single_active_value(payload))
        return SingleActiveValueResponse.model_validate(children.result).to_document()
    if command == "migrate-domestic-status":
        payload = _read_payload(args.file, MigrateHistoryPayload)
        migrated = migrate_domestic_status(translate_migrate_history(payload))
        return HistoryMigrationResponse.model_validate(migrated).to_document()
    if command == "migrate-number-of-children":
        payload = _read_payload(args.file, MigrateHistoryPayload)
        migrated = migrate_number_of_children(translate_migrate_history(payload))
        return HistoryMigrationResponse.model_validate(migrated).to_document()
    if command == "migrate-restrictions":
        payload = _read_payload(args.file, MigratePrisonerRestrictionsPayload)
        loaded = migrate_prisoner_restrictions(translate_migrate_prisoner_restrictions(payload))
        return RestrictionsChangedResponse.model_validate(loaded).to_document()
    if command == "reconcile-contact":
        return snapshot_document(reconcile_contact(args.contact_id))
    if command == "reconcile-prisoner":
        return snapshot_document(reconcile_prisoner(args.prisoner_number))
    raise ValueError(f"Unsupported command: {command}")


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    configure_logging()
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    parsed_args = _parse_args(args_list)

    try:
        document = _run(parsed_args)
    except (OSError, ValidationError, RequestValidationError):
        log.exception("Invalid request")
        sys.exit(2)
    except Exception as exc:
        status = status_for(exc)
        log.exception(
            "Fatal error while processing %s (%d %s)",
            parsed_args.command,
            status.value,
            status.phrase,
        )
        sys.exit(1)

    _emit(document)


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Handle SIGINT (Ctrl+C) gracefully."""
    log.info("Closed by user (Ctrl+C)")
    sys.exit(0)


def run() -> None:
    """Console script entry point."""
    load_dotenv()
    signal(SIGINT, sigint_handler)
    main()


if __name__ == "__main__":
    run()
