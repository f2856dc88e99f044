from __future__ import annotations

import argparse
import logging

import httpx

from datamanager_util.common.cli import (
    add_common_arguments,
    configure_logging,
    destination_from_args,
    parse_validate_only,
)
from datamanager_util.common.client import IngestionClient
from datamanager_util.common.config import load_client_config
from datamanager_util.common.io import dump_json
from datamanager_util.common.schema import Destination
from datamanager_util.ingest.events import (
    build_events,
    build_events_request,
    read_event_data_file,
)

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Format, hash and send conversion events read from a JSON file."
    )
    add_common_arguments(parser)
    parser.add_argument(
        "--conversion-action-id", required=True, help="ID of the conversion action"
    )
    parser.add_argument("--json-file", required=True, help="JSON array of event objects")
    return parser


def run(
    destination: Destination,
    json_file: str,
    *,
    validate_only: bool,
    config_path: str | None = None,
    client: IngestionClient | None = None,
) -> int:
    config = load_client_config(config_path)
    records = read_event_data_file(json_file)
    events = build_events(records, config.encoding)
    logger.info("events_read=%d events_valid=%d", len(records), len(events))
    if not events:
        logger.warning("No valid events to send.")
        return 0

    request = build_events_request(
        destination,
        events,
        encoding=config.encoding,
        validate_only=validate_only,
    )
    print("Request:\n" + dump_json(request.to_payload()))
    client = client or IngestionClient.from_config(config)
    try:
        response = client.ingest_events(request)
    except httpx.HTTPError as exc:
        logger.error("Error sending request: %s", exc)
        return 1
    print("Response:\n" + dump_json(response))
    return 0


def main() -> None:
    parser = build_parser()
    args = parser.parse_args()
    configure_logging(args.log_level)
    destination = destination_from_args(parser, args, args.conversion_action_id)
    raise SystemExit(
        run(
            destination,
            args.json_file,
            validate_only=parse_validate_only(args.validate_only),
            config_path=args.config,
        )
    )


if __name__ == "__main__":
    main()
