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
from datamanager_util.ingest.audience import (
    build_audience_members,
    build_audience_members_request,
    read_member_data_file,
)

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Format, hash and send audience members read from a CSV file."
    )
    add_common_arguments(parser)
    parser.add_argument("--audience-id", required=True, help="ID of the destination audience")
    parser.add_argument(
        "--csv-file",
        required=True,
        help="CSV with one member per row and email_*/phone_* columns",
    )
    return parser


def run(
    destination: Destination,
    csv_file: str,
    *,
    validate_only: bool,
    config_path: str | None = None,
    client: IngestionClient | None = None,
) -> int:
    config = load_client_config(config_path)
    records = read_member_data_file(csv_file)
    members = build_audience_members(records, config.encoding)
    logger.info("members_read=%d members_valid=%d", len(records), len(members))

    request = build_audience_members_request(
        destination,
        members,
        encoding=config.encoding,
        validate_only=validate_only,
    )
    client = client or IngestionClient.from_config(config)
    try:
        response = client.ingest_audience_members(request)
    except httpx.HTTPError as exc:
        logger.error("Error sending request: %s", exc)
        return 1
    print("Response:\n" + dump_json(response))
    return 0


def main() -> None:
    parser = build_parser()
    args = parser.parse_args()
    configure_logging(args.log_level)
    destination = destination_from_args(parser, args, args.audience_id)
    raise SystemExit(
        run(
            destination,
            args.csv_file,
            validate_only=parse_validate_only(args.validate_only),
            config_path=args.config,
        )
    )


if __name__ == "__main__":
    main()
