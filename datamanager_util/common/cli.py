from __future__ import annotations

import argparse
import logging

from datamanager_util.common.schema import ACCOUNT_TYPES, Destination, build_destination

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(level: str) -> None:
    logging.basicConfig(level=level.upper(), format=LOG_FORMAT)


def add_common_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--operating-account-type",
        required=True,
        choices=ACCOUNT_TYPES,
        help="Account type of the operating account",
    )
    parser.add_argument(
        "--operating-account-id", required=True, help="ID of the operating account"
    )
    parser.add_argument("--login-account-type", choices=ACCOUNT_TYPES, default=None)
    parser.add_argument("--login-account-id", default=None)
    parser.add_argument("--linked-account-type", choices=ACCOUNT_TYPES, default=None)
    parser.add_argument("--linked-account-id", default=None)
    parser.add_argument(
        "--validate-only",
        choices=["true", "false"],
        default="true",
        help="Validate the request without applying it (default: true)",
    )
    parser.add_argument("--config", default=None, help="Optional client YAML config")
    parser.add_argument("--log-level", default="INFO")


def destination_from_args(
    parser: argparse.ArgumentParser,
    args: argparse.Namespace,
    product_destination_id: str,
) -> Destination:
    """Build the destination, rejecting half-specified login or linked accounts."""
    if (args.login_account_type is None) != (args.login_account_id is None):
        parser.error(
            "Must specify either both or neither of login account type and login account ID"
        )
    if (args.linked_account_type is None) != (args.linked_account_id is None):
        parser.error(
            "Must specify either both or neither of linked account type and linked account ID"
        )
    return build_destination(
        args.operating_account_type,
        args.operating_account_id,
        product_destination_id,
        login_account_type=args.login_account_type,
        login_account_id=args.login_account_id,
        linked_account_type=args.linked_account_type,
        linked_account_id=args.linked_account_id,
    )


def parse_validate_only(value: str) -> bool:
    return value == "true"


__all__ = [
    "add_common_arguments",
    "configure_logging",
    "destination_from_args",
    "parse_validate_only",
]
