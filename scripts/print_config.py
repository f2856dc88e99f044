from __future__ import annotations

import argparse
import json

from datamanager_util.common.config import ClientConfig, load_client_config


def main() -> None:
    parser = argparse.ArgumentParser(description="Load, validate, and print the client config.")
    parser.add_argument("--config", default=None, help="Path to YAML config file")
    args = parser.parse_args()

    config: ClientConfig = load_client_config(args.config)
    print(json.dumps(config.model_dump(mode="json"), indent=2, sort_keys=True))


if __name__ == "__main__":
    main()
