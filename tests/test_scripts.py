from __future__ import annotations

import json
from pathlib import Path

import httpx
import pytest

from datamanager_util.common.client import AsyncIngestionClient, IngestionClient
from datamanager_util.common.schema import build_destination
from scripts import ingest_audience_members, ingest_events


def _recording_client(status: int = 200) -> tuple[IngestionClient, list[dict]]:
    bodies: list[dict] = []

    def handler(request: httpx.Request) -> httpx.Response:
        bodies.append(json.loads(request.content.decode("utf-8")))
        return httpx.Response(status, json={"requestId": "r-1"})

    inner = httpx.AsyncClient(
        base_url="http://test", transport=httpx.MockTransport(handler), timeout=1.0
    )
    return IngestionClient(AsyncIngestionClient("http://test", timeout=1.0, client=inner)), bodies


def test_ingest_audience_members_run(tmp_path: Path, capsys) -> None:  # noqa: ANN001
    csv_path = tmp_path / "members.csv"
    csv_path.write_text(
        "email_1,phone_1\nalexz@example.com,\n,not a phone\n",
        encoding="utf-8",
    )
    client, bodies = _recording_client()

    exit_code = ingest_audience_members.run(
        build_destination("GOOGLE_ADS", "123", "aud-1"),
        str(csv_path),
        validate_only=True,
        client=client,
    )

    assert exit_code == 0
    assert len(bodies) == 1
    assert bodies[0]["audienceMembers"] == [
        {
            "userData": {
                "userIdentifiers": [
                    {
                        "emailAddress": (
                            "509e933019bb285a134a9334b8bb679dff79d0ce023d529af4bd744d47b4fd8a"
                        )
                    }
                ]
            }
        }
    ]
    assert bodies[0]["encoding"] == "HEX"
    assert '"requestId": "r-1"' in capsys.readouterr().out


def test_ingest_events_run_uses_config_encoding(tmp_path: Path) -> None:
    json_path = tmp_path / "events.json"
    json_path.write_text(
        json.dumps(
            [
                {
                    "timestamp": "2025-01-02T03:04:05Z",
                    "transactionId": "t1",
                    "emails": ["alexz@example.com"],
                }
            ]
        ),
        encoding="utf-8",
    )
    config_path = tmp_path / "config.yaml"
    config_path.write_text("encoding: base64\n", encoding="utf-8")
    client, bodies = _recording_client()

    exit_code = ingest_events.run(
        build_destination("GOOGLE_ADS", "123", "conv-1"),
        str(json_path),
        validate_only=False,
        config_path=str(config_path),
        client=client,
    )

    assert exit_code == 0
    body = bodies[0]
    assert body["encoding"] == "BASE64"
    assert body["validateOnly"] is False
    assert body["events"][0]["userData"]["userIdentifiers"] == [
        {"emailAddress": "UJ6TMBm7KFoTSpM0uLtnnf950M4CPVKa9L10TUe0/Yo="}
    ]


def test_ingest_events_run_reports_http_error(tmp_path: Path) -> None:
    json_path = tmp_path / "events.json"
    json_path.write_text(
        json.dumps([{"timestamp": "2025-01-02T03:04:05Z", "transactionId": "t1"}]),
        encoding="utf-8",
    )
    client, _ = _recording_client(status=400)

    exit_code = ingest_events.run(
        build_destination("GOOGLE_ADS", "123", "conv-1"),
        str(json_path),
        validate_only=True,
        client=client,
    )

    assert exit_code == 1


def test_parser_rejects_half_specified_login_account() -> None:
    parser = ingest_audience_members.build_parser()
    args = parser.parse_args(
        [
            "--operating-account-type",
            "GOOGLE_ADS",
            "--operating-account-id",
            "123",
            "--audience-id",
            "aud-1",
            "--csv-file",
            "members.csv",
            "--login-account-type",
            "DATA_PARTNER",
        ]
    )

    with pytest.raises(SystemExit):
        ingest_audience_members.destination_from_args(parser, args, args.audience_id)


def test_parser_rejects_bad_validate_only() -> None:
    parser = ingest_events.build_parser()
    with pytest.raises(SystemExit):
        parser.parse_args(
            [
                "--operating-account-type",
                "GOOGLE_ADS",
                "--operating-account-id",
                "123",
                "--conversion-action-id",
                "c-1",
                "--json-file",
                "events.json",
                "--validate-only",
                "maybe",
            ]
        )


def test_ingest_events_run_sends_nothing_when_all_events_skipped(tmp_path: Path) -> None:
    json_path = tmp_path / "events.json"
    json_path.write_text(json.dumps([{"transactionId": "no-timestamp"}]), encoding="utf-8")
    client, bodies = _recording_client(status=400)

    exit_code = ingest_events.run(
        build_destination("GOOGLE_ADS", "123", "conv-1"),
        str(json_path),
        validate_only=True,
        client=client,
    )

    assert exit_code == 0
    assert bodies == []
