import json
from unittest import mock

from typer.testing import CliRunner

import s3sh.services.s3.cli.buckets as buckets_cli
from s3sh.core.models import AppContext
from s3sh.main import app

runner = CliRunner()

TRANSITIONS = '[{"days": 30, "storage_class": "STANDARD_IA"}]'


def test_create_bucket_with_configuration(s3_mock):
    result = runner.invoke(
        app, ["bucket", "create", "config-bucket", "--private", "--versioning"]
    )

    assert result.exit_code == 0, result.output
    assert "created successfully" in result.output
    assert s3_mock.get_bucket_versioning(Bucket="config-bucket")["Status"] == "Enabled"
    block = s3_mock.get_public_access_block(Bucket="config-bucket")
    assert all(block["PublicAccessBlockConfiguration"].values())


def test_create_bucket_rejects_invalid_name(s3_mock):
    result = runner.invoke(app, ["bucket", "create", "UPPERCASE"])

    assert result.exit_code == 1
    assert "Error:" in result.output
    assert s3_mock.list_buckets()["Buckets"] == []


def test_create_bucket_rejects_unknown_encryption_before_any_call(s3_mock):
    result = runner.invoke(
        app, ["bucket", "create", "enc-bucket", "--encryption", "DES"]
    )

    assert result.exit_code == 2
    assert s3_mock.list_buckets()["Buckets"] == []


def test_update_replaces_tags(s3_mock):
    s3_mock.create_bucket(Bucket="tag-bucket")
    s3_mock.put_bucket_tagging(
        Bucket="tag-bucket", Tagging={"TagSet": [{"Key": "Old", "Value": "1"}]}
    )

    result = runner.invoke(
        app,
        ["bucket", "update", "tag-bucket", "--tag", "Team=data", "--tag", "Env=prod"],
    )

    assert result.exit_code == 0, result.output
    tag_set = s3_mock.get_bucket_tagging(Bucket="tag-bucket")["TagSet"]
    assert {t["Key"]: t["Value"] for t in tag_set} == {"Team": "data", "Env": "prod"}


def test_update_rejects_malformed_tag(s3_mock):
    result = runner.invoke(app, ["bucket", "update", "tag-bucket", "--tag", "oops"])

    assert result.exit_code == 2


def test_update_without_settings_does_nothing():
    with mock.patch.object(buckets_cli, "run_operation") as mock_run:
        result = runner.invoke(app, ["bucket", "update", "some-bucket"])

    assert result.exit_code == 0
    assert "Nothing to update." in result.output
    mock_run.assert_not_called()


def test_update_missing_bucket_fails(s3_mock):
    result = runner.invoke(app, ["bucket", "update", "ghost-bucket", "--versioning"])

    assert result.exit_code == 1
    assert "versioning" in result.output


def test_lifecycle_rule(s3_mock):
    s3_mock.create_bucket(Bucket="lifecycle-bucket")

    result = runner.invoke(
        app,
        [
            "bucket",
            "lifecycle",
            "lifecycle-bucket",
            "--id",
            "rule-1",
            "--prefix",
            "logs/",
            "--transitions",
            TRANSITIONS,
            "--expiration",
            "365",
        ],
    )

    assert result.exit_code == 0, result.output
    rules = s3_mock.get_bucket_lifecycle_configuration(Bucket="lifecycle-bucket")[
        "Rules"
    ]
    assert [r["ID"] for r in rules] == ["rule-1"]
    assert rules[0]["Status"] == "Enabled"


def test_lifecycle_rule_disabled(s3_mock):
    s3_mock.create_bucket(Bucket="lifecycle-bucket")

    result = runner.invoke(
        app,
        [
            "bucket",
            "lifecycle",
            "lifecycle-bucket",
            "--id",
            "rule-1",
            "--transitions",
            "[]",
            "--expiration",
            "30",
            "--disabled",
        ],
    )

    assert result.exit_code == 0, result.output
    rules = s3_mock.get_bucket_lifecycle_configuration(Bucket="lifecycle-bucket")[
        "Rules"
    ]
    assert rules[0]["Status"] == "Disabled"


def test_lifecycle_invalid_json():
    with mock.patch("s3sh.core.runner.S3Client") as mock_client_cls:
        result = runner.invoke(
            app,
            [
                "bucket",
                "lifecycle",
                "lifecycle-bucket",
                "--id",
                "rule-1",
                "--transitions",
                "invalid-json",
            ],
        )

    assert result.exit_code == 1
    assert "Invalid transitions JSON" in result.output
    assert mock_client_cls.return_value.method_calls == []


def test_list_buckets_json(s3_mock):
    s3_mock.create_bucket(Bucket="listed-bucket")

    result = runner.invoke(app, ["bucket", "list", "--json"])

    assert result.exit_code == 0, result.output
    data = json.loads(result.stdout)
    assert data[0]["name"] == "listed-bucket"


def test_config_shows_region(s3_mock):
    s3_mock.create_bucket(Bucket="cfg-bucket")

    result = runner.invoke(app, ["bucket", "config", "cfg-bucket", "--json"])

    assert result.exit_code == 0, result.output
    data = json.loads(result.stdout)
    assert data["region"] == "us-east-1"
    assert data["lifecycle_rules"] == []


def test_global_options_reach_runner():
    with mock.patch.object(buckets_cli, "run_operation") as mock_run:
        mock_run.return_value = 0
        result = runner.invoke(
            app, ["--region", "eu-west-1", "--profile", "ops", "bucket", "list"]
        )

    assert result.exit_code == 0
    args, _ = mock_run.call_args
    assert args[0] == AppContext(region="eu-west-1", profile="ops", verbose=False)


def test_non_zero_runner_code_becomes_exit_code():
    with mock.patch.object(buckets_cli, "run_operation") as mock_run:
        mock_run.return_value = 1
        result = runner.invoke(app, ["bucket", "list"])

    assert result.exit_code == 1


def test_update_reports_bracketed_tag_literally(s3_mock):
    s3_mock.create_bucket(Bucket="markup-bucket")

    result = runner.invoke(
        app,
        ["bucket", "update", "markup-bucket", "--versioning", "--tag", "note=[/x]"],
    )

    assert result.exit_code == 0, result.output
    assert "tags updated: note=[/x]" in result.output
    tag_set = s3_mock.get_bucket_tagging(Bucket="markup-bucket")["TagSet"]
    assert tag_set == [{"Key": "note", "Value": "[/x]"}]


def test_update_does_not_interpret_tag_markup(s3_mock):
    s3_mock.create_bucket(Bucket="markup-bucket")

    result = runner.invoke(
        app, ["bucket", "update", "markup-bucket", "--tag", "note=[bold]x"]
    )

    assert result.exit_code == 0, result.output
    assert "note=[bold]x" in result.output


def test_config_table_prints_bracketed_tag_literally(s3_mock):
    s3_mock.create_bucket(Bucket="markup-bucket")
    s3_mock.put_bucket_tagging(
        Bucket="markup-bucket", Tagging={"TagSet": [{"Key": "k", "Value": "[/x]"}]}
    )

    result = runner.invoke(app, ["bucket", "config", "markup-bucket"])

    assert result.exit_code == 0, result.output
    assert "k=[/x]" in result.output


def test_help_explains_global_option_placement():
    result = runner.invoke(app, ["--help"])

    assert result.exit_code == 0
    assert "go before the command group" in " ".join(result.output.split())
