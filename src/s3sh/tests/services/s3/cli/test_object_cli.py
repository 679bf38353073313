import json

import pytest
from typer.testing import CliRunner

from s3sh.main import app

runner = CliRunner()


@pytest.fixture
def bucket(s3_mock):
    s3_mock.create_bucket(Bucket="test-bucket")
    return "test-bucket"


def test_upload_then_list(s3_mock, bucket, tmp_path):
    source = tmp_path / "hello.txt"
    source.write_text("hello world")

    upload = runner.invoke(
        app, ["object", "upload", bucket, str(source), "--key", "test-file.txt"]
    )
    listing = runner.invoke(app, ["object", "list", bucket, "--json"])

    assert upload.exit_code == 0, upload.output
    assert listing.exit_code == 0, listing.output
    data = json.loads(listing.stdout)
    assert data[0]["key"] == "test-file.txt"
    assert data[0]["size"] == 11


def test_list_empty_bucket(bucket):
    result = runner.invoke(app, ["object", "list", bucket])

    assert result.exit_code == 0
    assert "No objects found." in result.output


def test_delete_object(s3_mock, bucket):
    s3_mock.put_object(Bucket=bucket, Key="file-to-delete.txt", Body=b"x")

    result = runner.invoke(app, ["object", "delete", bucket, "file-to-delete.txt"])

    assert result.exit_code == 0, result.output
    assert s3_mock.list_objects_v2(Bucket=bucket).get("KeyCount") == 0


def test_attributes_json(s3_mock, bucket):
    s3_mock.put_object(
        Bucket=bucket, Key="doc.txt", Body=b"abc", ContentType="text/plain"
    )

    result = runner.invoke(app, ["object", "attributes", bucket, "doc.txt", "--json"])

    assert result.exit_code == 0, result.output
    data = json.loads(result.stdout)
    assert data["size"] == 3
    assert data["content_type"] == "text/plain"


def test_attributes_of_missing_object(bucket):
    result = runner.invoke(app, ["object", "attributes", bucket, "missing.txt"])

    assert result.exit_code == 1
    assert "HeadObject" in result.output


def test_list_prints_bracketed_key_literally(s3_mock, bucket):
    s3_mock.put_object(Bucket=bucket, Key="logs/[/x].txt", Body=b"x")

    result = runner.invoke(app, ["object", "list", bucket])

    assert result.exit_code == 0, result.output
    assert "logs/[/x].txt" in result.output


def test_attributes_table_prints_bracketed_key_literally(s3_mock, bucket):
    s3_mock.put_object(Bucket=bucket, Key="[bold]report", Body=b"x")

    result = runner.invoke(app, ["object", "attributes", bucket, "[bold]report"])

    assert result.exit_code == 0, result.output
    assert "[bold]report" in result.output


def test_delete_reports_bracketed_key_literally(s3_mock, bucket):
    s3_mock.put_object(Bucket=bucket, Key="tmp/[/x]", Body=b"x")

    result = runner.invoke(app, ["object", "delete", bucket, "tmp/[/x]"])

    assert result.exit_code == 0, result.output
    assert "Object 'tmp/[/x]' deleted" in result.output
