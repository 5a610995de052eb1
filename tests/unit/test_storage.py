"""Unit tests for the storage adapters (local filesystem, S3 with a mocked client)."""

import io
from unittest.mock import MagicMock

import pandas as pd
import pytest

from adapters import LocalStorageAdapter, S3StorageAdapter


@pytest.mark.unit
class TestLocalStorageAdapter:

    def test_write_and_read_raw(self, tmp_path):
        storage = LocalStorageAdapter(tmp_path)
        location = storage.write_raw("report/nested/file.bin", b"\x00\x01")

        assert location == str(tmp_path / "report" / "nested" / "file.bin")
        assert storage.read_raw("report/nested/file.bin") == b"\x00\x01"

    def test_read_csv_is_verbatim(self, tmp_path):
        (tmp_path / "data").mkdir()
        (tmp_path / "data" / "src.csv").write_text(
            "Country Name,Country Code,2018 [YR2018]\nNamibia,NAM,..\nChad,TCD,\n",
            encoding="utf-8",
        )
        df = LocalStorageAdapter(tmp_path).read_csv("data/src.csv")

        assert df["2018 [YR2018]"].tolist() == ["..", ""]
        assert df["Country Code"].tolist() == ["NAM", "TCD"]

    def test_write_csv_round_trip(self, tmp_path):
        storage = LocalStorageAdapter(tmp_path)
        storage.write_csv(pd.DataFrame({"a": [1, 2]}), "out/a.csv")
        assert storage.read_csv("out/a.csv")["a"].tolist() == ["1", "2"]

    def test_list_keys(self, tmp_path):
        storage = LocalStorageAdapter(tmp_path)
        storage.write_raw("report/b.png", b"")
        storage.write_raw("report/a.md", b"")

        assert storage.list_keys("report") == ["report/a.md", "report/b.png"]
        assert storage.list_keys("missing") == []


@pytest.mark.unit
class TestS3StorageAdapter:

    def test_keys_are_prefixed(self):
        client = MagicMock()
        storage = S3StorageAdapter("bucket", base_prefix="/reports/", boto3_client=client)

        location = storage.write_raw("report/report.md", b"# title")

        assert location == "s3://bucket/reports/report/report.md"
        client.put_object.assert_called_once_with(
            Bucket="bucket",
            Key="reports/report/report.md",
            Body=b"# title",
        )

    def test_read_csv_from_object_body(self):
        client = MagicMock()
        client.get_object.return_value = {"Body": io.BytesIO(b"Country,Abbreviation,Continent\nChad,TCD,Africa\n")}
        storage = S3StorageAdapter("bucket", boto3_client=client)

        df = storage.read_csv("data/countries_continents.csv")

        client.get_object.assert_called_once_with(Bucket="bucket", Key="data/countries_continents.csv")
        assert df.to_dict("records") == [{"Country": "Chad", "Abbreviation": "TCD", "Continent": "Africa"}]

    def test_list_keys_strips_base_prefix(self):
        client = MagicMock()
        client.get_paginator.return_value.paginate.return_value = [
            {"Contents": [{"Key": "reports/data/a.csv"}, {"Key": "reports/data/b.csv"}]},
            {},
        ]
        storage = S3StorageAdapter("bucket", base_prefix="reports", boto3_client=client)

        assert storage.list_keys("data") == ["data/a.csv", "data/b.csv"]
        client.get_paginator.return_value.paginate.assert_called_once_with(
            Bucket="bucket",
            Prefix="reports/data/",
        )
