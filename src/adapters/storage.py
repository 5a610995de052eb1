from __future__ import annotations

import io
import os
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Iterable, List, Optional

import pandas as pd


class StorageAdapter(ABC):
    """
    Abstraction over where the report reads its sources and writes its
    artefacts (local filesystem, S3).

    Implementations map logical keys such as "data/population.csv" or
    "report/report.md" to physical locations.
    """

    @abstractmethod
    def write_raw(self, key: str, content: bytes) -> str:
        """
        Persist arbitrary bytes at the given key.

        Returns the fully-qualified location string, for example:
        - Local: "report/report.md"
        - S3:    "s3://my-bucket/report/report.md"
        """

    @abstractmethod
    def read_raw(self, key: str) -> bytes:
        """Read raw bytes previously stored at the given key."""

    @abstractmethod
    def list_keys(self, prefix: str) -> List[str]:
        """List logical keys under the given prefix."""

    def read_csv(self, key: str) -> pd.DataFrame:
        """
        Load a delimited file verbatim: every column as string, no NA
        inference. Empty cells come back as "".
        """
        buffer = io.BytesIO(self.read_raw(key))
        return pd.read_csv(buffer, dtype=str, keep_default_na=False, encoding="utf-8-sig")

    def write_csv(self, df: pd.DataFrame, key: str) -> str:
        buffer = io.StringIO()
        df.to_csv(buffer, index=False)
        return self.write_raw(key, buffer.getvalue().encode("utf-8"))


class LocalStorageAdapter(StorageAdapter):
    """
    Local filesystem-backed storage adapter.

    Keys are treated as relative paths under a root directory.
    Example:
        root_dir = Path(".")
        key      = "data/population.csv"
        -> actual path: ./data/population.csv
    """

    def __init__(self, root_dir: Path | str = ".") -> None:
        self.root_dir = Path(root_dir)

    def _resolve(self, key: str) -> Path:
        path = self.root_dir / key
        path.parent.mkdir(parents=True, exist_ok=True)
        return path

    def write_raw(self, key: str, content: bytes) -> str:
        path = self._resolve(key)
        with path.open("wb") as f:
            f.write(content)
        return str(path)

    def read_raw(self, key: str) -> bytes:
        path = self.root_dir / key
        with path.open("rb") as f:
            return f.read()

    def list_keys(self, prefix: str) -> List[str]:
        base = self.root_dir / prefix
        if not base.exists():
            return []

        keys: List[str] = []
        for path in base.rglob("*"):
            if path.is_file():
                rel = path.relative_to(self.root_dir)
                keys.append(str(rel).replace(os.sep, "/"))
        return sorted(keys)


class S3StorageAdapter(StorageAdapter):
    """
    S3-backed storage adapter using boto3.

    Keys map directly to S3 object keys under the configured bucket/prefix.
    """

    def __init__(
        self,
        bucket: str,
        *,
        base_prefix: Optional[str] = None,
        boto3_client: Optional["boto3.client"] = None,
    ) -> None:
        if boto3_client is None:
            import boto3  # lazy import to keep local-only runs lighter

            boto3_client = boto3.client("s3")

        self.bucket = bucket
        self.base_prefix = (base_prefix or "").strip("/")
        self._s3 = boto3_client

    def _full_key(self, key: str) -> str:
        key = key.lstrip("/")
        if self.base_prefix:
            return f"{self.base_prefix}/{key}"
        return key

    def write_raw(self, key: str, content: bytes) -> str:
        full_key = self._full_key(key)
        self._s3.put_object(Bucket=self.bucket, Key=full_key, Body=content)
        return f"s3://{self.bucket}/{full_key}"

    def read_raw(self, key: str) -> bytes:
        full_key = self._full_key(key)
        resp = self._s3.get_object(Bucket=self.bucket, Key=full_key)
        return resp["Body"].read()

    def list_keys(self, prefix: str) -> List[str]:
        full_prefix = self._full_key(prefix).rstrip("/") + "/"
        paginator = self._s3.get_paginator("list_objects_v2")
        keys: List[str] = []
        for page in paginator.paginate(Bucket=self.bucket, Prefix=full_prefix):
            contents: Iterable[dict] = page.get("Contents") or []
            for obj in contents:
                key = obj["Key"]
                # logical keys never carry the base prefix
                if self.base_prefix and key.startswith(self.base_prefix + "/"):
                    key = key[len(self.base_prefix) + 1 :]
                keys.append(key)
        return keys


__all__ = ["StorageAdapter", "LocalStorageAdapter", "S3StorageAdapter"]
