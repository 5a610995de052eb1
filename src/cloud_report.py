"""
Cloud entrypoint for the GDP x population x CO2 report.

Runs the same report as `report_pipeline`, reading the source CSVs from S3
and writing every artefact back to S3. All cleaning and statistics live in
the transformations / analysis / reporting packages; this module only wires
the S3 adapter.

Environment variables
---------------------

- REPORT_S3_BUCKET
    Bucket holding the sources under REPORT_INPUT_DIR and receiving the
    artefacts under REPORT_OUTPUT_DIR.

- REPORT_S3_BASE_PREFIX (optional)
    Logical base prefix under the bucket.

Every other REPORT_* variable from `settings` applies as well.

Lambda handler
--------------

    Handler: cloud_report.lambda_handler

The event payload may optionally include:

    {
      "test_year": 2018,
      "group_size": 100
    }
"""

from __future__ import annotations

import json
from typing import Any, Dict, List, Optional

from adapters import S3StorageAdapter
from report_pipeline import run_report
from settings import S3_BUCKET_ENV, ReportSettings


def _build_s3_storage(settings: ReportSettings, *, boto3_client: Any = None) -> S3StorageAdapter:
    if not settings.s3_bucket:
        raise RuntimeError(
            f"Missing required environment variable {S3_BUCKET_ENV!r} for S3 bucket name.",
        )
    return S3StorageAdapter(
        bucket=settings.s3_bucket,
        base_prefix=settings.s3_base_prefix,
        boto3_client=boto3_client,
    )


def run_cloud_report(
    settings: Optional[ReportSettings] = None,
    *,
    boto3_client: Any = None,
) -> Dict[str, List[str]]:
    """Run the report with S3 as both source and destination."""
    settings = settings or ReportSettings.from_env()
    storage = _build_s3_storage(settings, boto3_client=boto3_client)
    return run_report(storage, settings, step_prefix="cloud")


def lambda_handler(event, context):  # pragma: no cover - AWS entrypoint
    """
    AWS Lambda handler for the report.

    The incoming `event` may contain `test_year` and `group_size`; the rest
    of the configuration comes from environment variables.
    """
    event = event or {}
    settings = ReportSettings.from_env().with_overrides(
        test_year=event.get("test_year"),
        group_size=event.get("group_size"),
    )

    artefacts = run_cloud_report(settings)

    return {
        "statusCode": 200,
        "body": json.dumps(
            {
                "message": "Report generated successfully.",
                "artefacts": artefacts,
            }
        ),
    }


__all__ = ["run_cloud_report", "lambda_handler"]
