"""CLI entry point for publishing a persisted report directory."""

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path
from typing import Any

from chalisha_reporter.config import load_host_app_name
from chalisha_reporter.uploaders.loading import load_uploader_manifest
from chalisha_reporter.uploaders.publisher import publish_directory, remote_root
from chalisha_reporter.writer import read_summary


def format_output(
    run_id: str, report_dir: Path, remote_path: str, uploaded: bool
) -> dict[str, Any]:
    """Format the publish outcome for JSON output."""
    return {
        "run_id": run_id,
        "report_dir": str(report_dir),
        "remote_path": remote_path,
        "status": "uploaded" if uploaded else "failed",
    }


async def run(
    uploader_key: str,
    uploader_config_json: str,
    report_dir: Path,
    result_file_name: str = "result.json",
    app_name: str | None = None,
) -> int:
    """Publish report_dir and return exit code."""
    log = logging.getLogger("chalisha_reporter")

    log.info("Loading uploader: %s", uploader_key)
    manifest = load_uploader_manifest(uploader_key)

    config_dict = json.loads(uploader_config_json)
    config = manifest.config_cls(**config_dict)

    summary = read_summary(report_dir / result_file_name)
    if app_name is None:
        app_name = load_host_app_name(Path.cwd())

    remote_path = remote_root(app_name, summary.run_id)
    log.info("Publishing run %s to %s", summary.run_id, remote_path)

    uploaded = await publish_directory(manifest, config, report_dir, remote_path)

    output = format_output(summary.run_id, report_dir, remote_path, uploaded)
    print(json.dumps(output, indent=2))

    return 0 if uploaded else 1


def main() -> None:
    """CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Publish a test report directory to remote storage"
    )
    parser.add_argument(
        "--uploader",
        required=True,
        help="Uploader key (azure-blob-storage)",
    )
    parser.add_argument(
        "--uploader-config",
        required=True,
        help="JSON configuration for the uploader",
    )
    parser.add_argument(
        "--report-dir",
        type=Path,
        default=Path("reports/chalisha-reporter"),
        help="Report directory written during the test run",
    )
    parser.add_argument(
        "--result-file-name",
        default="result.json",
        help="Name of the result file holding the run ID",
    )
    parser.add_argument(
        "--app-name",
        default=None,
        help="Application name (defaults to the name in ./pyproject.toml)",
    )

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )

    exit_code = asyncio.run(
        run(
            uploader_key=args.uploader,
            uploader_config_json=args.uploader_config,
            report_dir=args.report_dir.resolve(),
            result_file_name=args.result_file_name,
            app_name=args.app_name,
        )
    )
    sys.exit(exit_code)


if __name__ == "__main__":  # pragma: no cover
    main()
