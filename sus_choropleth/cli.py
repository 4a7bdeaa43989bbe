"""CLI entrypoint for the SIH/SUS municipal choropleth pipeline."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import TextIO

from sus_choropleth.common.config_loader import load_pipeline_config
from sus_choropleth.common.constants import COMMANDS, EXIT_HARD_FAIL, EXIT_SUCCESS, SUPPORTED_REGIONS
from sus_choropleth.common.errors import PipelineError
from sus_choropleth.common.ids import generate_run_id
from sus_choropleth.common.logging import build_logger, log_event
from sus_choropleth.pipeline.run import ingest, run_pipeline


def parse_args(argv: list[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("command", nargs="?", default="render", choices=COMMANDS)
    parser.add_argument("--region", default=None, choices=SUPPORTED_REGIONS)
    parser.add_argument("--year", type=int, default=None)
    parser.add_argument("--input", default=None)
    parser.add_argument("--run-id", default=None)
    parser.add_argument("--config-dir", default="./config")
    parser.add_argument("--overlay-config-dir", default=None)
    parser.add_argument("--data-dir", default="./data")
    parser.add_argument("--output-dir", default=None)
    parser.add_argument("--log-level", default="INFO", choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    return parser.parse_args(argv)


def _overrides(args: argparse.Namespace) -> dict:
    overrides: dict = {}
    if args.region:
        # The configured display name belongs to the configured region.
        overrides["region"] = {"code": args.region, "name": None}
    if args.year is not None:
        overrides["year"] = args.year
    if args.input:
        overrides["input"] = {"path": args.input}
    return overrides


def _print_records(records, stream: TextIO) -> None:
    for record in records:
        stream.write(
            f"{record.admin_code};{record.region_code};{record.display_name};"
            f"{record.normalization_key};{record.metric_value}\n"
        )


def run_command(args: argparse.Namespace, stream: TextIO | None = None) -> int:
    out = stream if stream is not None else sys.stdout
    run_id = args.run_id or generate_run_id()
    data_dir = Path(args.data_dir)
    output_dir = Path(args.output_dir) if args.output_dir else data_dir / "out"

    logger = build_logger(run_id, data_dir=data_dir, level=args.log_level)
    try:
        config = load_pipeline_config(
            Path(args.config_dir),
            overlay_config_dir=Path(args.overlay_config_dir) if args.overlay_config_dir else None,
            overrides=_overrides(args),
        )
        if args.command == "records":
            _header, records = ingest(config, run_id=run_id)
            _print_records(records, out)
        else:
            run_pipeline(
                config,
                output_dir=output_dir,
                render=args.command == "render",
                run_id=run_id,
                stream=out,
            )
    except PipelineError as exc:
        log_event(
            logger,
            f"run failed: {exc}",
            level=logging.ERROR,
            run_id=run_id,
            stage=args.command,
            event="RUN_FAIL",
            status="error",
            error_code=exc.error_code,
        )
        return EXIT_HARD_FAIL
    except Exception as exc:
        log_event(
            logger,
            f"unexpected failure: {exc}",
            level=logging.ERROR,
            run_id=run_id,
            stage=args.command,
            event="RUN_FAIL",
            status="error",
            error_code="UNEXPECTED_ERROR",
        )
        return EXIT_HARD_FAIL

    log_event(logger, "run complete", run_id=run_id, stage=args.command, event="RUN_END", status="ok")
    return EXIT_SUCCESS


def main(argv: list[str] | None = None) -> int:
    args = parse_args(sys.argv[1:] if argv is None else argv)
    return run_command(args)


if __name__ == "__main__":
    raise SystemExit(main())
