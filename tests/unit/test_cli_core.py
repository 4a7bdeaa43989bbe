import io
import json

import pytest

from sus_choropleth import cli
from sus_choropleth.cli import parse_args
from sus_choropleth.common.constants import EXIT_HARD_FAIL


def test_parse_args_defaults():
    args = parse_args([])
    assert args.command == "render"
    assert args.region is None
    assert args.year is None
    assert args.overlay_config_dir is None
    assert args.output_dir is None


def test_parse_args_overrides():
    args = parse_args(["records", "--region", "CE", "--year", "2023", "--input", "x.csv"])
    assert args.command == "records"
    assert args.region == "CE"
    assert args.year == 2023
    assert args.input == "x.csv"


def test_parse_args_rejects_unknown_command():
    with pytest.raises(SystemExit):
        parse_args(["all"])


def test_unexpected_exception_is_logged_hard_failure(tmp_path, monkeypatch):
    def explode(*_args, **_kwargs):
        raise RuntimeError("boom")

    monkeypatch.setattr(cli, "load_pipeline_config", explode)
    args = parse_args(["check", "--data-dir", str(tmp_path), "--run-id", "run-boom"])

    assert cli.run_command(args, stream=io.StringIO()) == EXIT_HARD_FAIL

    lines = (tmp_path / "run_meta" / "run-boom.log.jsonl").read_text(encoding="utf-8").splitlines()
    last = json.loads(lines[-1])
    assert last["event"] == "RUN_FAIL"
    assert last["error_code"] == "UNEXPECTED_ERROR"
