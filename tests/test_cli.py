import json
import os
import subprocess
import sys
from pathlib import Path

import yaml

from pm2openapi.cli import main
from pm2openapi.samples import sample_collection

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"


def run_cli(*args: str, check: bool = True, stdin: str | None = None) -> subprocess.CompletedProcess[str]:
    env = os.environ.copy()
    existing = env.get("PYTHONPATH", "")
    path_entries = [str(SRC)]
    if existing:
        path_entries.append(existing)
    env["PYTHONPATH"] = os.pathsep.join(path_entries)
    env.pop("PM2OPENAPI_FORMAT", None)
    result = subprocess.run(
        [sys.executable, "-m", "pm2openapi.cli", *args],
        cwd=ROOT,
        capture_output=True,
        text=True,
        env=env,
        input=stdin,
    )
    if check and result.returncode != 0:
        raise AssertionError(f"Command failed: {result.stderr}")
    return result


def test_cli_convert_sample_json():
    result = run_cli("convert", "--sample", "--format", "json")
    doc = json.loads(result.stdout)
    assert doc["openapi"] == "3.0.3"
    assert "/books/{bookId}" in doc["paths"]


def test_cli_convert_file_to_yaml(tmp_path: Path):
    collection = tmp_path / "api.postman_collection.json"
    collection.write_text(json.dumps(sample_collection()), encoding="utf-8")
    out = tmp_path / "out" / "openapi.yaml"
    run_cli("convert", "--collection", str(collection), "--out", str(out))
    doc = yaml.safe_load(out.read_text(encoding="utf-8"))
    assert doc["info"]["title"] == "Bookshelf API"


def test_cli_convert_reads_stdin():
    result = run_cli("convert", stdin=json.dumps({"info": {"name": "piped"}, "item": []}))
    assert "title: piped" in result.stdout


def test_cli_convert_reports_parse_failure(tmp_path: Path):
    bad = tmp_path / "bad.json"
    bad.write_text("not-json", encoding="utf-8")
    result = run_cli("convert", "--collection", str(bad), check=False)
    assert result.returncode == 2
    assert "Unable to parse collection JSON" in result.stderr


def test_cli_convert_missing_file(tmp_path: Path):
    result = run_cli("convert", "--collection", str(tmp_path / "missing.json"), check=False)
    assert result.returncode == 2
    assert "not found" in result.stderr


def test_cli_sample_roundtrips_through_convert(tmp_path: Path, capsys):
    out = tmp_path / "sample.json"
    main(["sample", "--out", str(out)])
    assert json.loads(out.read_text(encoding="utf-8")) == sample_collection()
    capsys.readouterr()
    main(["convert", "--collection", str(out), "--format", "json"])
    doc = json.loads(capsys.readouterr().out)
    assert doc["servers"][0]["url"] == "https://api.example.com/v1"


def test_cli_studio_rejects_missing_collection(tmp_path: Path):
    result = run_cli("studio", "--collection", str(tmp_path / "missing.json"), check=False)
    assert result.returncode == 2
    assert "not found" in result.stderr
    assert "Traceback" not in result.stderr
