import json
from pathlib import Path

import pytest

from coastal_news import cli


@pytest.fixture
def repo(tmp_path: Path, monkeypatch) -> Path:
    (tmp_path / "config").mkdir()
    (tmp_path / "config" / "app.yaml").write_text(
        "log_level: ERROR\nsource:\n  kind: stub\n  delay_seconds: 0\n",
        encoding="utf-8",
    )
    # main() exports these; register them so monkeypatch restores the env
    monkeypatch.setenv("COASTAL_NEWS_ROOT", str(tmp_path))
    monkeypatch.setenv("COASTAL_NEWS_CONFIG_DIR", str(tmp_path / "config"))
    return tmp_path


def _base(repo: Path):
    return ["--root", str(repo), "--lat", "13.08", "--lng", "80.27", "--city", "Chennai", "--seed", "3"]


def test_version(capsys):
    assert cli.main(["--version"]) == 0
    assert "coastal-news" in capsys.readouterr().out


def test_missing_config_exit_code(tmp_path: Path, monkeypatch, capsys):
    monkeypatch.setenv("COASTAL_NEWS_ROOT", str(tmp_path))
    monkeypatch.setenv("COASTAL_NEWS_CONFIG_DIR", str(tmp_path / "config"))
    assert cli.main(["--root", str(tmp_path), "--lat", "1", "--lng", "2"]) == 1
    assert "[config]" in capsys.readouterr().err


def test_missing_coordinates_exit_code(repo: Path, capsys):
    assert cli.main(["--root", str(repo)]) == 1


def test_json_output(repo: Path, capsys):
    assert cli.main(_base(repo) + ["--json"]) == 0
    data = json.loads(capsys.readouterr().out)
    assert data["location"]["city"] == "Chennai"
    assert data["location"]["riskLevel"] == "high"
    assert len(data["news"]) == 18
    assert (repo / "data" / "cache.json").exists()


def test_urgent_view_and_overrides(repo: Path, capsys):
    args = _base(repo) + ["--json", "--urgent", "--risk", "low", "--zone", "west"]
    assert cli.main(args) == 0
    data = json.loads(capsys.readouterr().out)
    assert data["location"]["riskLevel"] == "low"
    assert all(item["urgency"] in {"urgent", "high"} for item in data["news"])


def test_text_output_with_limit(repo: Path, capsys):
    assert cli.main(_base(repo) + ["--limit", "2"]) == 0
    out = capsys.readouterr().out
    assert out.startswith("Chennai (high risk, east coast)")
    assert out.count("relevance") == 2


def test_print_settings(repo: Path, capsys):
    assert cli.main(["--root", str(repo), "--print-settings"]) == 0
    data = json.loads(capsys.readouterr().out)
    assert data["app"]["feed"]["item_count"] == 18


def test_package_run_returns_snapshot(repo: Path, chennai):
    import coastal_news
    from coastal_news.pipeline import FeedSnapshot

    snap = coastal_news.run(chennai)
    assert isinstance(snap, FeedSnapshot)
    assert len(snap.news) == 18
    assert snap.error is None
    assert snap.loading is False
