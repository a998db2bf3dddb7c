import json

import pytest
from PIL import Image

from emblembadge.main import main
from emblembadge.selector import FALLBACK_EMBLEM

from tests.conftest import make_emblem


@pytest.fixture
def config_path(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text(
        "username: octocat\n"
        "display_name: Guardian\n"
        "emblems:\n"
        "  rotation: ['1538938257']\n"
        "  fallback: '1538938257'\n"
        "paths:\n"
        f"  stats: {tmp_path / 'stats.json'}\n"
        f"  emblem: {tmp_path / 'emblem.jpg'}\n"
        f"  badge: {tmp_path / 'badge.png'}\n"
        f"  readme: {tmp_path / 'README.md'}\n"
    )
    return path


def test_generate_from_saved_stats(config_path, tmp_path, capsys):
    (tmp_path / "stats.json").write_text(
        json.dumps({"year": 2026, "updated_at": "2026-02-04T12:00:00Z", "commits": 150, "stars_received": 23})
    )
    make_emblem().save(tmp_path / "emblem.jpg", "JPEG")

    assert main(["--config", str(config_path), "generate"]) == 0

    assert "Badge generated" in capsys.readouterr().out
    with Image.open(tmp_path / "badge.png") as img:
        assert img.size == (800, 162)


def test_generate_without_stats_fails(config_path, capsys):
    assert main(["--config", str(config_path), "generate"]) == 1
    assert "Error:" in capsys.readouterr().err


def test_select_emblem_prints_rotation_entry(config_path, capsys):
    assert main(["--config", str(config_path), "select-emblem"]) == 0
    assert capsys.readouterr().out.strip() == "1538938257"


def test_missing_config_falls_back(tmp_path, capsys):
    assert main(["--config", str(tmp_path / "absent.yaml"), "select-emblem"]) == 0
    captured = capsys.readouterr()
    assert captured.out.strip() == FALLBACK_EMBLEM
    assert "using environment variables" in captured.err


def test_invalid_config_fails(tmp_path, capsys):
    path = tmp_path / "config.yaml"
    path.write_text("username: octocat\n")
    assert main(["--config", str(path), "select-emblem"]) == 1
    assert "rotation" in capsys.readouterr().err


def test_update_readme(config_path, tmp_path, capsys):
    (tmp_path / "README.md").write_text("# Profile\n")
    assert main(["--config", str(config_path), "update-readme"]) == 0
    assert "ContribEmblem" in (tmp_path / "README.md").read_text()
    assert "README updated" in capsys.readouterr().out


def test_fetch_stats_needs_token(config_path, monkeypatch, capsys):
    monkeypatch.delenv("GITHUB_TOKEN", raising=False)
    monkeypatch.setattr("emblembadge.main.load_dotenv", lambda: False)
    assert main(["--config", str(config_path), "fetch-stats"]) == 1
    assert "GITHUB_TOKEN" in capsys.readouterr().err


def test_mistyped_layout_setting_fails_cleanly(tmp_path, capsys):
    path = tmp_path / "config.yaml"
    path.write_text(
        "username: octocat\n"
        "emblems:\n"
        "  rotation: ['1538938257']\n"
        "  fallback: '1538938257'\n"
        "layout:\n"
        "  stat_bar_height: '44'\n"
    )
    assert main(["--config", str(path), "generate"]) == 1
    assert "stat_bar_height must be int" in capsys.readouterr().err
