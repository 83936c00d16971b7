# File: tests/test_config.py
import json
from pathlib import Path

import pytest
from pydantic import ValidationError

from script_scout.config import ScannerConfig, load_config


def write_file(tmp_path: Path, content: str, suffix: str) -> Path:
    path = tmp_path / f"config{suffix}"
    path.write_text(content, encoding="utf-8")
    return path


@pytest.mark.parametrize(
    "content,suffix,expect_exc",
    [
        ("root_url: http://example.com\nmax_pages: 5", ".yaml", None),
        (json.dumps({"root_url": "http://example.com", "max_pages": 5}), ".json", None),
        ("{}", ".json", ValidationError),
        ("root_url: http://example.com\nmax_pages: 0", ".yaml", ValidationError),
        ("root_url: http://example.com\nunknown: 1", ".yaml", ValidationError),
        ("not: a: mapping", ".yaml", ValueError),
        ("- just\n- a list", ".yaml", TypeError),
        ("{broken json", ".json", ValueError),
        ("root_url = 'x'", ".toml", ValueError),
    ],
)
def test_load_config_variants(tmp_path, content, suffix, expect_exc):
    cfg_path = write_file(tmp_path, content, suffix)
    if expect_exc:
        with pytest.raises(expect_exc):
            load_config(cfg_path)
    else:
        cfg = load_config(cfg_path)
        assert isinstance(cfg, ScannerConfig)
        assert str(cfg.root_url) == "http://example.com/"
        assert cfg.max_pages == 5


def test_defaults():
    cfg = ScannerConfig(root_url="https://example.com")
    assert cfg.max_pages == 10
    assert cfg.concurrency == 1
    assert cfg.analyze_scripts is True


def test_overrides_win_over_file_and_none_is_ignored(tmp_path):
    cfg_path = write_file(tmp_path, "root_url: http://example.com\nmax_pages: 5\ntimeout: 3", ".yaml")
    cfg = load_config(cfg_path, root_url="https://other.org", max_pages=None, concurrency=4)
    assert str(cfg.root_url) == "https://other.org/"
    assert cfg.max_pages == 5
    assert cfg.concurrency == 4
    assert cfg.timeout == 3.0


def test_no_file_uses_overrides_only(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    cfg = load_config(None, root_url=" http://example.com ")
    assert str(cfg.root_url) == "http://example.com/"


def test_default_file_is_picked_up(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    (tmp_path / "configs").mkdir()
    (tmp_path / "configs" / "default.yaml").write_text("max_pages: 7\n", encoding="utf-8")
    cfg = load_config(None, root_url="http://example.com")
    assert cfg.max_pages == 7


def test_explicit_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_config(tmp_path / "nope.yaml", root_url="http://example.com")


@pytest.mark.parametrize("url", ["not a url", "ftp://example.com", ""])
def test_invalid_root_url(url):
    with pytest.raises(ValidationError):
        ScannerConfig(root_url=url)


def test_config_is_frozen(basic_config):
    with pytest.raises(ValidationError):
        basic_config.max_pages = 3
