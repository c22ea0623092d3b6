import os

import pytest
from pydantic import ValidationError

from svgbatch.core import GenerationPolicy, load_config
from svgbatch.utils.config import deep_merge, env_overlay, read_yaml


def test_defaults_without_files(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    cfg = load_config()
    assert cfg.storage.base_image == "GCLogo.svg"
    assert cfg.storage.output_dir == "SVGs"
    assert cfg.seed is None
    assert cfg.generation.canvas_size == 800
    assert (cfg.generation.shape_count_min, cfg.generation.shape_count_max) == (8, 16)
    assert cfg.generation.animation_duration_s == 5.0
    assert cfg.optimizer.multipass is True


def test_yaml_overlay(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    (tmp_path / "conf").mkdir()
    (tmp_path / "conf/generator.yaml").write_text(
        "generation:\n  shape_count_min: 2\n  shape_count_max: 5\nseed: 3\n",
        encoding="utf-8",
    )
    cfg = load_config()
    assert cfg.generation.shape_count_min == 2
    assert cfg.generation.shape_count_max == 5
    assert cfg.generation.canvas_size == 800
    assert cfg.seed == 3


def test_env_then_cli_precedence(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    cfg_file = tmp_path / "gen.yaml"
    cfg_file.write_text("storage:\n  output_dir: from_yaml\n", encoding="utf-8")

    monkeypatch.setenv("SVGBATCH_OUTPUT_DIR", "from_env")
    monkeypatch.setenv("SVGBATCH_SEED", "11")
    cfg = load_config(str(cfg_file))
    assert cfg.storage.output_dir == "from_env"
    assert cfg.seed == 11

    cfg = load_config(str(cfg_file), cli_overrides={"storage": {"output_dir": "from_cli"}})
    assert cfg.storage.output_dir == "from_cli"
    assert cfg.seed == 11


def test_dotenv_is_honoured(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    (tmp_path / ".env").write_text("SVGBATCH_BASE_IMAGE=logo.svg\n", encoding="utf-8")
    try:
        assert load_config().storage.base_image == "logo.svg"
    finally:
        os.environ.pop("SVGBATCH_BASE_IMAGE", None)


def test_bad_seed_env(monkeypatch):
    monkeypatch.setenv("SVGBATCH_SEED", "soon")
    with pytest.raises(ValueError):
        env_overlay()


def test_invalid_shape_range(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    with pytest.raises(ValidationError):
        load_config(cli_overrides={"generation": {"shape_count_min": 9, "shape_count_max": 9}})
    with pytest.raises(ValidationError):
        GenerationPolicy(shape_count_min=5, shape_count_max=2)


def test_explicit_missing_path(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_config(str(tmp_path / "missing.yaml"))


def test_non_mapping_yaml(tmp_path):
    p = tmp_path / "list.yaml"
    p.write_text("- a\n- b\n", encoding="utf-8")
    with pytest.raises(ValueError):
        read_yaml(str(p))


def test_read_yaml_missing_is_empty(tmp_path):
    assert read_yaml(str(tmp_path / "none.yaml")) == {}


def test_deep_merge_keeps_siblings():
    merged = deep_merge({"a": {"x": 1, "y": 2}}, {"a": {"y": 3}})
    assert merged == {"a": {"x": 1, "y": 3}}


def test_shipped_config_matches_defaults():
    root = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
    cfg = load_config(os.path.join(root, "conf", "generator.yaml"))
    assert cfg.generation == GenerationPolicy()
