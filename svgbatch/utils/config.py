# svgbatch/utils/config.py
import os
from typing import Any, Dict

from pathlib import Path

try:
    import yaml
except Exception as e:  # pragma: no cover
    raise RuntimeError("PyYAML is required: pip install pyyaml") from e


ENV_PREFIX = "SVGBATCH_"


def read_yaml(path: str) -> Dict[str, Any]:
    p = Path(path)
    if not p.exists():
        return {}
    try:
        with p.open("r", encoding="utf-8") as fh:
            data = yaml.safe_load(fh) or {}
    except yaml.YAMLError as e:
        raise ValueError(f"Failed to parse {path}: {e}")
    if not isinstance(data, dict):
        raise ValueError(f"YAML at {path} must be a mapping/object.")
    return data


def deep_merge(a: Dict[str, Any], b: Dict[str, Any]) -> Dict[str, Any]:
    out = dict(a)
    for k, v in (b or {}).items():
        if isinstance(v, dict) and isinstance(out.get(k), dict):
            out[k] = deep_merge(out[k], v)
        else:
            out[k] = v
    return out


def env_overlay() -> Dict[str, Any]:
    out: Dict[str, Any] = {}
    if os.getenv(ENV_PREFIX + "BASE_IMAGE"):
        out.setdefault("storage", {})["base_image"] = os.getenv(ENV_PREFIX + "BASE_IMAGE")
    if os.getenv(ENV_PREFIX + "OUTPUT_DIR"):
        out.setdefault("storage", {})["output_dir"] = os.getenv(ENV_PREFIX + "OUTPUT_DIR")
    if os.getenv(ENV_PREFIX + "LOG_FILE"):
        out.setdefault("storage", {})["log_file"] = os.getenv(ENV_PREFIX + "LOG_FILE")
    if os.getenv(ENV_PREFIX + "SEED"):
        try:
            out["seed"] = int(os.getenv(ENV_PREFIX + "SEED") or 0)
        except ValueError:
            raise ValueError(f"{ENV_PREFIX}SEED must be an integer")
    return out
