import logging
import logging.handlers
import os
import sys
from typing import Any, Dict, List, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field, ValidationError, validator

# ---------------- Logging ----------------

ROOT_LOGGER = "svgbatch"


def get_logger(name=ROOT_LOGGER, log_file=None):
    # svgbatch.* loggers propagate to the package logger, which owns the handlers
    if name.startswith(ROOT_LOGGER + "."):
        get_logger(ROOT_LOGGER, log_file)
        return logging.getLogger(name)
    logger = logging.getLogger(name)
    if logger.handlers:
        if log_file and not any(
            isinstance(h, logging.handlers.RotatingFileHandler) for h in logger.handlers
        ):
            logger.addHandler(_file_handler(log_file))
        return logger
    logger.setLevel(logging.INFO)
    sh = logging.StreamHandler(sys.stdout)
    sh.setFormatter(_formatter())
    logger.addHandler(sh)
    if log_file:
        logger.addHandler(_file_handler(log_file))
    return logger


def _formatter() -> logging.Formatter:
    return logging.Formatter(
        '{"ts":"%(asctime)s","level":"%(levelname)s","step":"%(name)s","msg":"%(message)s"}'
    )


def _file_handler(log_file: str) -> logging.Handler:
    parent = os.path.dirname(log_file)
    if parent:
        os.makedirs(parent, exist_ok=True)
    fh = logging.handlers.RotatingFileHandler(log_file, maxBytes=5_000_000, backupCount=5)
    fh.setFormatter(_formatter())
    return fh


log = get_logger(ROOT_LOGGER)

# ---------------- Config Models ----------------


class ShapeLimits(BaseModel):
    """Exclusive upper bounds for the randomized dimensions of each shape kind."""

    circle_radius: float = 100.0
    rect_width: float = 150.0
    rect_height: float = 100.0
    hexagon_size: float = 100.0
    triangle_size: float = 100.0
    ellipse_rx: float = 75.0
    ellipse_ry: float = 50.0
    line_extent: float = 800.0
    line_width: float = 10.0


class TileSizes(BaseModel):
    dot: int = Field(20, gt=0)
    stripe: int = Field(40, gt=0)
    wave: int = Field(60, gt=0)


class GenerationPolicy(BaseModel):
    """Every tunable constant of the composition procedure in one place."""

    canvas_size: int = Field(800, gt=0)
    shape_count_min: int = Field(8, ge=0)
    shape_count_max: int = Field(16, gt=0)
    animation_duration_s: float = Field(5.0, gt=0)
    opacity_floor: float = Field(0.4, ge=0.0, lt=1.0)
    pivot_range: int = Field(100, gt=0)
    animation_chance: float = Field(0.5, ge=0.0, le=1.0)
    tile_sizes: TileSizes = Field(default_factory=TileSizes)
    limits: ShapeLimits = Field(default_factory=ShapeLimits)

    @validator("shape_count_max")
    def validate_shape_range(cls, v, values):
        lo = values.get("shape_count_min")
        if lo is not None and v <= lo:
            raise ValueError("shape_count_max must be greater than shape_count_min")
        return v


class OptimizerCfg(BaseModel):
    multipass: bool = True
    plugins: List[str] = ["removeDoctype", "removeComments", "cleanupAttrs"]


class StorageCfg(BaseModel):
    base_image: str = "GCLogo.svg"
    output_dir: str = "SVGs"
    log_file: Optional[str] = None


class GlobalCfg(BaseModel):
    storage: StorageCfg = Field(default_factory=StorageCfg)
    generation: GenerationPolicy = Field(default_factory=GenerationPolicy)
    optimizer: OptimizerCfg = Field(default_factory=OptimizerCfg)
    seed: Optional[int] = None


DEFAULT_CONFIG_PATH = os.path.join("conf", "generator.yaml")


def load_config(
    path: Optional[str] = None, cli_overrides: Optional[Dict[str, Any]] = None
) -> GlobalCfg:
    """
    Load generator configuration with precedence (low -> high):
      1) Defaults baked into models
      2) conf/generator.yaml (or ``path``)
      3) Environment variables (SVGBATCH_*), .env honoured
      4) CLI overrides
    """
    from svgbatch.utils.config import deep_merge, env_overlay, read_yaml

    load_dotenv(os.path.join(os.getcwd(), ".env"))

    if path and not os.path.exists(path):
        raise FileNotFoundError(f"Config file not found: {path}")
    raw: Dict[str, Any] = read_yaml(path or DEFAULT_CONFIG_PATH)
    raw = deep_merge(raw, env_overlay())
    if cli_overrides:
        raw = deep_merge(raw, cli_overrides)

    try:
        cfg = GlobalCfg(**raw)
    except ValidationError as e:
        log.error(f"Config validation failed: {e}")
        raise
    return cfg
