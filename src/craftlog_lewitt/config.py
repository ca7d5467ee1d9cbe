"""Configuration loading and management for craftlog-lewitt.

Configuration sources are merged in priority order:
    1. Defaults (defined in LewittConfig and its nested sections)
    2. Global config (~/.craftlog-lewitt.toml)
    3. Project config (./craftlog-lewitt.toml)
    4. Explicit config file
    5. Environment variables (CRAFTLOG_* prefix)
    6. CLI overrides (passed as kwargs)

Example:
    >>> config = load_config(seed=42, order="severity")
    >>> config.seed
    42
    >>> config.hatching.spacing_max
    18.0
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, Dict, Literal, Optional, Tuple, get_type_hints

from .exceptions import ConfigFileError, ConfigurationError, InvalidConfigError

OrderMode = Literal["time", "severity", "type_blocks"]
SamplingMode = Literal["uniform"]

ORDER_MODES: Tuple[str, ...] = ("time", "severity", "type_blocks")
SAMPLING_MODES: Tuple[str, ...] = ("uniform",)

# Kind priority for the ``type_blocks`` ordering
TYPE_BLOCK_ORDER: Tuple[str, ...] = (
    "edit",
    "snapshot",
    "mode_change",
    "policy_violation",
    "session_start",
    "session_pause",
    "session_resume",
)

RGB = Tuple[int, int, int]

BACKGROUND: RGB = (255, 255, 255)
INK: RGB = (0, 0, 0)
POLICY_VIOLATION_FILL: RGB = (255, 0, 0)


# ---------------------------------------------------------------------------
# Paper sizes (300 DPI pixels)
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class PaperSize:
    """A paper format in pixels at 300 DPI."""

    name: str
    width: int
    height: int

    def landscape(self) -> "PaperSize":
        return PaperSize(self.name, self.height, self.width)


PAPER_SIZES: Dict[str, PaperSize] = {
    "B6": PaperSize("B6", 1512, 2150),  # 128mm x 182mm
    "B5": PaperSize("B5", 2150, 3035),  # 182mm x 257mm
    "B4": PaperSize("B4", 3035, 4299),  # 257mm x 364mm
    "B3": PaperSize("B3", 4299, 6071),  # 364mm x 514mm
    "B2": PaperSize("B2", 6071, 8598),  # 514mm x 728mm
    "B1": PaperSize("B1", 8598, 12165),  # 728mm x 1030mm
    "B0": PaperSize("B0", 12165, 17197),  # 1030mm x 1456mm
}

# Preview canvas; every other output scales relative to it
PREVIEW_PAPER = "B6"


def paper_size(name: str) -> PaperSize:
    """Look up a paper size by name (case-insensitive)."""
    try:
        return PAPER_SIZES[name.upper()]
    except KeyError:
        raise InvalidConfigError("paper", name, f"expected one of {', '.join(PAPER_SIZES)}")


@dataclass(frozen=True)
class TileConfig:
    """Tiling of a large target print into smaller offscreen renders.

    The default assembles a B1-sized image from eight landscape B4 tiles
    (2 columns x 4 rows), each rendered at twice the pixel density and
    downsampled when pasted.
    """

    target: str = "B1"
    tile: str = "B4"
    cols: int = 2
    rows: int = 4
    landscape_tiles: bool = True
    pixel_density: int = 2

    def __post_init__(self) -> None:
        if self.cols < 1 or self.rows < 1:
            raise ValueError("tile grid must have at least one column and one row")
        if self.pixel_density < 1:
            raise ValueError("pixel_density must be at least 1")
        paper_size(self.tile)
        paper_size(self.target)

    @property
    def tile_size(self) -> PaperSize:
        size = paper_size(self.tile)
        return size.landscape() if self.landscape_tiles else size

    @property
    def tile_width(self) -> int:
        return self.tile_size.width

    @property
    def tile_height(self) -> int:
        return self.tile_size.height

    @property
    def final_width(self) -> int:
        return self.tile_width * self.cols

    @property
    def final_height(self) -> int:
        return self.tile_height * self.rows


# ---------------------------------------------------------------------------
# Drawing rules
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class HatchAngles:
    """Hatch direction rules in degrees (0 = horizontal)."""

    edit_human: float = 45.0
    edit_ai: float = 135.0
    snapshot: float = 0.0
    mode_change: float = 90.0
    policy_violation: Tuple[float, ...] = (45.0, 135.0)  # cross-hatch
    default: Tuple[float, ...] = (0.0, 45.0, 90.0, 135.0)  # hash bucket

    def __post_init__(self) -> None:
        if not self.default:
            raise ValueError("default hatch angles must not be empty")
        if not self.policy_violation:
            raise ValueError("policy_violation hatch angles must not be empty")


@dataclass(frozen=True)
class HatchingConfig:
    """Severity-driven hatching parameters.

    Attributes:
        spacing_min / spacing_max: spacing = lerp(max, min, severity), so
            higher severity means denser lines
        spacing_clamp_min / spacing_clamp_max: final spacing bounds (px)
        weight_min / weight_max: stroke weight = lerp(min, max, severity)
        policy_violation_weight_bonus: added to policy-violation strokes
        alpha_min / alpha_max: stroke alpha = round(lerp(min, max, severity))
        cell_border_weight / cell_border_alpha: plain cell border stroke
    """

    angles: HatchAngles = field(default_factory=HatchAngles)

    spacing_min: float = 4.0
    spacing_max: float = 18.0
    spacing_clamp_min: float = 3.0
    spacing_clamp_max: float = 24.0

    weight_min: float = 0.6
    weight_max: float = 3.0
    policy_violation_weight_bonus: float = 1.0

    alpha_min: float = 40.0
    alpha_max: float = 200.0

    cell_border_weight: float = 0.5
    cell_border_alpha: int = 25

    def __post_init__(self) -> None:
        if self.spacing_clamp_min <= 0:
            raise ValueError("spacing_clamp_min must be positive")
        if self.spacing_clamp_min > self.spacing_clamp_max:
            raise ValueError("spacing_clamp_min must not exceed spacing_clamp_max")
        if self.weight_min < 0 or self.weight_max < self.weight_min:
            raise ValueError("weight range must be non-negative and ordered")
        if not 0 <= self.alpha_min <= self.alpha_max <= 255:
            raise ValueError("alpha range must be ordered within 0..255")
        if not 0 <= self.cell_border_alpha <= 255:
            raise ValueError("cell_border_alpha must be between 0 and 255")


@dataclass(frozen=True)
class MotifConfig:
    """Parameters for the per-cell motifs (points, radial lines, marks)."""

    radial_lines_max_count: int = 12
    radial_lines_min_length: float = 0.05  # fraction of cell size
    radial_lines_max_length: float = 0.35
    undo_line_alpha: int = 80
    paste_line_weight_multiplier: float = 2.5
    # Draw undo/paste/AI-prompt marks over the hatching
    flag_marks: bool = False

    def __post_init__(self) -> None:
        if self.radial_lines_max_count < 0:
            raise ValueError("radial_lines_max_count must be non-negative")
        if not 0 <= self.radial_lines_min_length <= self.radial_lines_max_length:
            raise ValueError("radial line lengths must be ordered and non-negative")
        if not 0 <= self.undo_line_alpha <= 255:
            raise ValueError("undo_line_alpha must be between 0 and 255")


@dataclass(frozen=True)
class LewittConfig:
    """Configuration for one grid drawing.

    Attributes:
        preset: Name recorded in the instructions text
        margin_ratio: Margin on every side, as a fraction of canvas width
        max_events: Upper bound on cells filled with events
        sampling: How to thin events beyond ``max_events``
        order: Cell assignment order (time, severity, type_blocks)
        min_grid_size / max_grid_size: Bounds on the square grid side
        seed: Random seed; 0 means "derive from the wall clock", which
            makes the drawing non-reproducible
        hatching: Hatching rules (see HatchingConfig)
        motifs: Motif parameters (see MotifConfig)
    """

    preset: str = "lewitt_grid_hatch_p5"

    margin_ratio: float = 0.05

    max_events: int = 530
    sampling: SamplingMode = "uniform"
    order: OrderMode = "time"
    min_grid_size: int = 5
    max_grid_size: int = 27

    seed: int = 0

    hatching: HatchingConfig = field(default_factory=HatchingConfig)
    motifs: MotifConfig = field(default_factory=MotifConfig)

    def __post_init__(self) -> None:
        if not 0.0 <= self.margin_ratio < 0.5:
            raise ValueError("margin_ratio must be in [0.0, 0.5)")
        if self.max_events < 1:
            raise ValueError("max_events must be at least 1")
        if self.sampling not in SAMPLING_MODES:
            raise ValueError(f"sampling must be one of {', '.join(SAMPLING_MODES)}")
        if self.order not in ORDER_MODES:
            raise ValueError(f"order must be one of {', '.join(ORDER_MODES)}")
        if self.min_grid_size < 1:
            raise ValueError("min_grid_size must be at least 1")
        if self.max_grid_size < self.min_grid_size:
            raise ValueError("max_grid_size must be >= min_grid_size")
        if self.seed < 0:
            raise ValueError("seed must be non-negative")

    def with_seed(self, seed: int) -> "LewittConfig":
        return replace(self, seed=seed)


DEFAULT_CONFIG = LewittConfig()


# ---------------------------------------------------------------------------
# Loading
# ---------------------------------------------------------------------------

_NESTED_SECTIONS = {"hatching": HatchingConfig, "motifs": MotifConfig}


def load_config(config_file: Optional[Path] = None, **overrides: Any) -> LewittConfig:
    """Load configuration with auto-discovery and merging.

    Args:
        config_file: Optional explicit TOML config file
        **overrides: Direct overrides (typically from CLI flags). ``None``
            values are ignored so unset CLI options fall through.

    Returns:
        Validated LewittConfig instance

    Raises:
        ConfigFileError: If a config file is missing or not valid TOML
        InvalidConfigError: If a value fails validation
    """
    merged: dict = {}

    global_config = Path.home() / ".craftlog-lewitt.toml"
    if global_config.exists():
        _merge_sections(merged, _load_toml_file(global_config))

    project_config = Path.cwd() / "craftlog-lewitt.toml"
    if project_config.exists():
        _merge_sections(merged, _load_toml_file(project_config))

    if config_file is not None:
        if not config_file.exists():
            raise ConfigFileError(config_file, "file not found")
        _merge_sections(merged, _load_toml_file(config_file))

    merged.update(_load_env_vars())
    merged.update({k: v for k, v in overrides.items() if v is not None})

    for section, section_cls in _NESTED_SECTIONS.items():
        section_value = merged.pop(section, None)
        if isinstance(section_value, dict):
            merged[section] = _build_section(section, section_cls, section_value)
        elif isinstance(section_value, section_cls):
            merged[section] = section_value

    try:
        return LewittConfig(**merged)
    except TypeError as e:
        raise ConfigurationError(f"Invalid configuration: {e}")
    except ValueError as e:
        raise InvalidConfigError("config", merged, str(e))


def _merge_sections(merged: dict, data: dict) -> None:
    """Merge one TOML document, combining nested section tables key by key."""
    for key, value in data.items():
        if key in _NESTED_SECTIONS and isinstance(value, dict):
            section = dict(merged.get(key) or {})
            section.update(value)
            merged[key] = section
        else:
            merged[key] = value


def _build_section(name: str, section_cls: type, values: dict) -> Any:
    values = dict(values)
    if section_cls is HatchingConfig and isinstance(values.get("angles"), dict):
        angles = dict(values["angles"])
        for key in ("policy_violation", "default"):
            if key in angles:
                angles[key] = tuple(float(a) for a in angles[key])
        try:
            values["angles"] = HatchAngles(**angles)
        except (TypeError, ValueError) as e:
            raise InvalidConfigError(f"{name}.angles", angles, str(e))
    try:
        return section_cls(**values)
    except TypeError as e:
        raise ConfigurationError(f"Invalid [{name}] config: {e}")
    except ValueError as e:
        raise InvalidConfigError(name, values, str(e))


def _load_env_vars() -> dict[str, Any]:
    """Load top-level configuration from CRAFTLOG_* environment variables.

    Supported environment variables:
        CRAFTLOG_SEED: int
        CRAFTLOG_MAX_EVENTS: int
        CRAFTLOG_MIN_GRID_SIZE / CRAFTLOG_MAX_GRID_SIZE: int
        CRAFTLOG_MARGIN_RATIO: float
        CRAFTLOG_ORDER: time/severity/type_blocks
        CRAFTLOG_SAMPLING: uniform
        CRAFTLOG_PRESET: str

    Returns:
        Dict of field_name -> parsed_value for any CRAFTLOG_* vars found.
    """
    type_hints = get_type_hints(LewittConfig)

    result: dict[str, Any] = {}

    for field_name in LewittConfig.__dataclass_fields__:
        if field_name in _NESTED_SECTIONS:
            continue
        env_key = f"CRAFTLOG_{field_name.upper()}"
        env_value = os.environ.get(env_key)
        if env_value is None:
            continue

        type_hint = type_hints.get(field_name)
        if type_hint is None:
            continue

        try:
            parsed = _parse_env_value(env_value, type_hint)
        except ValueError as e:
            raise InvalidConfigError(env_key, env_value, str(e))
        if parsed is not None:
            result[field_name] = parsed

    return result


def _parse_env_value(value: str, type_hint: Any) -> Any:
    """Parse an environment variable string to the field's type."""
    origin = getattr(type_hint, "__origin__", None)

    if type_hint is int:
        return int(value)
    if type_hint is float:
        return float(value)
    if type_hint is str or origin is Literal:
        return value

    return None


def _load_toml_file(path: Path) -> dict:
    """Load a TOML file and return the parsed dict."""
    try:
        import tomllib
    except ModuleNotFoundError:
        import tomli as tomllib  # type: ignore

    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except OSError as e:
        raise ConfigFileError(path, str(e))
    except tomllib.TOMLDecodeError as e:
        raise ConfigFileError(path, f"invalid TOML: {e}")
