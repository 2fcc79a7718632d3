"""
Configuration
Layer names, tolerances and text markers used by the extraction pipeline.
Defaults ship in rules/defaults.yaml and can be overridden per drawing set.
"""

import logging
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Dict, List, Optional, Any

import yaml

logger = logging.getLogger(__name__)

DEFAULT_RULES_PATH = Path(__file__).parent / "rules" / "defaults.yaml"


@dataclass
class LayerNames:
    """Drawing layers that carry each kind of beam annotation."""
    beam_id: str = "B_NO"
    reinforcement: str = "B_TEXT"
    stirrup: str = "ring text"
    dimension: str = "B_DIM"
    boundary: str = "B_BOX"
    auxiliary: str = "B_STEEL"
    level: str = "LEVEL"


@dataclass
class PipelineConfig:
    """Configuration for the beam table pipeline."""
    layers: LayerNames = field(default_factory=LayerNames)

    # Geometry
    x_tol: float = 1e-3
    y_tol: float = 1e-3
    min_span_factor: float = 10.0
    fallback_padding: float = 1000.0

    # Bar markers (matched case-insensitively)
    throughout_markers: List[str] = field(default_factory=lambda: ["(T)"])
    curtailed_markers: List[str] = field(default_factory=lambda: ["(C)", "EXTRA"])

    # Output
    shear_legs: str = "2"

    @property
    def min_span_width(self) -> float:
        return self.min_span_factor * self.x_tol


@dataclass
class ExportConfig:
    """Configuration for record export."""
    output_dir: Path = Path("./out")
    formats: List[str] = field(default_factory=lambda: ["csv", "xlsx"])
    overlay: bool = False
    overlay_max_dimension: int = 2000
    reinforcement_layer: str = "B_TEXT"  # labels drawn as bars in the overlay


def _read_rules(path: Optional[Path]) -> Dict[str, Any]:
    """Read a rules YAML file, returning {} if it is missing or invalid."""
    rules_path = Path(path) if path else DEFAULT_RULES_PATH
    try:
        with open(rules_path) as f:
            data = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        logger.debug(f"Could not load rules from {rules_path}: {e}")
        return {}
    return data if isinstance(data, dict) else {}


def _section(data: Dict[str, Any], name: str) -> Dict[str, Any]:
    """A top-level rules section, or {} when it is absent or not a mapping."""
    section = data.get(name) or {}
    if not isinstance(section, dict):
        logger.debug(f"Ignoring rules section '{name}': expected a mapping, "
                     f"got {type(section).__name__}")
        return {}
    return section


def _float(section: Dict[str, Any], key: str, default: float) -> float:
    value = section.get(key, default)
    try:
        return float(value)
    except (TypeError, ValueError):
        logger.debug(f"Ignoring non-numeric '{key}': {value!r}")
        return default


def _markers(section: Dict[str, Any], key: str, default: List[str]) -> List[str]:
    value = section.get(key)
    if not value:
        return default
    if isinstance(value, str):
        return [value]
    if not isinstance(value, (list, tuple)):
        logger.debug(f"Ignoring markers '{key}': {value!r}")
        return default
    return [str(m) for m in value]


def load_config(path: Optional[Path] = None) -> PipelineConfig:
    """
    Load pipeline configuration.

    Known keys from the YAML file are laid over the dataclass defaults;
    anything unrecognised or malformed is ignored.

    Args:
        path: Rules file (defaults to the bundled rules/defaults.yaml)

    Returns:
        PipelineConfig
    """
    data = _read_rules(path)
    config = PipelineConfig()

    layer_data = _section(data, 'layers')
    layer_keys = {f.name for f in fields(LayerNames)}
    config.layers = LayerNames(**{
        k: str(v) for k, v in layer_data.items() if k in layer_keys
    })

    tol = _section(data, 'tolerances')
    config.x_tol = _float(tol, 'x_tol', config.x_tol)
    config.y_tol = _float(tol, 'y_tol', config.y_tol)
    config.min_span_factor = _float(tol, 'min_span_factor', config.min_span_factor)
    config.fallback_padding = _float(tol, 'fallback_padding', config.fallback_padding)

    markers = _section(data, 'markers')
    config.throughout_markers = _markers(markers, 'throughout', config.throughout_markers)
    config.curtailed_markers = _markers(markers, 'curtailed', config.curtailed_markers)

    output = _section(data, 'output')
    config.shear_legs = str(output.get('shear_legs', config.shear_legs))

    return config


def load_export_config(path: Optional[Path] = None, output_dir: Optional[Path] = None) -> ExportConfig:
    """Load export settings from the 'output' section of a rules file."""
    data = _read_rules(path)
    output = _section(data, 'output')
    config = ExportConfig()

    formats = output.get('formats')
    if isinstance(formats, str):
        formats = [formats]
    if isinstance(formats, (list, tuple)) and formats:
        config.formats = [str(f).lower() for f in formats]
    config.overlay = bool(output.get('overlay', config.overlay))

    reinforcement = _section(data, 'layers').get('reinforcement')
    if reinforcement:
        config.reinforcement_layer = str(reinforcement)

    if output_dir is not None:
        config.output_dir = Path(output_dir)
    return config
