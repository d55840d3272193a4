"""Fresnelab configuration file module."""

from dataclasses import dataclass, field
from typing import Dict, Optional, Type


@dataclass
class WaveConfig:
    wavelength: float = 30.0 # [px]
    amplitude: float = 1.0 # [-]
    frequency: float = 2.0 # [Hz]
    slit_width: float = 40.0 # [px]

@dataclass
class CanvasConfig:
    width: int = 800 # [px]
    height: int = 600 # [px]

@dataclass
class GeometryConfig:
    source_x: float = 0.0625 # fraction of width
    source_y: float = 0.5 # fraction of height
    wall_x: float = 0.4 # fraction of width
    slit_y: float = 0.5 # fraction of height
    screen_x: float = 0.85 # fraction of width
    wall_thickness: float = 5.0 # [px]

@dataclass
class SamplingConfig:
    scale: int = 3 # canvas pixels per grid cell
    secondary_source_count: int = 20
    screen_samples: int = 100
    epsilon: float = 1.0 # [px]

    def __post_init__(self):
        if self.scale < 1:
            raise ValueError(f"Grid scale must be >= 1, got {self.scale}.")
        if self.secondary_source_count < 1:
            raise ValueError(
                "Secondary source count must be >= 1, "
                f"got {self.secondary_source_count}."
            )
        if self.screen_samples < 2:
            raise ValueError(
                f"Screen samples must be >= 2, got {self.screen_samples}."
            )

@dataclass
class RunConfig:
    frames: int = 120
    time_step: float = 1.0 / 60.0 # [s]
    snapshots: int = 4
    monitoring_steps: int = 10

SECTION_CONFIG_CLASSES: Dict[str, Type] = {
    "wave": WaveConfig,
    "canvas": CanvasConfig,
    "geometry": GeometryConfig,
    "sampling": SamplingConfig,
    "run": RunConfig,
}

def _lowercase_dict(d: Dict) -> Dict:
    new_dict = {}
    for k, v in d.items():
        lower_key = k.lower()
        if isinstance(v, dict):
            new_dict[lower_key] = _lowercase_dict(v)
        else:
            new_dict[lower_key] = v
    return new_dict

def _build_section(name: str, params: Optional[Dict]):
    if name not in SECTION_CONFIG_CLASSES:
        raise ValueError(f"Unknown configuration section: '{name}'.")
    section_class = SECTION_CONFIG_CLASSES[name]
    if params is None:
        return section_class()
    return section_class(**_lowercase_dict(params))

@dataclass
class ConfigOptions:
    """
    This class groups the dataclass sections needed for
    starting a diffraction session. Every section is optional
    and falls back to the defaults of its dataclass.

    The available sections are

    Parameters                    Contents
    ============================  ===========================================
     wave : WaveConfig             wavelength, amplitude, frequency, slit_width
     canvas : CanvasConfig         width, height
     geometry : GeometryConfig     source, wall, slit and screen fractions
     sampling : SamplingConfig     scale, secondary_source_count, ...
     run : RunConfig               frames, time_step, snapshots, ...
    ============================  ===========================================

    """
    wave: WaveConfig = field(default_factory=WaveConfig)
    canvas: CanvasConfig = field(default_factory=CanvasConfig)
    geometry: GeometryConfig = field(default_factory=GeometryConfig)
    sampling: SamplingConfig = field(default_factory=SamplingConfig)
    run: RunConfig = field(default_factory=RunConfig)

    @staticmethod
    def build(
        wave_parameters: Optional[Dict] = None,
        canvas_parameters: Optional[Dict] = None,
        geometry_parameters: Optional[Dict] = None,
        sampling_parameters: Optional[Dict] = None,
        run_parameters: Optional[Dict] = None,
    ) -> "ConfigOptions":

        return ConfigOptions(
            wave=_build_section("wave", wave_parameters),
            canvas=_build_section("canvas", canvas_parameters),
            geometry=_build_section("geometry", geometry_parameters),
            sampling=_build_section("sampling", sampling_parameters),
            run=_build_section("run", run_parameters),
        )

    @staticmethod
    def from_sections(sections: Dict[str, Dict]) -> "ConfigOptions":
        """Build options from a single mapping of section name to parameters."""
        sections = _lowercase_dict(sections)
        for name in sections:
            if name not in SECTION_CONFIG_CLASSES:
                raise ValueError(f"Unknown configuration section: '{name}'.")

        return ConfigOptions.build(
            wave_parameters=sections.get("wave"),
            canvas_parameters=sections.get("canvas"),
            geometry_parameters=sections.get("geometry"),
            sampling_parameters=sections.get("sampling"),
            run_parameters=sections.get("run"),
        )
