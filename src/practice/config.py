"""
Config loader for practice sessions.
Loads YAML configuration with dataclass validation.
"""
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional
import yaml


@dataclass
class CameraConfig:
    device_id: int = 0
    width: int = 640
    height: int = 480
    facing: str = "user"
    ready_timeout: float = 5.0   # Seconds to wait for the first frame


@dataclass
class HostConfig:
    scheme: str = "https"
    hostname: str = "localhost"


@dataclass
class DetectionConfig:
    tick_interval_ms: int = 200
    min_delta: float = 5.0       # Simulated detector lower bound (inclusive)
    max_delta: float = 20.0      # Simulated detector upper bound (exclusive)
    seed: Optional[int] = None


@dataclass
class CatalogConfig:
    path: Optional[str] = None   # YAML gesture list, built-in samples if unset


@dataclass
class Config:
    camera: CameraConfig = field(default_factory=CameraConfig)
    host: HostConfig = field(default_factory=HostConfig)
    detection: DetectionConfig = field(default_factory=DetectionConfig)
    catalog: CatalogConfig = field(default_factory=CatalogConfig)


def _dict_to_dataclass(cls, data: dict):
    """Convert a dict to a dataclass, ignoring unknown keys."""
    if data is None:
        return cls()
    field_names = {f.name for f in cls.__dataclass_fields__.values()}
    filtered = {k: v for k, v in data.items() if k in field_names}
    return cls(**filtered)


def load_config(config_path: Optional[Path] = None) -> Config:
    """
    Load configuration from YAML file.
    
    Args:
        config_path: Path to config file. If None, uses default config.yaml
                    in project root.
    
    Returns:
        Config dataclass with all settings.
    """
    if config_path is None:
        config_path = Path(__file__).parent.parent.parent / "config.yaml"
    
    config_path = Path(config_path)
    
    if not config_path.exists():
        return Config()
    
    with open(config_path, 'r') as f:
        data = yaml.safe_load(f) or {}
    
    return Config(
        camera=_dict_to_dataclass(CameraConfig, data.get('camera')),
        host=_dict_to_dataclass(HostConfig, data.get('host')),
        detection=_dict_to_dataclass(DetectionConfig, data.get('detection')),
        catalog=_dict_to_dataclass(CatalogConfig, data.get('catalog')),
    )
