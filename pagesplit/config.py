from __future__ import annotations

import os
import platform
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

import yaml

from .errors import ConfigError

CPDF_ENV_VAR = "PAGESPLIT_CPDF"
CPDF_ROOT = Path("./cpdf")
DEFAULT_OUTPUT_DIR = Path("./output/")


def platform_dir(system: Optional[str] = None, machine: Optional[str] = None) -> str:
    """Name of the cpdf binary directory shipped for this host."""
    system = (system or platform.system()).lower()
    machine = (machine or platform.machine()).lower()
    arm = machine.startswith(("arm", "aarch"))
    if system == "darwin":
        return "OSX-ARM" if arm else "OSX-Intel"
    if system == "windows":
        return "Windows64bit" if machine.endswith("64") else "Windows32bit"
    return "Linux-ARM-64bit" if arm else "Linux-Intel-64bit"


def default_cpdf_path() -> Path:
    name = "cpdf.exe" if platform.system().lower() == "windows" else "cpdf"
    return CPDF_ROOT / platform_dir() / name


@dataclass
class RasterizerConfig:
    cpdf_path: Optional[Path] = None
    gs: str = "gs"

    def __post_init__(self) -> None:
        if self.cpdf_path is not None:
            self.cpdf_path = Path(self.cpdf_path)
        if not isinstance(self.gs, str):
            raise ConfigError(f"rasterizer.gs must be a string, got {self.gs!r}")

    def resolve_cpdf(self) -> Path:
        env_value = os.environ.get(CPDF_ENV_VAR)
        if env_value:
            return Path(env_value)
        if self.cpdf_path is not None:
            return self.cpdf_path
        return default_cpdf_path()


@dataclass
class OutputConfig:
    output_dir: Path = DEFAULT_OUTPUT_DIR

    def __post_init__(self) -> None:
        self.output_dir = Path(self.output_dir)


@dataclass
class Config:
    rasterizer: RasterizerConfig = field(default_factory=RasterizerConfig)
    output: OutputConfig = field(default_factory=OutputConfig)
    path: Optional[Path] = None


def default_config() -> Config:
    return Config()


def load_config(path: Path) -> Config:
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except (OSError, yaml.YAMLError) as exc:
        raise ConfigError(f"Failed to read config `{path}`: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigError(f"Config `{path}` must be a mapping")
    try:
        rasterizer_cfg = RasterizerConfig(**(data.get("rasterizer") or {}))
        output_cfg = OutputConfig(**(data.get("output") or {}))
    except TypeError as exc:
        raise ConfigError(f"Invalid config `{path}`: {exc}") from exc
    return Config(rasterizer=rasterizer_cfg, output=output_cfg, path=path)


__all__ = [
    "Config",
    "OutputConfig",
    "RasterizerConfig",
    "default_config",
    "default_cpdf_path",
    "load_config",
    "platform_dir",
]
