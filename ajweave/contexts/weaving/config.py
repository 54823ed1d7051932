"""
Weaving configuration.

A run is described by an immutable WeaveConfig. It can be built directly or
loaded from a YAML file (via OmegaConf) with keyword overrides on top:

    # weave.yaml
    source: "1.8"
    target: "1.8"
    write_to_log: false
    class_dirs: [build/classes/java/main]
    classpath: [lib/aspectjrt.jar]

    >>> config = load_weave_config(Path("weave.yaml"), build_dir=Path("build"))
"""

import os
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

from dotenv import load_dotenv
from omegaconf import OmegaConf

load_dotenv()

AJC_COMPILER = os.getenv("AJC_COMPILER", "ajc")
DEFAULT_BUILD_DIR = Path(os.getenv("AJWEAVE_BUILD_DIR", "build"))

DEFAULT_LANGUAGE_LEVEL = "1.7"

_PATH_TUPLE_FIELDS = ("class_dirs", "classpath")
_PATH_FIELDS = ("build_dir", "output_dir")


@dataclass(frozen=True)
class WeaveConfig:
    """
    Inputs of one weaving run.

    Attributes:
        class_dirs: Compiled class directories woven in place (ajc -inpath)
        classpath: Classpath entries, also used as the aspect path
        build_dir: Build root holding the staging directory and ajc.log
        output_dir: Where woven classes are published (default: derived from class_dirs)
        source: Java source language level
        target: Java target bytecode level
        write_to_log: Let ajc write its messages to ajc.log instead of reporting inline
        compiler: ajc executable (default: AJC_COMPILER env variable, else "ajc")
    """

    class_dirs: Tuple[Path, ...] = ()
    classpath: Tuple[Path, ...] = ()
    build_dir: Path = DEFAULT_BUILD_DIR
    output_dir: Optional[Path] = None
    source: str = DEFAULT_LANGUAGE_LEVEL
    target: str = DEFAULT_LANGUAGE_LEVEL
    write_to_log: bool = False
    compiler: str = AJC_COMPILER

    @property
    def log_path(self) -> Path:
        return self.build_dir / "ajc.log"

    def resolve_output_dir(self) -> Path:
        """
        Directory the woven classes are published to.

        Uses output_dir when set, otherwise the class directory named "java",
        otherwise the first class directory.

        Raises:
            ValueError: If neither output_dir nor any class directory is configured
        """
        if self.output_dir is not None:
            return self.output_dir.absolute()
        if not self.class_dirs:
            raise ValueError("No output_dir configured and no class_dirs to derive it from")
        for class_dir in self.class_dirs:
            if class_dir.name == "java":
                return class_dir.absolute()
        return self.class_dirs[0].absolute()

    def existing_classpath(self) -> Tuple[Path, ...]:
        """Classpath entries that exist on disk."""
        return tuple(entry for entry in self.classpath if entry.exists())


def _coerce(values: Dict[str, Any]) -> Dict[str, Any]:
    """Convert plain YAML/CLI values into WeaveConfig field types."""
    coerced = dict(values)
    for name in _PATH_TUPLE_FIELDS:
        if name in coerced:
            coerced[name] = tuple(Path(p) for p in coerced[name])
    for name in _PATH_FIELDS:
        if coerced.get(name) is not None:
            coerced[name] = Path(coerced[name])
    for name in ("source", "target"):
        if name in coerced:
            coerced[name] = str(coerced[name])
    if "write_to_log" in coerced:
        coerced["write_to_log"] = bool(coerced["write_to_log"])
    return coerced


def load_weave_config(config_path: Optional[Path] = None, **overrides) -> WeaveConfig:
    """
    Load a WeaveConfig from YAML and apply keyword overrides.

    Overrides whose value is None are ignored, so CLI options that were not
    given leave the file (or default) value in place.

    Args:
        config_path: Optional YAML file; missing keys keep their defaults
        **overrides: Field values that take precedence over the file

    Returns:
        Frozen WeaveConfig

    Raises:
        ValueError: If the file or overrides name an unknown field
    """
    values: Dict[str, Any] = {}
    if config_path is not None:
        loaded = OmegaConf.to_container(OmegaConf.load(config_path), resolve=True)
        values.update(loaded or {})

    values.update({key: value for key, value in overrides.items() if value is not None})

    known = {f.name for f in fields(WeaveConfig)}
    unknown = sorted(set(values) - known)
    if unknown:
        raise ValueError(f"Unknown weave config keys: {unknown}. Available keys: {sorted(known)}")

    return WeaveConfig(**_coerce(values))
