from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Tuple

import yaml

PRESET_DIR = Path(__file__).resolve().parent.parent / "presets"


@dataclass(frozen=True)
class LoadedPreset:
    preset_path: Path
    resolved: Dict[str, Any]
    loaded_files: Tuple[Path, ...]  # every contributing file, includes first


def _deep_merge(base: Any, override: Any) -> Any:
    """Mappings merge key by key; anything else (lists included) is replaced wholesale."""
    if not (isinstance(base, dict) and isinstance(override, dict)):
        return list(override) if isinstance(override, list) else override
    out = dict(base)
    for key, value in override.items():
        out[key] = _deep_merge(out[key], value) if key in out else value
    return out


def _load_yaml(path: Path) -> Dict[str, Any]:
    data = yaml.safe_load(path.read_text(encoding="utf-8"))
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"preset {path.name} must hold a mapping at the top level")
    return data


def resolve_preset_path(name_or_path: str | Path) -> Path:
    """
    Accept either a path to a YAML file or the bare name of a bundled preset
    ("classic" -> presets/classic.yaml).
    """
    candidate = Path(name_or_path).expanduser()
    if candidate.suffix in (".yaml", ".yml") and candidate.exists():
        return candidate.resolve()
    bundled = PRESET_DIR / f"{Path(name_or_path).stem}.yaml"
    if bundled.exists():
        return bundled
    raise ValueError(f"preset not found: {name_or_path}")


def load_preset(preset: str | Path, _seen: Tuple[Path, ...] = ()) -> LoadedPreset:
    """
    Load a preset YAML that may contain:

      include:
        - classic.yaml

    Includes are resolved relative to the including file, merged in order,
    and may themselves include further files. Returns the merged mapping plus
    every file that contributed to it.
    """
    preset_path = resolve_preset_path(preset)
    if preset_path in _seen:
        raise ValueError(f"include cycle through {preset_path}")
    preset_data = _load_yaml(preset_path)

    include_list = preset_data.pop("include", None) or []
    if not isinstance(include_list, list):
        raise ValueError(f"'include' must be a list in {preset_path}")

    loaded: List[Path] = []
    merged: Dict[str, Any] = {}
    for rel in include_list:
        if not isinstance(rel, str):
            raise ValueError(f"include entries must be strings. Got {type(rel)} in {preset_path}")
        inc = load_preset(preset_path.parent / rel, _seen + (preset_path,))
        merged = _deep_merge(merged, inc.resolved)
        loaded.extend(inc.loaded_files)

    merged = _deep_merge(merged, preset_data)
    loaded.append(preset_path)

    return LoadedPreset(
        preset_path=preset_path,
        resolved=merged,
        loaded_files=tuple(loaded),
    )
