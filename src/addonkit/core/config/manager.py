"""
addonkit configuration management (YAML layers + environment overrides).
"""
from __future__ import annotations

import json
import logging
import os
import re
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional, Tuple, Union

from addonkit.core.exceptions import ConfigError
from addonkit.core.utils.io import iter_yaml_files, read_yaml
from addonkit.core.utils.merge import deep_merge
from addonkit.data import get_data_path

logger = logging.getLogger(__name__)

PROJECT_CONFIG_NAMES = ("addonkit.yaml", "addonkit.yml")


class ConfigManager:
    """Load, merge, and validate addonkit configuration.

    Configuration sources (highest to lowest priority):
    1. Environment variables: ADDONKIT_<section>__<key>
    2. Project config: <config-dir>/addonkit.yaml (or .yml)
    3. Bundled defaults: addonkit.data/config/*.yaml (alphabetical order)
    """

    ENV_PREFIX = "ADDONKIT_"
    ARRAY_APPEND_MARKER = object()

    def __init__(self, config_dir: Optional[Path] = None) -> None:
        self.config_dir = Path(config_dir).resolve() if config_dir else None
        self.core_config_dir = get_data_path("config")

    def project_config_path(self) -> Optional[Path]:
        if self.config_dir is None:
            return None
        for name in PROJECT_CONFIG_NAMES:
            candidate = self.config_dir / name
            if candidate.exists():
                return candidate
        return None

    # ---------- env overrides ----------

    def _as_bool(self, v: str) -> Optional[bool]:
        low = v.strip().lower()
        if low in {"true", "false"}:
            return low == "true"
        return None

    def _as_int(self, v: str) -> Optional[int]:
        if re.fullmatch(r"[-+]?\d+", v.strip() or " "):
            return int(v)
        return None

    def _as_float(self, v: str) -> Optional[float]:
        s = v.strip()
        if re.fullmatch(r"[-+]?\d*\.\d+", s) or re.fullmatch(r"[-+]?\d+\.\d*", s):
            return float(s)
        return None

    def _as_json(self, v: str) -> Optional[Any]:
        s = v.strip()
        if (s.startswith("{") and s.endswith("}")) or (s.startswith("[") and s.endswith("]")):
            try:
                return json.loads(s)
            except ValueError:
                return None
        return None

    def _coerce_type(self, value: str) -> Any:
        for caster in (self._as_bool, self._as_int, self._as_float, self._as_json):
            result = caster(value)
            if result is not None:
                return result
        return value.strip()

    def _parse_env_key(self, raw: str) -> List[Union[str, object]]:
        processed: List[Union[str, object]] = []
        for seg in raw.split("__"):
            if seg == "":
                raise ConfigError(f"Malformed {self.ENV_PREFIX}* key: empty segment in '{raw}'.")
            if seg.upper() == "APPEND":
                processed.append(self.ARRAY_APPEND_MARKER)
            else:
                processed.append(seg)
        return processed

    def _iter_env_overrides(self) -> Iterator[Tuple[List[Union[str, object]], Any]]:
        for key in sorted(os.environ.keys()):
            if not key.startswith(self.ENV_PREFIX):
                continue
            raw = key[len(self.ENV_PREFIX):]
            if not raw:
                continue
            yield self._parse_env_key(raw), self._coerce_type(os.environ[key])

    def _set_nested(self, root: Dict[str, Any], path: List[Union[str, object]], value: Any) -> None:
        cur: Any = root
        for i, part in enumerate(path):
            is_last = i == len(path) - 1
            if part is self.ARRAY_APPEND_MARKER:
                if not is_last or not isinstance(cur, list):
                    raise ConfigError("APPEND must be the last segment and target a list")
                cur.append(value)
                return
            if not isinstance(cur, dict):
                raise ConfigError("Environment override path traverses a non-mapping value")
            # Case-insensitive match against existing keys; env vars are often upper-cased.
            lower_map = {k.lower(): k for k in cur.keys() if isinstance(k, str)}
            key = lower_map.get(str(part).lower(), str(part))
            if is_last:
                cur[key] = value
                return
            if key not in cur:
                nxt = path[i + 1]
                cur[key] = [] if nxt is self.ARRAY_APPEND_MARKER else {}
            cur = cur[key]

    def apply_env_overrides(self, cfg: Dict[str, Any]) -> None:
        for path, typed_value in self._iter_env_overrides():
            logger.debug("Applying env override %s", path)
            self._set_nested(cfg, path, typed_value)

    # ---------- loading ----------

    def load_yaml(self, path: Path) -> Dict[str, Any]:
        # Fail closed: configuration must never silently ignore invalid YAML.
        data = read_yaml(path, default={}, raise_on_error=True)
        if not isinstance(data, dict):
            raise ConfigError(f"Config file {path} must contain a mapping", context={"path": str(path)})
        return data

    def load_config(self, validate: bool = True) -> Dict[str, Any]:
        """Load and merge configuration from every layer.

        Args:
            validate: If True, validate against the bundled JSON schema

        Returns:
            Merged configuration dictionary
        """
        cfg: Dict[str, Any] = {}
        for path in iter_yaml_files(self.core_config_dir):
            cfg = deep_merge(cfg, self.load_yaml(path))

        project_path = self.project_config_path()
        if project_path is not None:
            logger.debug("Loading project config %s", project_path)
            cfg = deep_merge(cfg, self.load_yaml(project_path))

        self.apply_env_overrides(cfg)

        if validate:
            from addonkit.core.schemas import validate_payload

            validate_payload(cfg, "config.schema.yaml")
        return cfg


__all__ = ["ConfigManager", "PROJECT_CONFIG_NAMES"]
