#!/usr/bin/env python3
# ======================================================================
#  Config Service - Configuration loading and BuildConfig construction
#  - Loads config from defaults, YAML files, env vars and overrides
#  - Caches the composed dict; reload() recomposes
#  - build_config() is the only place env/YAML values become a BuildConfig
# ======================================================================

from __future__ import annotations

import logging
import os
import posixpath
from typing import Any

import yaml

from linkprune.helpers.dto.config_dto import BuildConfig, ProviderSpec
from linkprune.helpers.exceptions import ConfigError
from linkprune.helpers.paths_helper import normalize_path

# ======================================================================
# Internal Constants (Not User-Configurable)
# ======================================================================

PROJECT_CONFIG_FILENAME = "linkprune.yaml"
ENV_PREFIX = "LINKPRUNE_"
ENV_CONFIG_PATH = "LINKPRUNE_CONFIG"

# On-demand overlay services shipped by the framework: directory name -> controller class
FRAMEWORK_PROVIDERS: dict[str, str] = {
    "action-sheet": "ActionSheetController",
    "alert": "AlertController",
    "loading": "LoadingController",
    "modal": "ModalController",
    "picker": "PickerController",
    "popover": "PopoverController",
    "toast": "ToastController",
}

# Keys resolved against root_dir when relative
PATH_KEYS = ("src_dir", "root_descriptor_path", "app_entry_point", "framework_dir", "framework_entry_point")

DEFAULT_CONFIG: dict[str, Any] = {
    # Project layout
    "root_dir": ".",
    "src_dir": "src",
    "root_descriptor_path": "src/app/app.module.ts",
    "app_entry_point": "src/app/main.ts",
    "framework_dir": "node_modules/ionic-angular",
    "framework_entry_point": None,  # defaults to <framework_dir>/index.js
    # Build mode
    "compiled_mode": False,
    # File naming
    "descriptor_suffix": ".module.ts",
    "compiled_suffix": ".ngfactory",
    "compiled_class_suffix": "NgFactory",
    "compiled_factory_marker": ".ngfactory.",
    # Framework names
    "route_annotation": "IonicPage",
    "registrar_annotation": "NgModule",
    "framework_module": "IonicModule",
    "framework_root_method": "forRoot",
    "compiled_registry_field": "_DeepLinkConfigToken",
    # Provider pass catalogue
    "providers": list(FRAMEWORK_PROVIDERS),
}


class ConfigService:
    """
    Service for loading and caching linkprune configuration.

    Composes config from, in order:
      1) Built-in defaults
      2) <root_dir>/linkprune.yaml (if present)
      3) $LINKPRUNE_CONFIG (if set)
      4) config_path passed to the constructor (e.g. the CLI's --config)
      5) Environment variables (LINKPRUNE_<KEY>)
      6) overrides dict passed to the constructor

    Environment lookups happen only here; components receive the resulting
    BuildConfig explicitly.
    """

    def __init__(
        self,
        root_dir: str | None = None,
        config_path: str | None = None,
        overrides: dict[str, Any] | None = None,
    ) -> None:
        self._root_dir = root_dir
        self._config_path = config_path
        self._overrides = dict(overrides or {})
        self._config: dict[str, Any] | None = None
        self._logger = logging.getLogger(__name__)

    def get_config(self, force_reload: bool = False) -> dict[str, Any]:
        """
        Get the composed configuration.

        Args:
            force_reload: If True, bypass cache and reload from sources

        Returns:
            Complete configuration dict
        """
        if self._config is None or force_reload:
            self._config = self._compose()
        return self._config

    def get(self, key_path: str, default: Any = None) -> Any:
        """
        Get a config value by dotted path.

        Example:
            >>> service.get("route_annotation")
            'IonicPage'
        """
        node: Any = self.get_config()
        for part in key_path.split("."):
            if not isinstance(node, dict) or part not in node:
                return default
            node = node[part]
        return node

    def reload(self) -> dict[str, Any]:
        """Force reload configuration from all sources."""
        self._logger.info("[config] Reloading configuration from all sources")
        return self.get_config(force_reload=True)

    def build_config(self) -> BuildConfig:
        """
        Validate the composed dict and turn it into a BuildConfig.

        Raises:
            ConfigError: Missing root descriptor, bad compiled_mode value or unknown provider.
        """
        cfg = self.get_config()
        root_dir = normalize_path(str(cfg.get("root_dir") or "."))
        if not cfg.get("root_descriptor_path"):
            raise ConfigError("root_descriptor_path is required")

        paths = {key: self._resolve(root_dir, cfg.get(key)) for key in PATH_KEYS}
        if not paths["framework_entry_point"]:
            paths["framework_entry_point"] = posixpath.join(paths["framework_dir"], "index.js")

        return BuildConfig(
            root_dir=root_dir,
            src_dir=paths["src_dir"],
            root_descriptor_path=paths["root_descriptor_path"],
            app_entry_point=paths["app_entry_point"],
            framework_dir=paths["framework_dir"],
            framework_entry_point=paths["framework_entry_point"],
            compiled_mode=self._parse_bool("compiled_mode", cfg.get("compiled_mode")),
            descriptor_suffix=str(cfg["descriptor_suffix"]),
            compiled_suffix=str(cfg["compiled_suffix"]),
            compiled_class_suffix=str(cfg["compiled_class_suffix"]),
            route_annotation=str(cfg["route_annotation"]),
            registrar_annotation=str(cfg["registrar_annotation"]),
            framework_module=str(cfg["framework_module"]),
            framework_root_method=str(cfg["framework_root_method"]),
            compiled_registry_field=str(cfg["compiled_registry_field"]),
            compiled_factory_marker=str(cfg["compiled_factory_marker"]),
            providers=self._build_providers(paths["framework_dir"], cfg.get("providers") or []),
        )

    # ----------------------------------------------------------------------
    # Private composition logic
    # ----------------------------------------------------------------------

    def _compose(self) -> dict[str, Any]:
        cfg = dict(DEFAULT_CONFIG)
        cfg["providers"] = list(DEFAULT_CONFIG["providers"])
        if self._root_dir is not None:
            cfg["root_dir"] = self._root_dir

        # 1) Project-local YAML
        project_file = os.path.join(str(cfg["root_dir"]), PROJECT_CONFIG_FILENAME)
        self._merge(cfg, self._load_yaml(project_file))

        # 2) Optional path via env
        env_path = os.getenv(ENV_CONFIG_PATH)
        if env_path:
            self._merge(cfg, self._load_yaml(env_path, required=True))

        # 3) Explicit config file
        if self._config_path:
            self._merge(cfg, self._load_yaml(self._config_path, required=True))

        # 4) Environment variable overrides
        self._apply_env_overrides(cfg)

        # 5) Direct overrides
        self._merge(cfg, self._overrides)

        self._logger.debug("[config] compose() loaded config; keys: %s", sorted(cfg))
        return cfg

    def _merge(self, cfg: dict[str, Any], source: dict[str, Any]) -> None:
        for key, value in source.items():
            if key not in DEFAULT_CONFIG:
                self._logger.warning(f"[config] Ignoring unknown config key: {key}")
                continue
            cfg[key] = value

    def _load_yaml(self, path: str, required: bool = False) -> dict[str, Any]:
        """Load a YAML mapping; a missing optional file yields {}."""
        if not os.path.exists(path):
            if required:
                raise ConfigError(f"Config file not found: {path}")
            return {}
        try:
            with open(path, encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML in {path}: {e}") from e
        if not isinstance(data, dict):
            raise ConfigError(f"Config file {path} must contain a mapping")
        self._logger.debug(f"[config] Loaded {path}")
        return data

    def _apply_env_overrides(self, cfg: dict[str, Any]) -> None:
        """
        Support LINKPRUNE_<KEY> overrides for every known key.

        Supported formats:
          LINKPRUNE_ROOT_DIR=/work/app
          LINKPRUNE_COMPILED_MODE=true
          LINKPRUNE_PROVIDERS=alert,modal
        """
        for k, v in os.environ.items():
            if not k.startswith(ENV_PREFIX) or k == ENV_CONFIG_PATH:
                continue
            key = k[len(ENV_PREFIX) :].lower()
            if key not in DEFAULT_CONFIG:
                self._logger.debug(f"[config] Ignoring environment override for unknown key: {key}")
                continue
            if key == "providers":
                cfg[key] = [name.strip() for name in v.split(",") if name.strip()]
            else:
                cfg[key] = v

    @staticmethod
    def _resolve(root_dir: str, value: Any) -> str:
        if not value:
            return ""
        path = normalize_path(str(value))
        if posixpath.isabs(path):
            return path
        return normalize_path(posixpath.join(root_dir, path))

    @staticmethod
    def _parse_bool(key: str, value: Any) -> bool:
        if isinstance(value, bool):
            return value
        text = str(value).strip().lower()
        if text in ("true", "1", "yes", "on"):
            return True
        if text in ("false", "0", "no", "off", ""):
            return False
        raise ConfigError(f"{key} must be a boolean, got {value!r}")

    @staticmethod
    def _build_providers(framework_dir: str, entries: list[Any]) -> tuple[ProviderSpec, ...]:
        """
        Provider catalogue from names (`"alert"`) or mappings (`{name, class_name}`).

        Paths follow the framework's layout:
        components/<name>/<name>-controller.js, -component.js, -component.ngfactory.js
        """
        specs = []
        for entry in entries:
            if isinstance(entry, dict):
                name = str(entry.get("name", ""))
                class_name = entry.get("class_name")
            else:
                name = str(entry)
                class_name = FRAMEWORK_PROVIDERS.get(name)
            if not name or not class_name:
                raise ConfigError(f"Unknown provider {entry!r}; known providers: {sorted(FRAMEWORK_PROVIDERS)}")
            component_dir = posixpath.join(framework_dir, "components", name)
            specs.append(
                ProviderSpec(
                    name=name,
                    class_name=str(class_name),
                    controller_path=posixpath.join(component_dir, f"{name}-controller.js"),
                    component_path=posixpath.join(component_dir, f"{name}-component.js"),
                    component_factory_path=posixpath.join(component_dir, f"{name}-component.ngfactory.js"),
                )
            )
        return tuple(specs)
