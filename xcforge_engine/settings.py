import os
import yaml
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Optional

from .logger_setup import logger

CONFIG_FILE_NAME = "xcforge.yaml"
CONFIG_PATH_ENV = "XCFORGE_CONFIG"
LOG_LEVEL_ENV = "XCFORGE_LOG_LEVEL"

@dataclass
class Settings:
    log_level: str = "INFO"
    json_indent: Optional[int] = 2 # None writes compact JSON
    classify_on_load: bool = True # Run the classification pass before flattening
    rollup_on_load: bool = True # Roll up warning/error counts before flattening

    def to_dict(self) -> dict:
        return {
            "log_level": self.log_level,
            "json_indent": self.json_indent,
            "classify_on_load": self.classify_on_load,
            "rollup_on_load": self.rollup_on_load,
        }

    @classmethod
    def from_yaml(cls, file_path: Path, raw_yaml_content: str) -> 'Settings':
        try:
            config = yaml.safe_load(raw_yaml_content) or {}
        except yaml.YAMLError as ye:
            raise ValueError(f"YAML syntax error in {file_path.name}: {ye}")
        if not isinstance(config, dict):
            raise ValueError(f"Config {file_path.name} must be a mapping. Found type: {type(config)}")

        settings_data = config.get('xcforge', config)
        if not isinstance(settings_data, dict):
            raise ValueError(f"'xcforge' section in {file_path.name} must be a mapping. Found type: {type(settings_data)}")
        known = {f.name for f in fields(cls)}
        unknown = [key for key in settings_data if key not in known]
        if unknown:
            raise ValueError(f"Unknown settings in {file_path.name}: {unknown}")

        indent = settings_data.get('json_indent', 2)
        if indent is not None:
            try:
                indent = int(indent)
            except (TypeError, ValueError):
                raise ValueError(f"Invalid 'json_indent' value '{indent}' in {file_path.name}. It must be an integer.")

        for flag in ('classify_on_load', 'rollup_on_load'):
            if not isinstance(settings_data.get(flag, True), bool):
                raise ValueError(f"Invalid '{flag}' value '{settings_data[flag]}' in {file_path.name}. It must be true or false.")

        return cls(
            log_level=str(settings_data.get('log_level', "INFO")).upper(),
            json_indent=indent,
            classify_on_load=settings_data.get('classify_on_load', True),
            rollup_on_load=settings_data.get('rollup_on_load', True),
        )

def load_settings(config_path: Optional[Path] = None) -> Settings:
    """
    Loads settings from config_path, the XCFORGE_CONFIG environment variable,
    or xcforge.yaml in the working directory, in that order.
    A missing file gives the defaults. XCFORGE_LOG_LEVEL overrides log_level.
    """
    if config_path is None:
        env_path = os.environ.get(CONFIG_PATH_ENV)
        config_path = Path(env_path) if env_path else Path.cwd() / CONFIG_FILE_NAME

    if config_path.is_file():
        logger.debug(f"Loading settings from {config_path}")
        with open(config_path, 'r', encoding="utf-8") as f:
            settings = Settings.from_yaml(config_path, f.read())
    else:
        logger.debug(f"No settings file at {config_path}. Using defaults.")
        settings = Settings()

    env_level = os.environ.get(LOG_LEVEL_ENV)
    if env_level:
        settings.log_level = env_level.upper()
    return settings
