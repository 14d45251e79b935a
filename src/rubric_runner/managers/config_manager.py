# src/rubric_runner/managers/config_manager.py
import json
import logging
from typing import Any, Dict

from pydantic import BaseModel, Field, ValidationError

from rubric_runner.utils.path_utils import PathUtils

logger = logging.getLogger(__name__)


class DebugSettings(BaseModel):
    level: str = "WARNING"
    module_levels: Dict[str, str] = Field(default_factory=dict)
    silenced_loggers: Dict[str, str] = Field(default_factory=dict)


class PathSettings(BaseModel):
    """Submission-relative locations of the graded files."""
    html: str = "index.html"
    css: str = "css/style.css"


class PlaceholderSettings(BaseModel):
    """Template texts a student must replace."""
    title: str = "My Page Title"
    author: str = "your name"


class LintSettings(BaseModel):
    html: Dict[str, Any] = Field(default_factory=dict)
    css: Dict[str, Any] = Field(default_factory=dict)


class InlinerSettings(BaseModel):
    keep_link_tags: bool = True
    load_remote_stylesheets: bool = True


class RubricSettings(BaseModel):
    debug: DebugSettings = Field(default_factory=DebugSettings)
    paths: PathSettings = Field(default_factory=PathSettings)
    placeholders: PlaceholderSettings = Field(default_factory=PlaceholderSettings)
    lint: LintSettings = Field(default_factory=LintSettings)
    inliner: InlinerSettings = Field(default_factory=InlinerSettings)


class ConfigManager:
    """
    A singleton holding the rubric settings.
    It validates settings.json from the package into a RubricSettings model;
    sections missing from the file take their defaults.
    """
    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super(ConfigManager, cls).__new__(cls)
            cls._instance._initialize()
        return cls._instance

    def _initialize(self):
        self.settings = RubricSettings()
        self.reset()
        logger.debug("ConfigManager initialized.")

    def reset(self) -> RubricSettings:
        """Reloads the settings from settings.json, discarding in-memory changes."""
        config_path = PathUtils.get_settings_file()
        if not config_path.exists():
            logger.warning("settings.json not found at %s. Using defaults.", config_path)
            self.settings = RubricSettings()
            return self.settings

        try:
            with open(config_path, "r", encoding="utf-8") as f:
                self.settings = RubricSettings.model_validate(json.load(f))
            logger.debug("Configuration has been (re)loaded from settings.json.")
        except (OSError, json.JSONDecodeError, ValidationError) as e:
            logger.error("Failed to load settings.json: %s", e, exc_info=True)
            self.settings = RubricSettings()
        return self.settings


# The global singleton instance used across the package.
config_manager = ConfigManager()
