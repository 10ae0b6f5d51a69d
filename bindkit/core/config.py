"""
BindKit Configuration Management

Handles loading and validation of bindkit.config.json. Every setting has a
default matching the upstream Go binding, so a project without a config file
generates the same output as one with an empty file.
"""

import json
import logging
from pathlib import Path
from dataclasses import dataclass, field
from typing import Dict, Any, Optional, List

from bindkit.core.constants import (
    GenerationDefaults,
    METHODS_TO_SPREAD,
    EXAMPLE_LANGUAGES,
    IGNORE_CLASSES,
    IGNORE_CLASS_PREFIXES,
    ALLOWED_MISSING,
    SELECTOR_MARKERS,
)


__version__ = "0.3.0"

logger = logging.getLogger(__name__)


def get_version() -> str:
    return __version__


@dataclass
class ValidationConfig:
    """Coverage validation exclusions."""
    ignore_classes: List[str] = field(default_factory=lambda: list(IGNORE_CLASSES))
    ignore_class_prefixes: List[str] = field(default_factory=lambda: list(IGNORE_CLASS_PREFIXES))
    allowed_missing: List[str] = field(default_factory=lambda: list(ALLOWED_MISSING))

    def is_ignored_class(self, class_name: str) -> bool:
        if class_name in self.ignore_classes:
            return True
        return any(class_name.startswith(prefix) for prefix in self.ignore_class_prefixes)


@dataclass
class BindKitConfig:
    """Complete BindKit configuration."""
    package: str = GenerationDefaults.PACKAGE
    target_language: str = GenerationDefaults.TARGET_LANGUAGE
    handle_type: str = GenerationDefaults.HANDLE_TYPE
    selector_style: str = GenerationDefaults.SELECTOR_STYLE
    options_prefix: str = GenerationDefaults.OPTIONS_PREFIX
    inheritance_key: str = GenerationDefaults.INHERITANCE_KEY
    comment_width: int = GenerationDefaults.COMMENT_WIDTH
    methods_to_spread: List[str] = field(default_factory=lambda: list(METHODS_TO_SPREAD))
    example_languages: List[str] = field(default_factory=lambda: list(EXAMPLE_LANGUAGES))
    validation: ValidationConfig = field(default_factory=ValidationConfig)

    def should_spread(self, class_name: str, method_name: str) -> bool:
        """Check if a method's object argument is always spread into an options struct."""
        return f"{class_name}.{method_name}" in self.methods_to_spread


def load_bindkit_config(project_root: Optional[str] = None) -> BindKitConfig:
    """
    Load BindKit configuration from bindkit.config.json or fall back to defaults.

    Args:
        project_root: Directory holding the config file (defaults to current directory)

    Returns:
        BindKitConfig object with loaded or default configuration
    """
    if project_root is None:
        project_root = str(Path.cwd())

    config_path = Path(project_root) / GenerationDefaults.CONFIG_FILE

    if config_path.exists():
        return _load_config_from_file(config_path)

    logger.debug(f"No {GenerationDefaults.CONFIG_FILE} in {project_root}, using defaults")
    return BindKitConfig()


def _load_config_from_file(config_path: Path) -> BindKitConfig:
    """Load configuration from existing file."""
    try:
        with open(config_path, 'r', encoding='utf-8') as f:
            config_data = json.load(f)
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON in {config_path}: {e}")
    except OSError as e:
        raise ValueError(f"Failed to load config from {config_path}: {e}")

    if not isinstance(config_data, dict):
        raise ValueError(f"{config_path} must contain a JSON object at the root")

    config = _validate_and_convert_config(config_data)
    logger.info(f"Loaded BindKit config from {config_path}")
    return config


def _validate_and_convert_config(config_data: Dict[str, Any]) -> BindKitConfig:
    """Validate and convert raw config data to BindKitConfig object."""
    defaults = BindKitConfig()

    selector_style = config_data.get("selectorStyle", defaults.selector_style)
    if selector_style not in SELECTOR_MARKERS:
        raise ValueError(
            f"Invalid selector style: {selector_style} "
            f"(expected one of {', '.join(sorted(SELECTOR_MARKERS))})"
        )

    comment_width = config_data.get("commentWidth", defaults.comment_width)
    if not isinstance(comment_width, int) or isinstance(comment_width, bool) or comment_width < 0:
        raise ValueError(f"Invalid comment width: {comment_width!r}")

    validation_data = config_data.get("validation", {})
    if not isinstance(validation_data, dict):
        raise ValueError("'validation' must be an object")

    validation = ValidationConfig(
        ignore_classes=_as_str_list(validation_data, "ignoreClasses", defaults.validation.ignore_classes),
        ignore_class_prefixes=_as_str_list(
            validation_data, "ignoreClassPrefixes", defaults.validation.ignore_class_prefixes
        ),
        allowed_missing=_as_str_list(validation_data, "allowedMissing", defaults.validation.allowed_missing),
    )

    return BindKitConfig(
        package=_as_str(config_data, "package", defaults.package),
        target_language=_as_str(config_data, "targetLanguage", defaults.target_language),
        handle_type=_as_str(config_data, "handleType", defaults.handle_type),
        selector_style=selector_style,
        options_prefix=_as_str(config_data, "optionsPrefix", defaults.options_prefix),
        inheritance_key=_as_str(config_data, "inheritanceKey", defaults.inheritance_key),
        comment_width=comment_width,
        methods_to_spread=_as_str_list(config_data, "methodsToSpread", defaults.methods_to_spread),
        example_languages=_as_str_list(config_data, "exampleLanguages", defaults.example_languages),
        validation=validation,
    )


def _as_str(data: Dict[str, Any], key: str, default: str) -> str:
    value = data.get(key, default)
    if not isinstance(value, str) or not value:
        raise ValueError(f"'{key}' must be a non-empty string")
    return value


def _as_str_list(data: Dict[str, Any], key: str, default: List[str]) -> List[str]:
    value = data.get(key, default)
    if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
        raise ValueError(f"'{key}' must be a list of strings")
    return list(value)
