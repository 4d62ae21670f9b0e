"""
jtml Configuration

Loads configuration from a YAML file or environment variables.
Controls indentation, comment handling, the self-terminating tag list
and the output file extensions used by the CLI.
"""

import logging
import os
from pathlib import Path
from typing import Any, Dict, FrozenSet, Optional

import yaml

from jtml.parser.nodes import SELF_TERMINATING_TAGS
from jtml.tools.format import FormatOptions, IndentConfig
from jtml.tools.html import HtmlOptions

logger = logging.getLogger(__name__)


# Default configuration file locations (checked in order)
CONFIG_SEARCH_PATHS = [
    Path("jtml.yaml"),
    Path.home() / ".jtml" / "config.yaml",
]


DEFAULT_CONFIG = {
    "indent": "4",                  # N spaces, "spaces:N" or "tab"
    "ignore_comments": False,
    "self_terminating_tags": sorted(SELF_TERMINATING_TAGS),

    # CLI output naming: <source stem>.<extension>, next to the source
    "html_extension": "html",
    "formatted_extension": "formatted_jtml",
}

_TRUE_STRINGS = ("1", "true", "yes", "on")


class JtmlConfig:
    """Configuration for the compiler and formatter."""

    def __init__(self, config_path: Optional[Path] = None):
        self._config: Dict[str, Any] = dict(DEFAULT_CONFIG)
        self._config_path: Optional[Path] = None

        # Load from file if found
        self._load_config(config_path)

        # Override with environment variables
        self._apply_env_overrides()

    def _load_config(self, explicit_path: Optional[Path] = None) -> None:
        """Load configuration from YAML file."""
        search_paths = [Path(explicit_path)] if explicit_path else CONFIG_SEARCH_PATHS

        for config_path in search_paths:
            if config_path.exists():
                try:
                    with open(config_path, 'r', encoding='utf-8') as f:
                        user_config = yaml.safe_load(f) or {}
                    if not isinstance(user_config, dict):
                        raise ValueError("top level must be a mapping")
                    tags = user_config.get("self_terminating_tags")
                    if tags is not None and not isinstance(tags, list):
                        raise ValueError("self_terminating_tags must be a list of tag names")
                    self._config.update(user_config)
                    self._config_path = config_path
                    logger.debug(f"Loaded config from {config_path}")
                    return
                except (OSError, yaml.YAMLError, ValueError) as e:
                    logger.warning(f"Failed to load config from {config_path}: {e}")

        if explicit_path:
            logger.warning(f"Config file {explicit_path} not found, using defaults")

    def _apply_env_overrides(self) -> None:
        """Apply environment variable overrides."""
        if "JTML_INDENT" in os.environ:
            self._config["indent"] = os.environ["JTML_INDENT"]
        if "JTML_IGNORE_COMMENTS" in os.environ:
            value = os.environ["JTML_IGNORE_COMMENTS"].strip().lower()
            self._config["ignore_comments"] = value in _TRUE_STRINGS

    @property
    def config_path(self) -> Optional[Path]:
        """Path to loaded config file, or None if using defaults."""
        return self._config_path

    @property
    def indent(self) -> IndentConfig:
        """Indentation unit for the formatter. Raises ValueError if malformed."""
        return IndentConfig.parse(self._config["indent"])

    @property
    def ignore_comments(self) -> bool:
        value = self._config.get("ignore_comments", False)
        if isinstance(value, str):
            return value.strip().lower() in _TRUE_STRINGS
        return bool(value)

    @property
    def self_terminating_tags(self) -> FrozenSet[str]:
        return frozenset(self._config.get("self_terminating_tags") or ())

    @property
    def html_extension(self) -> str:
        return str(self._config.get("html_extension", "html")).lstrip(".")

    @property
    def formatted_extension(self) -> str:
        return str(self._config.get("formatted_extension", "formatted_jtml")).lstrip(".")

    def format_options(self) -> FormatOptions:
        return FormatOptions(
            indent=self.indent,
            ignore_comments=self.ignore_comments,
            self_terminating_tags=self.self_terminating_tags,
        )

    def html_options(self) -> HtmlOptions:
        return HtmlOptions(
            ignore_comments=self.ignore_comments,
            self_terminating_tags=self.self_terminating_tags,
        )

    def set(self, key: str, value: Any) -> None:
        """Override a single value (used for command-line flags)."""
        self._config[key] = value

    def to_dict(self) -> Dict[str, Any]:
        """Export current configuration as dict."""
        return {
            "indent": str(self.indent),
            "ignore_comments": self.ignore_comments,
            "self_terminating_tags": sorted(self.self_terminating_tags),
            "html_extension": self.html_extension,
            "formatted_extension": self.formatted_extension,
            "config_file": str(self._config_path) if self._config_path else None,
        }


# Global config instance (lazy-loaded)
_config: Optional[JtmlConfig] = None


def get_config(config_path: Optional[Path] = None) -> JtmlConfig:
    """Get the global config instance, loading if needed."""
    global _config
    if _config is None or config_path is not None:
        _config = JtmlConfig(config_path)
    return _config


def write_default_config(path: Optional[Path] = None) -> Path:
    """
    Write a default configuration file.

    Returns the path where config was written.
    """
    if path is None:
        path = Path.home() / ".jtml" / "config.yaml"

    path.parent.mkdir(parents=True, exist_ok=True)

    tags = "\n".join(f"  - {tag}" for tag in sorted(SELF_TERMINATING_TAGS))
    config_content = f"""# jtml configuration
#
# Any setting here can be overridden on the command line,
# indent and ignore_comments also via JTML_INDENT / JTML_IGNORE_COMMENTS.

# Formatter indentation: a number of spaces, "spaces:N" or "tab"
indent: "4"

# Drop // comments from both HTML and formatted output
ignore_comments: false

# Tags written as tag(attrs) with no body, and as <tag/> in HTML
self_terminating_tags:
{tags}

# Output file extensions (written next to the source file)
html_extension: html
formatted_extension: formatted_jtml
"""

    with open(path, 'w', encoding='utf-8') as f:
        f.write(config_content)

    return path
