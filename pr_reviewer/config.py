"""
Configuration management for the reviewer election tool.

Settings are stored as YAML in `.pr-reviewer.yml` in the working directory.
"""

import copy
import logging
import os
from typing import Any, Dict, List

import yaml

from .availability import AvailabilityStore
from .exceptions import ConfigError
from .models import SelectorConfig, Weights

DEFAULT_CONFIG_FILE = ".pr-reviewer.yml"

DEFAULT_WEIGHTS = Weights().as_dict()

DEFAULT_CONFIG = {
    'team': [],
    'excluded': ['dependabot[bot]', 'github-actions[bot]'],
    'history_days': 30,        # Days of closed PR history to analyze
    'lookback_prs': None,      # Optionally limit analysis to the N most recent PRs
    'max_pending_reviews': 3,  # Pending reviews before a reviewer is deprioritized
    'weights': DEFAULT_WEIGHTS,
    'unavailable': {},
}


def default_config_path() -> str:
    """Config path from PR_REVIEWER_CONFIG, or the default file name."""
    return os.environ.get('PR_REVIEWER_CONFIG', DEFAULT_CONFIG_FILE)


class ReviewConfig:
    """Loads, validates and saves the team configuration."""

    def __init__(self, config_path: str = None):
        """
        Initialize the configuration.

        Args:
            config_path: Path to the YAML configuration file
        """
        self.config_path = config_path or default_config_path()
        self.config: Dict[str, Any] = {}
        self._load()

    @staticmethod
    def get_defaults() -> Dict[str, Any]:
        """Return a fresh copy of the default configuration."""
        return copy.deepcopy(DEFAULT_CONFIG)

    def _load(self) -> None:
        """Load the configuration file, falling back to defaults."""
        self.config = self.get_defaults()

        if not os.path.exists(self.config_path):
            logging.info(f"No configuration found at {self.config_path}, using defaults")
            return

        try:
            with open(self.config_path, 'r', encoding='utf-8') as f:
                data = yaml.safe_load(f) or {}
        except (yaml.YAMLError, IOError) as e:
            logging.warning(f"Error loading config file {self.config_path}, using defaults: {e}")
            return

        if not isinstance(data, dict):
            logging.warning(f"Config file {self.config_path} is not a mapping, using defaults")
            return

        self.config = merge_config(self.config, data)
        logging.info(f"Loaded config from {self.config_path}")

    def save(self, config: Dict[str, Any] = None) -> None:
        """
        Save the configuration to file.

        Args:
            config: Replacement configuration (merged over defaults); current one if None

        Raises:
            ConfigError: If the file could not be written
        """
        if config is not None:
            self.config = merge_config(self.get_defaults(), config)

        try:
            with open(self.config_path, 'w', encoding='utf-8') as f:
                yaml.safe_dump(self.config, f, indent=2, sort_keys=False, allow_unicode=True)
            logging.info(f"Saved config to {self.config_path}")
        except IOError as e:
            logging.error(f"Could not save config to {self.config_path}: {e}")
            raise ConfigError(f"Could not save config to {self.config_path}: {e}") from e

    def exists(self) -> bool:
        return os.path.exists(self.config_path)

    def get(self, key: str = None) -> Any:
        """Return one setting, or the whole configuration if key is None."""
        if key is None:
            return self.config
        return self.config.get(key)

    def set(self, key: str, value: Any) -> None:
        """Update a setting and save."""
        self.config[key] = value
        self.save()

    @property
    def availability(self) -> AvailabilityStore:
        """Availability store backed by the 'unavailable' section."""
        if not isinstance(self.config.get('unavailable'), dict):
            self.config['unavailable'] = {}
        return AvailabilityStore(self.config['unavailable'])

    def is_unavailable(self, login: str) -> bool:
        return self.availability.is_unavailable(login)

    def validate(self) -> None:
        """
        Check the configuration values.

        Raises:
            ConfigError: Describing every invalid value found
        """
        errors: List[str] = []

        for key in ('team', 'excluded'):
            logins = self.config.get(key)
            if not isinstance(logins, list):
                errors.append(f"'{key}' must be a list of GitHub logins")
                continue
            invalid = [login for login in logins
                       if not isinstance(login, str) or not login.strip().lstrip('@')]
            if invalid:
                # YAML reads unquoted numeric logins as numbers
                errors.append(f"'{key}' entries must be non-empty GitHub logins (quote numeric ones): "
                              + ", ".join(repr(login) for login in invalid))

        for key in ('history_days', 'max_pending_reviews'):
            if not _is_positive_int(self.config.get(key)):
                errors.append(f"'{key}' must be a positive integer")

        lookback = self.config.get('lookback_prs')
        if lookback is not None and not _is_positive_int(lookback):
            errors.append("'lookback_prs' must be a positive integer or empty")

        weights = self.config.get('weights')
        if not isinstance(weights, dict):
            errors.append("'weights' must be a mapping")
        else:
            for name in DEFAULT_WEIGHTS:
                value = weights.get(name)
                if isinstance(value, bool) or not isinstance(value, (int, float)) or value < 0:
                    errors.append(f"weight '{name}' must be a non-negative number")

        if errors:
            raise ConfigError("Invalid configuration: " + "; ".join(errors))

    def weights(self) -> Weights:
        values = self.config.get('weights') or {}
        return Weights(**{name: float(values.get(name, default))
                          for name, default in DEFAULT_WEIGHTS.items()})

    def to_selector_config(self) -> SelectorConfig:
        """Validate and convert into the value passed to ReviewerSelector."""
        self.validate()
        return SelectorConfig.create(
            team=[login.lstrip('@') for login in self.config['team']],
            excluded=[login.lstrip('@') for login in self.config['excluded']],
            max_pending_reviews=self.config['max_pending_reviews'],
            weights=self.weights(),
            lookback_prs=self.config.get('lookback_prs'),
        )


def _is_positive_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value > 0


def merge_config(base: Dict[str, Any], overrides: Dict[str, Any]) -> Dict[str, Any]:
    """
    Merge loaded settings over a base configuration.

    The 'weights' mapping is merged key by key so a partial weights section
    keeps the remaining defaults.

    Args:
        base: Base configuration (usually the defaults)
        overrides: Values read from the configuration file

    Returns:
        New merged configuration dictionary
    """
    merged = copy.deepcopy(base)
    for key, value in overrides.items():
        if key == 'weights' and isinstance(value, dict) and isinstance(merged.get('weights'), dict):
            merged['weights'].update(value)
        elif key == 'unavailable' and value is None:
            merged['unavailable'] = {}
        else:
            merged[key] = copy.deepcopy(value)
    return merged
