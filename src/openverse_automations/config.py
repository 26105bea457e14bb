"""Configuration management."""

import json
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

import yaml

from openverse_automations.core import ConfigError, GitHubInfo, TrackedRepo


@dataclass
class GitHubConfig:
    """GitHub API settings."""
    api_base: str = "https://api.github.com"
    timeout: float = 30.0


@dataclass
class DigestConfig:
    """Weekly digest settings."""
    make_site_api: str = "https://make.wordpress.org/openverse/wp-json/wp/v2/"
    tags: list[int] = field(default_factory=lambda: [
        3,  # openverse
        5,  # week-in-openverse
    ])
    label_prefix: str = "stack:"
    group_by_label: bool = False
    per_page: int = 100


@dataclass
class RemindersConfig:
    """PR limit reminder settings."""
    pr_threshold: int = 3
    maintainer_tasks_url: str = "https://docs.openverse.org/meta/maintainer_tasks.html"


@dataclass
class Settings:
    """Application settings."""

    # Secrets (from environment only)
    access_token: Optional[str] = None
    make_username: Optional[str] = None
    make_password: Optional[str] = None
    slack_webhook_url: Optional[str] = None
    gh_slack_username_map: Optional[str] = None

    # Config sections
    github: GitHubConfig = field(default_factory=GitHubConfig)
    digest: DigestConfig = field(default_factory=DigestConfig)
    reminders: RemindersConfig = field(default_factory=RemindersConfig)

    def missing_digest_credentials(self) -> list[str]:
        """Names of the unset variables the digest needs."""
        required = {
            "ACCESS_TOKEN": self.access_token,
            "MAKE_USERNAME": self.make_username,
            "MAKE_PASSWORD": self.make_password,
        }
        return [name for name, value in required.items() if not value]

    def slack_user_map(self) -> dict[str, str]:
        """GitHub login to Slack member id mapping."""
        if not self.gh_slack_username_map:
            return {}
        try:
            mapping = json.loads(self.gh_slack_username_map)
        except json.JSONDecodeError as e:
            raise ConfigError(f"GH_SLACK_USERNAME_MAP is not valid JSON: {e}") from e
        if not isinstance(mapping, dict):
            raise ConfigError("GH_SLACK_USERNAME_MAP must be a JSON object")
        return {str(login): str(slack_id) for login, slack_id in mapping.items()}


def load_config(config_path: Path = Path("config.yaml")) -> dict:
    """Load optional settings overrides from YAML file."""
    if not config_path.exists():
        return {}

    with open(config_path, "r", encoding="utf-8") as f:
        try:
            return yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigError(f"Cannot parse {config_path}: {e}") from e


def get_settings(config_path: Path = Path("config.yaml")) -> Settings:
    """Get application settings from YAML config and environment."""
    config = load_config(config_path)

    settings = Settings(
        access_token=os.getenv("ACCESS_TOKEN"),
        make_username=os.getenv("MAKE_USERNAME"),
        make_password=os.getenv("MAKE_PASSWORD"),
        slack_webhook_url=os.getenv("SLACK_WEBHOOK_URL"),
        gh_slack_username_map=os.getenv("GH_SLACK_USERNAME_MAP"),
    )

    # Apply YAML config
    sections = {
        "github": settings.github,
        "digest": settings.digest,
        "reminders": settings.reminders,
    }
    for name, section in sections.items():
        for key, value in (config.get(name) or {}).items():
            if not hasattr(section, key):
                raise ConfigError(f"Unknown setting {name}.{key} in {config_path}")
            setattr(section, key, _check_type(f"{name}.{key}", getattr(section, key), value))

    return settings


def _check_type(name: str, default: object, value: object) -> object:
    """Validate a YAML value against the type of the setting's default."""
    # bool is a subclass of int, so it never passes as a number and vice versa.
    if isinstance(default, bool):
        valid = isinstance(value, bool)
    elif isinstance(default, float):
        valid = isinstance(value, (int, float)) and not isinstance(value, bool)
        value = float(value) if valid else value
    elif isinstance(default, int):
        valid = isinstance(value, int) and not isinstance(value, bool)
    elif isinstance(default, list):
        item_type = type(default[0]) if default else object
        valid = isinstance(value, list) and all(
            isinstance(v, item_type) and not isinstance(v, bool) for v in value
        )
    else:
        valid = isinstance(value, type(default))

    if not valid:
        raise ConfigError(
            f"Setting {name} must be of type {type(default).__name__}, got {value!r}"
        )
    return value


def load_github_info(path: Path) -> GitHubInfo:
    """
    Read the organization and tracked repositories.

    The descriptor holds `org` and `repos`; `repos` maps arbitrary keys to
    repository names, in the order they should appear in the digest.

    Raises:
        ConfigError: If the file is missing, unparsable or incomplete.
    """
    if not path.exists():
        raise ConfigError(f"GitHub descriptor not found: {path}")

    with open(path, "r", encoding="utf-8") as f:
        try:
            data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigError(f"Cannot parse {path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(f"{path} must contain a mapping")

    missing = [key for key in ("org", "repos") if not data.get(key)]
    if missing:
        raise ConfigError(f"{path} is missing required keys: {', '.join(missing)}")

    repos = data["repos"]
    names = list(repos.values()) if isinstance(repos, dict) else repos
    if not isinstance(names, list):
        raise ConfigError(f"`repos` in {path} must be a mapping or a list")

    return GitHubInfo(
        org=str(data["org"]),
        repos=[TrackedRepo(name=str(name)) for name in names],
    )
