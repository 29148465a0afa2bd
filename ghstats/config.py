"""
Configuration loading for ghstats.

The configuration is a TOML file with a [ptal] section shared by the ptal and
pkgs reports and a [review] section for the review leaderboard. Access tokens
that are not set in the file are read from the environment, so the file can be
committed while secrets live in CI variables or a .env file.
"""

import logging
import os
import tomllib
from dataclasses import dataclass, field
from typing import Any, Dict, List

from .errors import ConfigError

GITHUB_TOKEN_ENV_KEY = 'GHSTATS_GITHUB_TOKEN'
FEISHU_WEBHOOK_TOKEN_ENV_KEY = 'GHSTATS_FEISHU_WEBHOOK_TOKEN'
RANK_STYLES = ('medal', 'number', 'none')


@dataclass
class Access:
    """Access tokens for GitHub and the Feishu webhook."""
    github_token: str = ''
    feishu_webhook_token: str = ''

    def fill_from_env(self) -> None:
        if not self.github_token:
            self.github_token = os.environ.get(GITHUB_TOKEN_ENV_KEY, '')
        if not self.feishu_webhook_token:
            self.feishu_webhook_token = os.environ.get(FEISHU_WEBHOOK_TOKEN_ENV_KEY, '')


@dataclass
class Repo:
    name: str = ''
    pr_query: List[str] = field(default_factory=list)
    packages: List[str] = field(default_factory=list)
    pr_owner_repo: str = ''

    def owner_repo(self):
        """Split pr-owner-repo into (owner, repo)."""
        parts = self.pr_owner_repo.split('/', 1)
        if len(parts) != 2 or not all(parts):
            raise ConfigError(f"Repo '{self.name}': pr-owner-repo must look like 'owner/repo', got '{self.pr_owner_repo}'")
        return parts[0], parts[1]


@dataclass
class PTAL:
    """Settings of the ptal and pkgs reports."""
    access: Access = field(default_factory=Access)
    report_name: str = ''
    repos: List[Repo] = field(default_factory=list)
    max_prs: int = 5
    max_pages: int = 5

    def repos_name(self) -> str:
        return ', '.join(repo.name for repo in self.repos)


@dataclass
class Review:
    """Settings of the review leaderboard."""
    access: Access = field(default_factory=Access)
    report_name: str = ''
    repos: List[Repo] = field(default_factory=list)
    lgtm_comments: List[str] = field(default_factory=list)
    block_comments: List[str] = field(default_factory=list)
    allow_users: List[str] = field(default_factory=list)
    block_users: List[str] = field(default_factory=list)
    block_labels: List[str] = field(default_factory=list)
    top_n: int = 5
    rank_style: str = 'medal'


@dataclass
class Config:
    ptal: PTAL = field(default_factory=PTAL)
    review: Review = field(default_factory=Review)
    print_msg_local: bool = False  # Only print messages locally


def _get(section: Dict[str, Any], key: str, expected: type, default, where: str):
    value = section.get(key, default)
    if expected is int and isinstance(value, bool):
        raise ConfigError(f"{where}.{key} must be an integer")
    if not isinstance(value, expected):
        raise ConfigError(f"{where}.{key} must be of type {expected.__name__}, got {type(value).__name__}")
    return value


def _get_list(section: Dict[str, Any], key: str, where: str) -> List[str]:
    values = _get(section, key, list, [], where)
    if not all(isinstance(v, str) for v in values):
        raise ConfigError(f"{where}.{key} must be a list of strings")
    return values


def _section(data: Dict[str, Any], key: str, where: str) -> Dict[str, Any]:
    return _get(data, key, dict, {}, where)


def _parse_access(data: Dict[str, Any], where: str) -> Access:
    section = _section(data, 'access', where)
    where = f"{where}.access"
    return Access(
        github_token=_get(section, 'github-token', str, '', where),
        feishu_webhook_token=_get(section, 'feishu-webhook-token', str, '', where),
    )


def _parse_repos(data: Dict[str, Any], where: str) -> List[Repo]:
    repos = []
    for i, section in enumerate(_get(data, 'repos', list, [], where)):
        repo_where = f"{where}.repos[{i}]"
        if not isinstance(section, dict):
            raise ConfigError(f"{repo_where} must be a table")
        repos.append(Repo(
            name=_get(section, 'name', str, '', repo_where),
            pr_query=_get_list(section, 'pr-query', repo_where),
            packages=_get_list(section, 'allow-pkgs', repo_where),
            pr_owner_repo=_get(section, 'pr-owner-repo', str, '', repo_where),
        ))
    return repos


def parse_config(data: Dict[str, Any]) -> Config:
    """Build a Config from parsed TOML data.

    Raises:
        ConfigError: If a value has the wrong type
    """
    ptal_data = _section(data, 'ptal', 'config')
    review_data = _section(data, 'review', 'config')

    ptal = PTAL(
        access=_parse_access(ptal_data, 'ptal'),
        report_name=_get(ptal_data, 'report-name', str, '', 'ptal'),
        repos=_parse_repos(ptal_data, 'ptal'),
        max_prs=_get(ptal_data, 'max-prs', int, 5, 'ptal'),
        max_pages=_get(ptal_data, 'max-pages', int, 5, 'ptal'),
    )
    review = Review(
        access=_parse_access(review_data, 'review'),
        report_name=_get(review_data, 'report-name', str, '', 'review'),
        repos=_parse_repos(review_data, 'review'),
        lgtm_comments=_get_list(review_data, 'lgtm-comments', 'review'),
        block_comments=_get_list(review_data, 'block-comments', 'review'),
        allow_users=_get_list(review_data, 'allow-users', 'review'),
        block_users=_get_list(review_data, 'block-users', 'review'),
        block_labels=_get_list(review_data, 'block-labels', 'review'),
        top_n=_get(review_data, 'top-n', int, 5, 'review'),
        rank_style=_get(review_data, 'rank-style', str, 'medal', 'review'),
    )
    if review.top_n < 1:
        raise ConfigError("review.top-n must be at least 1")
    if review.rank_style not in RANK_STYLES:
        raise ConfigError(f"review.rank-style must be one of {', '.join(RANK_STYLES)}, got '{review.rank_style}'")

    ptal.access.fill_from_env()
    review.access.fill_from_env()

    return Config(
        ptal=ptal,
        review=review,
        print_msg_local=_get(data, 'print-msg-local', bool, False, 'config'),
    )


def read_config(config_path: str) -> Config:
    """Read the configuration file.

    Args:
        config_path: Path to the TOML configuration file

    Returns:
        Parsed configuration with tokens filled from the environment

    Raises:
        ConfigError: If the file is missing, unreadable or invalid
    """
    if not config_path:
        raise ConfigError("No configuration file given, use -c/--config")
    try:
        with open(config_path, 'rb') as f:
            data = tomllib.load(f)
    except OSError as e:
        raise ConfigError(f"Could not read config {config_path}: {e}") from e
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"Could not parse config {config_path}: {e}") from e

    config = parse_config(data)
    logging.info(f"Loaded config from {config_path} "
                 f"({len(config.ptal.repos)} ptal repo(s), {len(config.review.repos)} review repo(s))")
    return config


CONFIG_TEMPLATE = """\
# Only print messages locally instead of sending them to Feishu.
print-msg-local = false

[ptal]
report-name = ""
max-prs = 5
max-pages = 5

[ptal.access]
# Falls back to GHSTATS_GITHUB_TOKEN / GHSTATS_FEISHU_WEBHOOK_TOKEN.
github-token = ""
feishu-webhook-token = ""

[[ptal.repos]]
name = ""
pr-query = []
allow-pkgs = []
pr-owner-repo = ""

[review]
report-name = ""
lgtm-comments = []
block-comments = []
allow-users = []
block-users = []
block-labels = []
top-n = 5
rank-style = "medal"

[review.access]
github-token = ""
feishu-webhook-token = ""

[[review.repos]]
name = ""
pr-query = []
allow-pkgs = []
pr-owner-repo = ""
"""


def config_template() -> str:
    return CONFIG_TEMPLATE
