"""
Configuration loaders.

Settings come from built-in defaults, then timeline.env in the base directory,
then TIMELINE_* environment variables. Tracked repositories for the fetch tool
come from repos.yaml.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import yaml

from timeline.lib import envparse
from timeline.lib.constants import DOCUMENT_FILENAME
from timeline.lib.errors import SchemaError
from timeline.lib.validate import validate_schema

logger = logging.getLogger(__name__)

ENV_FILENAME = "timeline.env"
ENV_PREFIX = "TIMELINE_"
DEFAULT_FETCH_TIMEOUT = 30


@dataclass
class Settings:
    """Runtime settings for the CLI and fetch tool."""
    base_dir: Path
    data_dir: Path
    seed_path: Path            # Aggregate JSON written by `timeline fetch`
    storage_path: Path         # Key/value file holding imported projects
    repos_path: Path           # repos.yaml for `timeline fetch`
    document_filename: str = DOCUMENT_FILENAME
    token_env_var: str = "GITHUB_TOKEN"
    fetch_timeout: int = DEFAULT_FETCH_TIMEOUT


@dataclass
class RepoConfig:
    """A repository whose timeline document is fetched."""
    owner: str
    repo: str
    branch: str = "main"
    is_private: bool = False

    @property
    def slug(self) -> str:
        return f"{self.owner}/{self.repo}"


def _resolve(base_dir: Path, value: str) -> Path:
    path = Path(value).expanduser()
    return path if path.is_absolute() else base_dir / path


def load_settings(base_dir: Path, environ: Optional[dict] = None) -> Settings:
    """Load settings for base_dir.

    Raises:
        ValueError: if timeline.env is malformed
    """
    base_dir = Path(base_dir)
    values: dict[str, str] = {}

    env_path = base_dir / ENV_FILENAME
    if env_path.exists():
        values.update(envparse.load_env(env_path))
    values.update(envparse.environ_with_prefix(ENV_PREFIX, environ))

    data_dir = _resolve(base_dir, values.get("DATA_DIR", "data"))

    fetch_timeout = DEFAULT_FETCH_TIMEOUT
    raw_timeout = values.get("FETCH_TIMEOUT")
    if raw_timeout:
        try:
            fetch_timeout = int(raw_timeout)
        except ValueError:
            logger.warning(f"Invalid FETCH_TIMEOUT '{raw_timeout}', using {DEFAULT_FETCH_TIMEOUT}")

    return Settings(
        base_dir=base_dir,
        data_dir=data_dir,
        seed_path=_resolve(base_dir, values["SEED_PATH"]) if values.get("SEED_PATH") else data_dir / "projects.json",
        storage_path=_resolve(base_dir, values["STORAGE_PATH"]) if values.get("STORAGE_PATH") else data_dir / "storage.json",
        repos_path=_resolve(base_dir, values.get("REPOS_PATH", "repos.yaml")),
        document_filename=values.get("DOCUMENT_FILENAME", DOCUMENT_FILENAME),
        token_env_var=values.get("TOKEN_ENV_VAR", "GITHUB_TOKEN"),
        fetch_timeout=fetch_timeout,
    )


def load_repo_configs(path: Path) -> list[RepoConfig]:
    """Load tracked repositories from a repos.yaml file.

    A missing file means no repositories are tracked.

    Raises:
        SchemaError: if the file is not valid YAML or doesn't match the repos schema
    """
    if not path.exists():
        logger.warning(f"No repository list at {path}")
        return []

    try:
        data = yaml.safe_load(path.read_text())
    except yaml.YAMLError as e:
        raise SchemaError("repos", f"Invalid YAML in {path}: {e}") from None

    validate_schema(data, "repos")

    return [
        RepoConfig(
            owner=entry["owner"],
            repo=entry["repo"],
            branch=entry.get("branch", "main"),
            is_private=entry.get("private", False),
        )
        for entry in data["repositories"]
    ]
