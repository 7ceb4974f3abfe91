"""
GitHub access for the fetch tool.

Public repositories are read from raw.githubusercontent.com; private ones go
through the contents API with a bearer token. Every failure surfaces as a
RemoteFetchWarning so the caller can skip the repository and carry on.
"""

import logging
import os
from urllib.error import HTTPError, URLError
from urllib.parse import quote
from urllib.request import Request, urlopen

import yaml

from timeline.lib.config import RepoConfig
from timeline.lib.constants import DOCUMENT_FILENAME
from timeline.lib.errors import RemoteFetchWarning
from timeline.lib.validate import validate

logger = logging.getLogger(__name__)

RAW_CONTENT_URL = "https://raw.githubusercontent.com"
API_URL = "https://api.github.com"
API_VERSION = "2022-11-28"

# Timeout for HTTP requests (seconds)
HTTP_TIMEOUT_SECONDS = 30


def public_url(config: RepoConfig, filename: str = DOCUMENT_FILENAME) -> str:
    return f"{RAW_CONTENT_URL}/{config.owner}/{config.repo}/{config.branch}/{filename}"


def private_url(config: RepoConfig, filename: str = DOCUMENT_FILENAME) -> str:
    return f"{API_URL}/repos/{config.owner}/{config.repo}/contents/{filename}?ref={quote(config.branch)}"


def http_get(url: str, source: str, headers: dict | None = None, timeout: float = HTTP_TIMEOUT_SECONDS) -> str:
    """GET url and return the body as text.

    Raises:
        RemoteFetchWarning: on network errors, non-2xx responses or undecodable bodies
    """
    req = Request(url, headers=headers or {}, method="GET")
    try:
        with urlopen(req, timeout=timeout) as response:
            status = getattr(response, "status", 200)
            if status < 200 or status >= 300:
                raise RemoteFetchWarning(source, f"HTTP {status}")
            body = response.read()
    except HTTPError as e:
        raise RemoteFetchWarning(source, f"HTTP {e.code}") from None
    except (URLError, TimeoutError, OSError) as e:
        raise RemoteFetchWarning(source, f"Request failed: {e}") from None

    try:
        return body.decode("utf-8")
    except UnicodeDecodeError as e:
        raise RemoteFetchWarning(source, f"Response is not UTF-8 text: {e}") from None


def fetch_public(config: RepoConfig, filename: str = DOCUMENT_FILENAME, timeout: float = HTTP_TIMEOUT_SECONDS) -> str:
    """Fetch the timeline document of a public repository."""
    return http_get(public_url(config, filename), config.slug, timeout=timeout)


def fetch_private(
    config: RepoConfig,
    token: str | None,
    filename: str = DOCUMENT_FILENAME,
    timeout: float = HTTP_TIMEOUT_SECONDS,
) -> str:
    """Fetch the timeline document of a private repository via the contents API."""
    if not token:
        raise RemoteFetchWarning(config.slug, "No access token available for private repository")

    headers = {
        "Authorization": f"Bearer {token}",
        "Accept": "application/vnd.github.v3.raw",
        "X-GitHub-Api-Version": API_VERSION,
    }
    return http_get(private_url(config, filename), config.slug, headers=headers, timeout=timeout)


def fetch_project_document(
    config: RepoConfig,
    token_env_var: str = "GITHUB_TOKEN",
    filename: str = DOCUMENT_FILENAME,
    timeout: float = HTTP_TIMEOUT_SECONDS,
) -> dict:
    """Fetch, parse and validate one repository's timeline document.

    A document without project.repository gets one pointing at the repository
    it was fetched from.

    Raises:
        RemoteFetchWarning: if the document can't be fetched, parsed or validated
    """
    logger.info(f"Fetching {config.slug}...")

    if config.is_private:
        text = fetch_private(config, os.environ.get(token_env_var), filename, timeout)
    else:
        text = fetch_public(config, filename, timeout)

    try:
        document = yaml.safe_load(text)
    except (yaml.YAMLError, ValueError) as e:
        raise RemoteFetchWarning(config.slug, f"Failed to parse YAML: {e}") from None

    if not isinstance(document, dict) or not isinstance(document.get("project"), dict):
        raise RemoteFetchWarning(config.slug, "Invalid schema: missing project section")

    project = document["project"]
    if not project.get("repository"):
        project["repository"] = {
            "url": f"https://github.com/{config.owner}/{config.repo}",
            "branch": config.branch,
        }

    result = validate(document)
    if not result.ok:
        raise RemoteFetchWarning(config.slug, f"Invalid schema: {result.error}")

    logger.info(f"Successfully parsed {config.slug}")
    return document
