"""
Fetch every tracked repository and write the aggregate projects.json.

The aggregate is the seed file the project store loads read-only projects
from.
"""

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable

from timeline.fetch.github import HTTP_TIMEOUT_SECONDS, fetch_project_document
from timeline.fetch.samples import sample_documents
from timeline.lib.config import RepoConfig
from timeline.lib.constants import DOCUMENT_FILENAME
from timeline.lib.errors import RemoteFetchWarning

logger = logging.getLogger(__name__)


@dataclass
class FetchReport:
    """Outcome of a fetch run."""
    documents: list[dict] = field(default_factory=list)
    failures: dict[str, str] = field(default_factory=dict)   # slug -> reason

    @property
    def fetched(self) -> int:
        return len(self.documents)

    @property
    def attempted(self) -> int:
        return len(self.documents) + len(self.failures)


def fetch_all(
    configs: Iterable[RepoConfig],
    token_env_var: str = "GITHUB_TOKEN",
    filename: str = DOCUMENT_FILENAME,
    timeout: float = HTTP_TIMEOUT_SECONDS,
) -> FetchReport:
    """Fetch each repository in turn, skipping the ones that fail."""
    report = FetchReport()
    for config in configs:
        try:
            document = fetch_project_document(config, token_env_var, filename, timeout)
        except RemoteFetchWarning as e:
            logger.warning(f"Skipping {config.slug}: {e}")
            report.failures[config.slug] = str(e)
            continue
        report.documents.append(document)

    logger.info(f"Fetched {report.fetched}/{report.attempted} projects successfully")
    return report


def write_aggregate(documents: list[dict], output_path: Path) -> bool:
    """Write documents as a JSON list to output_path.

    When documents is empty the sample documents are written instead.

    Returns:
        True if sample documents were written
    """
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    used_samples = not documents
    if used_samples:
        logger.info("No projects fetched, writing sample data")
        documents = sample_documents()

    output_path.write_text(json.dumps(documents, indent=2, default=str) + "\n")
    logger.info(f"Written {len(documents)} projects to {output_path}")
    return used_samples
