"""Remote timeline document fetch tool."""

from timeline.fetch.github import (
    public_url,
    private_url,
    fetch_public,
    fetch_private,
    fetch_project_document,
)
from timeline.fetch.aggregate import FetchReport, fetch_all, write_aggregate
from timeline.fetch.samples import SAMPLE_DOCUMENTS, sample_documents

__all__ = [
    "public_url",
    "private_url",
    "fetch_public",
    "fetch_private",
    "fetch_project_document",
    "FetchReport",
    "fetch_all",
    "write_aggregate",
    "SAMPLE_DOCUMENTS",
    "sample_documents",
]
