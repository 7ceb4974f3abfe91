"""Shared constants for the timeline engine."""

import re

# Document dates and allocation months
ISO_DATE_PATTERN = re.compile(r'^\d{4}-\d{2}-\d{2}$')
MONTH_KEY_PATTERN = re.compile(r'^\d{4}-(0[1-9]|1[0-2])$')

# Key under which imported projects are persisted
IMPORTED_STORAGE_KEY = "timeline-imported-projects"

# Timeline document looked up in each tracked repository
DOCUMENT_FILENAME = "timeline.yaml"

# Filter value that matches every status/priority
FILTER_ALL = "all"
