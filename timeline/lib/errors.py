"""
Error types for the timeline engine.

User input defects and caller-recoverable store conditions are exceptions.
Persistence and remote fetch failures are "warnings": they are raised by the
low-level backends and caught (and logged) at the boundary that triggered them.
"""


class TimelineError(Exception):
    """Base class for timeline errors."""


class ValidationError(TimelineError):
    """A timeline document failed validation.

    Carries the offending field path and value so callers can point at them.
    """

    def __init__(self, path: str, message: str, value=None):
        self.path = path
        self.value = value
        self.reason = message
        super().__init__(message)


class SchemaError(TimelineError):
    """A configuration or persistence payload does not match its JSON Schema."""

    def __init__(self, schema_name: str, message: str, path: str = None):
        self.schema_name = schema_name
        self.path = path
        super().__init__(f"[{schema_name}] {message}" + (f" at {path}" if path else ""))


class ConflictError(TimelineError):
    """Insert attempted for a project id that already exists."""

    def __init__(self, project_id: str, read_only: bool = False):
        self.project_id = project_id
        self.read_only = read_only
        kind = "built-in" if read_only else "imported"
        super().__init__(f"Project '{project_id}' already exists ({kind})")


class NotFoundError(TimelineError):
    """No project with the given id."""

    def __init__(self, project_id: str):
        self.project_id = project_id
        super().__init__(f"Project '{project_id}' not found")


class PersistenceWarning(TimelineError):
    """Reading or writing the key/value persistence failed."""


class RemoteFetchWarning(TimelineError):
    """Fetching or parsing a remote timeline document failed."""

    def __init__(self, source: str, message: str):
        self.source = source
        super().__init__(f"{source}: {message}")
