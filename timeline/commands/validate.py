"""
timeline validate - Check a timeline document without importing it.
"""

from timeline.lib.normalize import load_document_file


def cmd_validate(args, settings) -> int:
    """Validate a document file. Exit 0 if valid, 1 otherwise."""
    result = load_document_file(args.file)
    if not result.success:
        print(f"ERROR: {args.file}: {result.error}")
        return 1

    data = result.data
    milestones = sum(1 for t in data.tasks if t.is_milestone)
    print(f"OK: {data.id} ({len(data.tasks)} task(s), {milestones} milestone(s))")
    return 0
