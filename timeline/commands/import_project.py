"""
timeline import - Add a timeline document to the local store.
"""

from timeline.lib.errors import ConflictError
from timeline.lib.normalize import load_document_file
from timeline.store import open_store


def cmd_import(args, settings) -> int:
    """Import a document; with --update, replace a project with the same id."""
    result = load_document_file(args.file)
    if not result.success:
        print(f"ERROR: {args.file}: {result.error}")
        return 1

    data = result.data
    store = open_store(settings.storage_path, settings.seed_path)

    if args.update:
        replaced = store.merge(data)
        if store.is_shadowed(data.id):
            print(f"Imported '{data.id}' (overrides the fetched copy)")
        elif replaced:
            print(f"Updated '{data.id}'")
        else:
            print(f"Imported '{data.id}'")
        return 0

    try:
        store.insert(data)
    except ConflictError as e:
        print(f"ERROR: {e}")
        print(f"  Use 'timeline import {args.file} --update' to replace it.")
        return 1

    print(f"Imported '{data.id}' ({len(data.tasks)} task(s))")
    return 0
