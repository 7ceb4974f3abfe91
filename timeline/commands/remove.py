"""
timeline remove - Delete an imported project.
"""

from timeline.store import open_store


def cmd_remove(args, settings) -> int:
    store = open_store(settings.storage_path, settings.seed_path)

    if args.id not in store:
        print(f"ERROR: Project '{args.id}' not found")
        return 1

    if store.is_read_only(args.id):
        print(f"ERROR: Project '{args.id}' is fetched from its repository and can't be removed")
        return 1

    if not store.remove(args.id):
        print(f"ERROR: Project '{args.id}' could not be removed")
        return 1

    print(f"Removed '{args.id}'")
    return 0
