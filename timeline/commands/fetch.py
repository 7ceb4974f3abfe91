"""
timeline fetch - Pull timeline.yaml from tracked repositories into the aggregate file.
"""

from timeline.fetch import fetch_all, write_aggregate
from timeline.lib.config import load_repo_configs
from timeline.lib.errors import SchemaError


def cmd_fetch(args, settings) -> int:
    repos_path = args.repos or settings.repos_path
    output_path = args.output or settings.seed_path

    try:
        configs = load_repo_configs(repos_path)
    except SchemaError as e:
        print(f"ERROR: {e}")
        return 2

    print(f"Fetching {len(configs)} repository(s)...")
    report = fetch_all(
        configs,
        token_env_var=settings.token_env_var,
        filename=settings.document_filename,
        timeout=settings.fetch_timeout,
    )

    for reason in report.failures.values():
        print(f"  [WARN] {reason}")

    print(f"Fetched {report.fetched}/{report.attempted} projects successfully")

    try:
        used_samples = write_aggregate(report.documents, output_path)
    except OSError as e:
        print(f"ERROR: Could not write {output_path}: {e}")
        return 1

    if used_samples:
        print(f"No projects fetched; sample data written to {output_path}")
    else:
        print(f"Written to {output_path}")
    return 0
