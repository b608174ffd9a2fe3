import argparse
import json
import sys
from pathlib import Path
from typing import Any, List

from . import __version__
from .env import load_env, db_path, log_dir, log_level
from .database import init_database, get_session
from .logger import get_logger, reset_logger
from .maintenance import (
    RECALCULATION_MIN_MATCH_PERCENTAGE,
    get_matching_statistics,
    recalculate_all_job_matches,
    recalculate_job_matches,
    select_open_candidates,
)
from .options import with_overrides
from .ranking import DEFAULT_MIN_MATCH_PERCENTAGE, find_matching_candidates
from .schema import required_skills_of, validate_candidate, validate_job
from .scoring import calculate_match_percentage, explain_match
from .search import DEFAULT_SEARCH_THRESHOLD, fuzzy_filter
from .storage import load_job_matches


def _split_csv(value: str) -> List[str]:
    return [v.strip() for v in value.split(",") if v.strip()] if value else []


def _load_json(path_str: str) -> Any:
    path = Path(path_str)
    if not path.exists():
        raise SystemExit(f"Input file not found: {path}")
    try:
        with path.open("r", encoding="utf-8") as f:
            return json.load(f)
    except json.JSONDecodeError as e:
        raise SystemExit(f"Invalid JSON in {path}: {e}")


def _load_list(path_str: str, what: str) -> list:
    data = _load_json(path_str)
    if not isinstance(data, list):
        raise SystemExit(f"Expected a JSON array of {what} in {path_str}")
    return data


def _options(args: argparse.Namespace):
    return with_overrides(None, fuzzy_threshold=getattr(args, "fuzzy_threshold", None))


def cmd_match(args: argparse.Namespace) -> None:
    skills = _split_csv(args.skills)
    required = _split_csv(args.required)
    options = _options(args)
    percentage = calculate_match_percentage(skills, required, options)
    print(f"Match: {percentage:.2f}%")
    if args.explain:
        for entry in explain_match(skills, required, options):
            source = entry["candidate_skill"] or "-"
            print(
                f"  {entry['required_skill']:<24} <- {source:<24} "
                f"{entry['category']:<12} {entry['weighted_score']:.3f}"
            )


def cmd_rank(args: argparse.Namespace) -> None:
    candidates = _load_list(args.candidates, "candidates")
    job = _load_json(args.job)

    errors = validate_job(job)
    if errors:
        print("Invalid job:")
        for e in errors:
            print(f" - {e}")
        raise SystemExit(2)

    for candidate in candidates:
        problems = validate_candidate(candidate)
        if problems:
            get_logger().warning("Skipping invalid candidate", errors=problems)

    pool = select_open_candidates(candidates)
    options = _options(args)

    if args.save:
        outcome = recalculate_job_matches(job, pool, Path(args.db), args.min, options)
        if not outcome["success"]:
            raise SystemExit(f"Failed to save matches: {outcome['error']}")
        # Keep stdout parseable for --json
        print(
            f"Saved {outcome['matches_found']} matches for job {outcome['job_id']} ({outcome['status']})",
            file=sys.stderr if args.json else sys.stdout,
        )
        matches = outcome["matches"]
    else:
        matches = find_matching_candidates(pool, required_skills_of(job), args.min, options)

    if args.json:
        print(json.dumps([m.to_record() for m in matches], indent=2, default=str))
        return
    if not matches:
        print("No matching candidates.")
        return
    print(f"Found {len(matches)} matching candidates:\n")
    for rank, match in enumerate(matches, start=1):
        print(f"{rank:>3}. {match.candidate_id}  {match.match_percentage:.2f}%")


def cmd_recalculate(args: argparse.Namespace) -> None:
    jobs = _load_list(args.jobs, "jobs")
    pool = select_open_candidates(_load_list(args.candidates, "candidates"))
    result = recalculate_all_job_matches(jobs, pool, Path(args.db), args.min, _options(args))
    stats = result["stats"]
    print(result["message"])
    print(f"Total matches stored: {stats['total_matches_found']}")
    for err in stats["errors"]:
        print(f" - job {err['job_id']}: {err['error']}")
    get_logger().log_metrics_summary()


def cmd_search(args: argparse.Namespace) -> None:
    records = _load_list(args.input, "records")
    filters = {}
    for item in args.filter or []:
        if "=" not in item:
            raise SystemExit(f"Filter must be field=value: {item}")
        k, v = item.split("=", 1)
        filters[k.strip()] = v.strip()
    results = fuzzy_filter(
        records,
        filters,
        fuzzy_threshold=args.threshold,
        enable_fuzzy_search=not args.no_fuzzy,
        case_sensitive=args.case_sensitive,
    )
    print(json.dumps(results, indent=2, ensure_ascii=False, default=str))


def cmd_matches(args: argparse.Namespace) -> None:
    path = Path(args.db)
    if not path.exists():
        print(f"Database not found: {path}")
        return
    init_database(path)
    session = get_session(path)
    try:
        rows = load_job_matches(session, args.job_id)
        if not rows:
            print(f"No stored matches for job {args.job_id}.")
            return
        print(f"Found {len(rows)} matches for job {args.job_id}:\n")
        for row in rows:
            print(f"  {row.candidate_id}  {row.match_percentage:.2f}%  (matched {row.matched_at:%Y-%m-%d %H:%M})")
    finally:
        session.close()


def cmd_stats(args: argparse.Namespace) -> None:
    stats = get_matching_statistics(Path(args.db))
    print(f"Jobs with matches: {stats['jobs_with_matches']}")
    print(f"Total matches: {stats['total_matches']}")
    print(f"Average match: {stats['average_match_percentage']:.2f}%")


def main(argv=None):
    # Load .env if present (SKILLMATCH_DB, SKILLMATCH_LOG_LEVEL, ...)
    load_env()
    parser = argparse.ArgumentParser(prog="skillmatch", description="Skill matching and candidate ranking")
    parser.add_argument("--version", action="store_true", help="Show version")
    parser.add_argument("--log-file", action="store_true", help="Also write logs to SKILLMATCH_LOG_DIR")

    subparsers = parser.add_subparsers(dest="command")
    default_db = str(db_path())

    mt = subparsers.add_parser("match", help="Score one skill list against required skills")
    mt.add_argument("--skills", required=True, help="Comma-separated candidate skills")
    mt.add_argument("--required", required=True, help="Comma-separated required skills")
    mt.add_argument("--fuzzy-threshold", type=float, help="Minimum similarity for a fuzzy match (default 0.85)")
    mt.add_argument("--explain", action="store_true", help="Show the per-skill breakdown")
    mt.set_defaults(func=cmd_match)

    rk = subparsers.add_parser("rank", help="Rank candidates (JSON array) against a job (JSON object)")
    rk.add_argument("--candidates", required=True, help="Path to candidates JSON")
    rk.add_argument("--job", required=True, help="Path to job JSON")
    rk.add_argument("--min", type=float, default=DEFAULT_MIN_MATCH_PERCENTAGE, help="Minimum match percentage (default 30)")
    rk.add_argument("--fuzzy-threshold", type=float, help="Minimum similarity for a fuzzy match")
    rk.add_argument("--save", action="store_true", help="Store the ranked matches in the database")
    rk.add_argument("--json", action="store_true", help="Print matches as JSON")
    rk.add_argument("--db", default=default_db, help=f"Path to SQLite database (default: {default_db})")
    rk.set_defaults(func=cmd_rank)

    rc = subparsers.add_parser("recalculate", help="Recalculate stored matches for every job in a JSON array")
    rc.add_argument("--jobs", required=True, help="Path to jobs JSON")
    rc.add_argument("--candidates", required=True, help="Path to candidates JSON")
    rc.add_argument("--min", type=float, default=RECALCULATION_MIN_MATCH_PERCENTAGE, help="Minimum match percentage (default 95)")
    rc.add_argument("--fuzzy-threshold", type=float, help="Minimum similarity for a fuzzy match")
    rc.add_argument("--db", default=default_db, help=f"Path to SQLite database (default: {default_db})")
    rc.set_defaults(func=cmd_recalculate)

    sr = subparsers.add_parser("search", help="Fuzzy-filter a JSON array of records")
    sr.add_argument("--input", required=True, help="Path to records JSON")
    sr.add_argument("--filter", action="append", help="field=value (repeatable)")
    sr.add_argument("--threshold", type=float, default=DEFAULT_SEARCH_THRESHOLD, help="Word similarity threshold (default 0.6)")
    sr.add_argument("--no-fuzzy", action="store_true", help="Exact and substring matches only")
    sr.add_argument("--case-sensitive", action="store_true", help="Compare case-sensitively")
    sr.set_defaults(func=cmd_search)

    ms = subparsers.add_parser("matches", help="List stored matches for a job")
    ms.add_argument("--job-id", required=True, help="Job identifier")
    ms.add_argument("--db", default=default_db, help=f"Path to SQLite database (default: {default_db})")
    ms.set_defaults(func=cmd_matches)

    st = subparsers.add_parser("stats", help="Show stored matching statistics")
    st.add_argument("--db", default=default_db, help=f"Path to SQLite database (default: {default_db})")
    st.set_defaults(func=cmd_stats)

    args = parser.parse_args(argv)

    if args.version:
        print(__version__)
        return

    reset_logger()
    get_logger(level=log_level(), log_dir=log_dir(), enable_file=args.log_file)

    if hasattr(args, "func"):
        args.func(args)
        return

    parser.print_help()


if __name__ == "__main__":
    main()
