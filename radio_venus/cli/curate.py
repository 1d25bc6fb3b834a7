"""Command-line curation tool for the Radio Venus catalog.

Usage::

    python -m radio_venus.cli build --backups
    python -m radio_venus.cli verify --genre techno --limit 50
    python -m radio_venus.cli verify --from-report data/reports/genre-verify-2024-05-01.json
    python -m radio_venus.cli discover "Aphex Twin" "Bjork" --depth 2 --dry-run
    python -m radio_venus.cli collect-notfound data/reports/*.json
    python -m radio_venus.cli propose-patch data/reports/genre-verify-2024-05-01.json
    python -m radio_venus.cli import-playlist spotify:playlist:37i9dQZF1DX4sWSpwq3LiO
    python -m radio_venus.cli import-playlist 37i9dQZF1DX4sWSpwq3LiO --output batch.json
    python -m radio_venus.cli merge-import batch-*.json
    python -m radio_venus.cli stats --anchors
    python -m radio_venus.cli venus 1971-08-18 1965-11

Every command that touches the network opens one :class:`RunContext` and
closes it on the way out.  Exit code 0 on success, 1 on a failed run.
"""

from __future__ import annotations

import argparse
import asyncio
import sys
from pathlib import Path

from pydantic import ValidationError

from radio_venus.config import settings_from_config
from radio_venus.config.settings import Settings
from radio_venus.main import (
    build_catalog_pipeline,
    build_discoverer,
    build_playlist_importer,
    build_record_index,
    build_report_store,
    build_seed_store,
    build_snapshot_store,
    build_verifier,
)
from radio_venus.models.artist import ArtistRecord
from radio_venus.models.playlist import ImportBatch, MergeImportSummary
from radio_venus.models.report import VerificationReport
from radio_venus.models.taxonomy import GenreCategory
from radio_venus.pipeline.context import RunContext
from radio_venus.providers.store.json_snapshot_store import read_json, write_json_atomic
from radio_venus.services.catalog_stats import compute_stats, render_stats, suggest_anchors
from radio_venus.services.date_normalizer import normalize_birth_date
from radio_venus.services.discrepancy_verifier import DiscrepancyVerifier
from radio_venus.services.playlist_importer import apply_import
from radio_venus.services.report_tools import (
    collect_not_found,
    harvest_raw_tags,
    propose_patch,
)
from radio_venus.services.venus_calculator import calculate_venus
from radio_venus.utils.errors import InvalidDateError, RadioVenusError
from radio_venus.utils.logging import bind_run_context, configure_logging, get_logger

logger = get_logger(__name__)


# -- build ---------------------------------------------------------------------


async def _handle_build(args: argparse.Namespace, app_settings: Settings) -> int:
    async with RunContext(app_settings) as ctx:
        pipeline = build_catalog_pipeline(ctx)
        try:
            summary = await pipeline.build(
                fetch_fresh=app_settings.fetch_fresh_candidates and not args.no_fresh,
                with_backups=args.backups,
                dry_run=args.dry_run,
            )
        except RadioVenusError as exc:
            print(f"Build failed: {exc.message}", file=sys.stderr)
            return 1

    print("Catalog build")
    print("=" * 40)
    print(f"  Records:     {summary.total}")
    print(f"  Seed:        {summary.seed}")
    print(f"  Cached:      {summary.cached}")
    print(f"  Fresh:       {summary.fresh}")
    print(f"  With media:  {summary.with_media}")
    print(f"  Indexed:     {summary.indexed}")
    if args.dry_run:
        print("  (dry run, snapshot not written)")
    else:
        print(f"  Snapshot:    {summary.snapshot_path}")

    if summary.collisions:
        print(f"\n  Identity collisions ({len(summary.collisions)}):")
        for collision in summary.collisions:
            print(
                f"    {collision.stable_id}: kept {collision.kept_name!r}, "
                f"dropped {collision.discarded_name!r} ({collision.discarded_tier.value})"
            )
    if summary.rejected:
        print(f"\n  Rejected ({len(summary.rejected)}):")
        for rejected in summary.rejected:
            print(f"    {rejected.name}: {rejected.reason}")
    if summary.excluded:
        print(f"\n  Excluded: {len(summary.excluded)}")
    return 0


# -- verify --------------------------------------------------------------------


async def _load_catalog(app_settings: Settings, from_seed: bool) -> list[ArtistRecord]:
    if from_seed:
        return await build_seed_store(app_settings).load_seed()
    return await build_snapshot_store(app_settings).load()


async def _handle_verify(args: argparse.Namespace, app_settings: Settings) -> int:
    report_store = build_report_store(app_settings)
    filter_genre = GenreCategory(args.genre) if args.genre else None

    try:
        records = await _load_catalog(app_settings, args.seed)
        if args.from_report:
            previous = await report_store.load(args.from_report)
            if previous is None:
                print(f"Report not found: {args.from_report}", file=sys.stderr)
                return 1
            selected = DiscrepancyVerifier.retry_records(records, previous)
        else:
            selected = DiscrepancyVerifier.select_records(
                records, filter_genre=filter_genre, skip=args.skip, limit=args.limit
            )

        output = Path(args.output) if args.output else report_store.default_path(args.genre)
        partial = await report_store.load(output) if args.resume else None
    except RadioVenusError as exc:
        print(f"Error: {exc.message}", file=sys.stderr)
        return 1

    print(f"Verifying {len(selected)} records -> {output}")
    if partial is not None:
        print(f"Resuming: {len(partial.processed_keys())} already processed")

    async with RunContext(app_settings) as ctx:
        verifier = build_verifier(ctx)
        report = await verifier.verify(
            selected, report=partial, report_path=output, filter_genre=filter_genre
        )

    _print_report_summary(report)

    if args.save_tags:
        seed_store = build_seed_store(app_settings)
        seed = await seed_store.load_seed()
        updated, harvest = harvest_raw_tags([report], seed)
        if harvest.enriched:
            await seed_store.save_seed(updated)
        print(f"\nRaw tags saved for {harvest.enriched} seed records")
    return 0


def _print_report_summary(report: VerificationReport) -> None:
    counts = report.summary()
    print("\nVerification report")
    print("=" * 40)
    print(f"  OK:            {counts['ok']}")
    print(f"  Missing:       {counts['missing']}")
    print(f"  Extra:         {counts['extra']}")
    print(f"  Not found:     {counts['not_found']}")
    print(f"  Wrong match:   {counts['wrong_match']}")


# -- discover ------------------------------------------------------------------


async def _handle_discover(args: argparse.Namespace, app_settings: Settings) -> int:
    depth = args.depth if args.depth is not None else app_settings.discovery_depth
    try:
        known = [
            *await build_snapshot_store(app_settings).load(),
            *await build_seed_store(app_settings).load_seed(),
        ]
    except RadioVenusError as exc:
        print(f"Error: {exc.message}", file=sys.stderr)
        return 1

    async with RunContext(app_settings) as ctx:
        discoverer = await build_discoverer(ctx, use_judge=not args.no_judge)
        result = await discoverer.discover(
            args.names, known=known, depth=depth, dry_run=args.dry_run
        )

    print(f"Accepted {len(result.accepted)} new artists")
    for record in result.accepted:
        sign = record.venus.sign.value if record.venus else "?"
        genres = ", ".join(g.value for g in record.genres)
        print(f"  + {record.name:<32} {sign:<12} {genres}")
    if result.judged_out:
        print(f"\nRejected by the aesthetic judge ({len(result.judged_out)}):")
        for record in result.judged_out:
            print(f"  - {record.name}")
    if result.accepted:
        print("\nBy Venus sign:")
        for sign, count in sorted(result.sign_counts().items(), key=lambda item: -item[1]):
            print(f"  {sign:<12} {count}")
    if args.dry_run:
        print("\n(dry run, seed not modified)")
    else:
        print(f"\nAppended {result.appended} to the seed")
    return 0


# -- playlist import -----------------------------------------------------------


def _print_import_summary(summary: MergeImportSummary) -> None:
    print(f"  Added:       {len(summary.added)}")
    print(f"  Patched:     {len(summary.patched)}")
    print(f"  Duplicates:  {len(summary.duplicates)}")
    for name in summary.added:
        print(f"    + {name}")


async def _handle_import_playlist(args: argparse.Namespace, app_settings: Settings) -> int:
    seed_store = build_seed_store(app_settings)
    try:
        seed = await seed_store.load_seed()
        async with RunContext(app_settings) as ctx:
            importer = await build_playlist_importer(ctx)
            batch = await importer.build_batch(args.playlist, seed)
    except RadioVenusError as exc:
        print(f"Import failed: {exc.message}", file=sys.stderr)
        return 1

    print(f"Playlist {args.playlist}")
    print("=" * 40)
    print(f"  New artists: {len(batch.additions)}")
    print(f"  Handpicks:   {len(batch.patches)}")
    print(f"  Skipped:     {len(batch.skipped)}")
    for name, reason in batch.skipped.items():
        print(f"    - {name}: {reason}")

    if args.output:
        await asyncio.to_thread(write_json_atomic, Path(args.output), batch.to_json_dict())
        print(f"\nBatch written to {args.output}")
        print(f"Run: python -m radio_venus.cli merge-import {args.output}")
        return 0

    records, summary = apply_import(seed, [batch])
    print()
    _print_import_summary(summary)
    if args.dry_run:
        print("\n(dry run, seed not modified)")
    elif summary.changed:
        await seed_store.save_seed(records)
        print("\nSeed updated.")
    return 0


async def _handle_merge_import(args: argparse.Namespace, app_settings: Settings) -> int:
    seed_store = build_seed_store(app_settings)
    batches: list[ImportBatch] = []
    try:
        seed = await seed_store.load_seed()
        for name in args.batches:
            data = await asyncio.to_thread(read_json, Path(name), None)
            if data is None:
                print(f"Batch not found: {name}", file=sys.stderr)
                return 1
            try:
                batches.append(ImportBatch.model_validate(data))
            except ValidationError as exc:
                print(f"Invalid batch {name}: {exc.error_count()} errors", file=sys.stderr)
                return 1
    except RadioVenusError as exc:
        print(f"Error: {exc.message}", file=sys.stderr)
        return 1

    records, summary = apply_import(seed, batches)
    print(f"Merged {len(batches)} import batches")
    _print_import_summary(summary)
    if summary.changed and not args.dry_run:
        await seed_store.save_seed(records)
        print("\nSeed updated.")
    return 0


# -- report post-processing ----------------------------------------------------


async def _load_reports(app_settings: Settings, paths: list[str]) -> list[VerificationReport]:
    store = build_report_store(app_settings)
    reports: list[VerificationReport] = []
    for path in paths:
        report = await store.load(path)
        if report is None:
            logger.warning("report_missing", path=path)
            continue
        reports.append(report)
    return reports


async def _handle_collect_notfound(args: argparse.Namespace, app_settings: Settings) -> int:
    try:
        reports = await _load_reports(app_settings, args.reports)
    except RadioVenusError as exc:
        print(f"Error: {exc.message}", file=sys.stderr)
        return 1
    if not reports:
        print("No reports loaded.", file=sys.stderr)
        return 1

    retry = collect_not_found(reports)
    output = Path(args.output or Path(app_settings.report_dir) / "genre-verify-notfound.json")
    await build_report_store(app_settings).save(retry, output)
    print(f"{len(retry.not_found)} names to retry -> {output}")
    print(f"Run: python -m radio_venus.cli verify --from-report {output}")
    return 0


async def _handle_harvest_tags(args: argparse.Namespace, app_settings: Settings) -> int:
    seed_store = build_seed_store(app_settings)
    try:
        reports = await _load_reports(app_settings, args.reports)
        seed = await seed_store.load_seed()
    except RadioVenusError as exc:
        print(f"Error: {exc.message}", file=sys.stderr)
        return 1

    updated, summary = harvest_raw_tags(reports, seed)
    print(f"  Enriched:        {summary.enriched}")
    print(f"  Already tagged:  {summary.already_had}")
    print(f"  Geo-only skip:   {summary.skipped_geo}")
    print(f"  Not in seed:     {summary.not_in_records}")
    if summary.enriched and not args.dry_run:
        await seed_store.save_seed(updated)
        print("Seed updated.")
    return 0


async def _handle_propose_patch(args: argparse.Namespace, app_settings: Settings) -> int:
    try:
        reports = await _load_reports(app_settings, [args.report])
    except RadioVenusError as exc:
        print(f"Error: {exc.message}", file=sys.stderr)
        return 1
    if not reports:
        print(f"Report not found: {args.report}", file=sys.stderr)
        return 1

    patches = propose_patch(reports[0])
    for patch in patches:
        added = ", ".join(c.value for c in patch.added) or "-"
        removed = ", ".join(c.value for c in patch.removed) or "-"
        print(f"  {patch.name:<32} +[{added}]  -[{removed}]")
    print(f"\n{len(patches)} proposed corrections (not applied)")

    if args.output:
        payload = [p.model_dump(mode="json") for p in patches]
        await asyncio.to_thread(write_json_atomic, Path(args.output), payload)
        print(f"Patch written to {args.output}")
    return 0


# -- stats / venus / index -----------------------------------------------------


async def _handle_stats(args: argparse.Namespace, app_settings: Settings) -> int:
    try:
        records = await _load_catalog(app_settings, args.seed)
    except RadioVenusError as exc:
        print(f"Error: {exc.message}", file=sys.stderr)
        return 1

    stats = compute_stats(records)
    print(render_stats(stats))

    if args.anchors and stats.weak_signs:
        print("\nDiscovery anchors for weak signs")
        for sign, names in suggest_anchors(records, stats).items():
            print(f"  {sign.value:<12} {', '.join(names) or '(none)'}")
    return 0


def _handle_venus(args: argparse.Namespace) -> int:
    exit_code = 0
    for text in args.dates:
        try:
            normalized = normalize_birth_date(text)
        except InvalidDateError as exc:
            print(f"  {text:<12} invalid: {exc.message}", file=sys.stderr)
            exit_code = 1
            continue
        position = calculate_venus(normalized.date)
        approx = " (approx)" if normalized.approx else ""
        print(
            f"  {normalized.date.isoformat()}{approx}  {position.glyph} {position.sign.value} "
            f"{position.degree:.1f}  decan {position.decan}  {position.element.value}"
        )
    return exit_code


async def _handle_index(app_settings: Settings) -> int:
    try:
        records = await build_snapshot_store(app_settings).load()
        seed = await build_seed_store(app_settings).load_seed()
    except RadioVenusError as exc:
        print(f"Error: {exc.message}", file=sys.stderr)
        return 1

    index = build_record_index(app_settings)
    await index.initialize()
    written = await index.upsert_many(records, seed_keys={r.key for r in seed})
    print(f"Indexed {written} records into {app_settings.index_db_path}")
    for sign, count in sorted((await index.count_by_sign()).items()):
        print(f"  {sign:<12} {count}")
    return 0


# -- parser --------------------------------------------------------------------


def _build_parser() -> argparse.ArgumentParser:
    """Build the argparse parser for the curation CLI."""
    parser = argparse.ArgumentParser(
        prog="python -m radio_venus.cli",
        description="Curate the Radio Venus musician catalog.",
    )
    parser.add_argument(
        "--config", default="config/config.yaml", help="YAML config (default: config/config.yaml)"
    )
    subparsers = parser.add_subparsers(dest="command", help="Curation commands")

    build_parser = subparsers.add_parser("build", help="Merge, enrich and write the snapshot")
    build_parser.add_argument("--no-fresh", action="store_true", help="Skip Wikidata candidates")
    build_parser.add_argument("--backups", action="store_true", help="Also find backup media ids")
    build_parser.add_argument("--dry-run", action="store_true", help="Do not write anything")

    genre_ids = [g.value for g in GenreCategory]
    verify_parser = subparsers.add_parser(
        "verify", help="Check stored genres against the authority"
    )
    verify_parser.add_argument("--genre", choices=genre_ids, help="Only records with this genre")
    verify_parser.add_argument("--limit", type=int, default=0, help="Verify at most N records")
    verify_parser.add_argument("--skip", type=int, default=0, help="Skip the first N records")
    verify_parser.add_argument("--output", help="Report path (default: dated file in report dir)")
    verify_parser.add_argument(
        "--seed", action="store_true", help="Verify the seed, not the snapshot"
    )
    verify_parser.add_argument("--from-report", help="Retry the notFound names of a report")
    verify_parser.add_argument(
        "--save-tags", action="store_true", help="Write confirmed raw tags back into the seed"
    )
    verify_parser.add_argument("--resume", action="store_true", help="Continue a partial report")

    discover_parser = subparsers.add_parser("discover", help="Find new artists via similarity")
    discover_parser.add_argument("names", nargs="+", help="Seed artist names")
    discover_parser.add_argument("--depth", type=int, default=None, help="BFS depth")
    discover_parser.add_argument("--dry-run", action="store_true", help="Do not append to the seed")
    discover_parser.add_argument("--no-judge", action="store_true", help="Skip the aesthetic judge")

    import_parser = subparsers.add_parser(
        "import-playlist", help="Add the artists of a Spotify playlist as handpicked"
    )
    import_parser.add_argument("playlist", help="Playlist URL, spotify: URI or id")
    import_parser.add_argument("--dry-run", action="store_true", help="Do not rewrite the seed")
    import_parser.add_argument("--output", help="Save the batch for merge-import instead")

    merge_parser = subparsers.add_parser(
        "merge-import", help="Apply saved playlist import batches to the seed"
    )
    merge_parser.add_argument("batches", nargs="+", help="Batch files from import-playlist")
    merge_parser.add_argument("--dry-run", action="store_true", help="Do not rewrite the seed")

    collect_parser = subparsers.add_parser(
        "collect-notfound", help="Merge notFound names of several reports into a retry report"
    )
    collect_parser.add_argument("reports", nargs="+", help="Report files")
    collect_parser.add_argument("--output", help="Retry report path")

    harvest_parser = subparsers.add_parser(
        "harvest-tags", help="Copy confirmed authority tags into the seed"
    )
    harvest_parser.add_argument("reports", nargs="+", help="Report files")
    harvest_parser.add_argument("--dry-run", action="store_true", help="Do not rewrite the seed")

    patch_parser = subparsers.add_parser("propose-patch", help="Propose genre corrections")
    patch_parser.add_argument("report", help="Report file")
    patch_parser.add_argument("--output", help="Write the patch as JSON")

    stats_parser = subparsers.add_parser("stats", help="Sign and genre coverage")
    stats_parser.add_argument("--seed", action="store_true", help="Use the seed, not the snapshot")
    stats_parser.add_argument("--anchors", action="store_true", help="Suggest discovery anchors")

    venus_parser = subparsers.add_parser("venus", help="Venus sign for one or more dates")
    venus_parser.add_argument("dates", nargs="+", help="YYYY, YYYY-MM or YYYY-MM-DD")

    subparsers.add_parser("index", help="Rebuild the SQLite index from the snapshot")
    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entry point.

    Parses the subcommand, loads settings from the YAML file and the
    environment, configures logging and dispatches to the handler.
    """
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(1)

    app_settings = settings_from_config(args.config)
    configure_logging(app_settings.log_level, json_output=app_settings.app_env == "production")
    bind_run_context(command=args.command)

    # Pure computation, no event loop needed.
    if args.command == "venus":
        sys.exit(_handle_venus(args))

    if args.command == "build":
        exit_code = asyncio.run(_handle_build(args, app_settings))
    elif args.command == "verify":
        exit_code = asyncio.run(_handle_verify(args, app_settings))
    elif args.command == "discover":
        exit_code = asyncio.run(_handle_discover(args, app_settings))
    elif args.command == "import-playlist":
        exit_code = asyncio.run(_handle_import_playlist(args, app_settings))
    elif args.command == "merge-import":
        exit_code = asyncio.run(_handle_merge_import(args, app_settings))
    elif args.command == "collect-notfound":
        exit_code = asyncio.run(_handle_collect_notfound(args, app_settings))
    elif args.command == "harvest-tags":
        exit_code = asyncio.run(_handle_harvest_tags(args, app_settings))
    elif args.command == "propose-patch":
        exit_code = asyncio.run(_handle_propose_patch(args, app_settings))
    elif args.command == "stats":
        exit_code = asyncio.run(_handle_stats(args, app_settings))
    elif args.command == "index":
        exit_code = asyncio.run(_handle_index(app_settings))
    else:
        parser.print_help()
        exit_code = 1

    sys.exit(exit_code)


if __name__ == "__main__":
    main()
