"""CLI entrypoint for the Vaketracker region analytics."""

from __future__ import annotations

import argparse
import logging
import os
import sys
import time
from pathlib import Path

from vaketracker.common.config_loader import ConfigBundle, load_config, read_secret
from vaketracker.common.constants import COMMANDS, EXIT_HARD_FAIL, EXIT_PARTIAL, EXIT_SUCCESS
from vaketracker.common.coordinates import sanitize_coordinates
from vaketracker.common.errors import ConfigError, VaketrackerError
from vaketracker.common.fs import dump_json_stdout, read_json, write_json
from vaketracker.common.http import HttpClient, HttpRequestError
from vaketracker.common.ids import generate_run_id
from vaketracker.common.logging import build_logger, log_event
from vaketracker.common.permissions import Role, Viewer, permissions_from_rows, visible_records
from vaketracker.common.time_utils import parse_date
from vaketracker.geo.classifier import DEFAULT_CLASSIFIER, canonical_country
from vaketracker.pipeline.activity_chart import build_activity_chart
from vaketracker.pipeline.activity_summary import summarise_activities
from vaketracker.pipeline.capture import CaptureLimits, GpsFix, build_location_row
from vaketracker.pipeline.heatmap import aggregate, intensity_band
from vaketracker.pipeline.tracking import summarise_tracking
from vaketracker.sources.geocode import OpenCageGeocoder
from vaketracker.sources.supabase import SupabaseSource

DATASET_KEYS = ("locations", "tracking", "profiles", "permissions")


def parse_args(argv: list[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("command", choices=COMMANDS)
    parser.add_argument("--config-dir", default="./config")
    parser.add_argument("--overlay-config-dir", default=None)
    parser.add_argument("--input", default=None, help="JSON file with locations/tracking/profiles arrays")
    parser.add_argument("--output", default=None)
    parser.add_argument("--country", default=None)
    parser.add_argument("--lat", type=float, default=None)
    parser.add_argument("--lng", type=float, default=None)
    parser.add_argument("--accuracy", type=float, default=None)
    parser.add_argument("--user-id", default=None)
    parser.add_argument("--date-from", default=None)
    parser.add_argument("--date-to", default=None)
    parser.add_argument("--activity-type", default=None)
    parser.add_argument("--sub-activity", default=None)
    parser.add_argument("--notes", default=None)
    parser.add_argument("--dry-run", action="store_true", help="build the capture row without storing it")
    parser.add_argument("--viewer-id", default=None)
    parser.add_argument("--viewer-role", default=None, choices=[role.value for role in Role])
    parser.add_argument("--data-dir", default=None)
    parser.add_argument("--run-id", default=None)
    parser.add_argument("--log-level", default="INFO", choices=["DEBUG", "INFO", "WARN", "ERROR"])
    return parser.parse_args(argv)


def build_source(bundle: ConfigBundle, http_client: HttpClient) -> SupabaseSource:
    cfg = bundle.app["supabase"]
    access_token_env = cfg.get("access_token_env")
    access_token = None
    if access_token_env:
        access_token = os.environ.get(access_token_env, "").strip() or None
    return SupabaseSource(
        cfg["url"],
        read_secret(cfg["api_key_env"]),
        access_token=access_token,
        http_client=http_client,
        tables=cfg.get("tables"),
    )


def build_geocoder(bundle: ConfigBundle, http_client: HttpClient) -> OpenCageGeocoder | None:
    cfg = bundle.app["geocoder"]
    if not cfg["enabled"]:
        return None
    return OpenCageGeocoder(
        read_secret(cfg["api_key_env"]),
        endpoint=cfg["endpoint"],
        http_client=http_client,
        timeout_seconds=float(cfg.get("timeout_seconds", 20)),
    )


def load_dataset(args: argparse.Namespace, bundle: ConfigBundle, http_client: HttpClient) -> dict:
    if args.input:
        payload = read_json(Path(args.input))
        if not isinstance(payload, dict):
            raise ConfigError(f"Input file must hold a JSON object: {args.input}")
        return {key: list(payload.get(key) or []) for key in DATASET_KEYS}

    source = build_source(bundle, http_client)
    dataset: dict = {key: [] for key in DATASET_KEYS}
    if args.command in ("heatmap", "chart", "summary"):
        dataset["locations"] = source.fetch_locations()
    if args.command == "tracking":
        dataset["tracking"] = source.fetch_tracking()
    if args.command in ("summary", "tracking"):
        dataset["profiles"] = source.fetch_profiles()
    if args.viewer_id:
        dataset["permissions"] = [
            {"user_id": args.viewer_id, "permission_name": name, "enabled": enabled}
            for name, enabled in source.fetch_permissions(args.viewer_id).items()
        ]
        if args.viewer_role is None:
            args.viewer_role = source.current_user_role(args.viewer_id).value
    return dataset


def resolve_viewer(args: argparse.Namespace, dataset: dict) -> Viewer | None:
    if not args.viewer_id:
        return None
    rows = [row for row in dataset["permissions"] if row.get("user_id") == args.viewer_id]
    return Viewer(
        user_id=args.viewer_id,
        role=Role.parse(args.viewer_role),
        permissions=permissions_from_rows(rows),
    )


def profile_labels(profiles: list[dict]) -> dict[str, str]:
    labels = {}
    for profile in profiles:
        user_id = profile.get("user_id")
        if not user_id:
            continue
        name = " ".join(part for part in (profile.get("first_name"), profile.get("last_name")) if part)
        labels[user_id] = name or profile.get("email") or ""
    return labels


def run_classify(args: argparse.Namespace) -> tuple[dict, int]:
    if args.lat is None or args.lng is None:
        raise ConfigError("classify requires --lat and --lng")
    lat, lng = sanitize_coordinates(args.lat, args.lng)
    country = DEFAULT_CLASSIFIER.classify_country(lat, lng)
    region = DEFAULT_CLASSIFIER.classify_region(lat, lng, country)
    return {"latitude": lat, "longitude": lng, "country": country, "region": region}, 0


def selected_country(args: argparse.Namespace, bundle: ConfigBundle, logger) -> str:
    country = args.country or bundle.default_country
    configured = {canonical_country(name) for name in bundle.countries}
    if canonical_country(country) not in configured:
        log_event(
            logger,
            f"country {country!r} is not in heatmap.countries",
            level=logging.WARNING,
            command=args.command,
            country=country,
            event="COUNTRY_NOT_CONFIGURED",
            status="warning",
        )
    return country


def run_heatmap(args: argparse.Namespace, bundle: ConfigBundle, dataset: dict, viewer, logger) -> tuple[dict, int]:
    country = selected_country(args, bundle, logger)
    locations = dataset["locations"] if viewer is None else visible_records(dataset["locations"], viewer)
    result = aggregate(locations, country, logger=logger)
    payload = result.to_dict()
    for bucket in payload["buckets"]:
        bucket["band"] = intensity_band(bucket["intensity"])
    return payload, result.skipped_records


def run_chart(args: argparse.Namespace, bundle: ConfigBundle, dataset: dict, viewer, logger) -> tuple[dict, int]:
    locations = dataset["locations"] if viewer is None else visible_records(dataset["locations"], viewer)
    chart = build_activity_chart(
        locations,
        selected_country(args, bundle, logger),
        user_id=args.user_id,
        date_from=parse_date(args.date_from),
        date_to=parse_date(args.date_to),
    )
    return chart, chart["skipped_records"]


def run_summary(dataset: dict, viewer) -> tuple[list, int]:
    locations = dataset["locations"] if viewer is None else visible_records(dataset["locations"], viewer)
    return summarise_activities(dataset["profiles"], locations), 0


def run_tracking(args: argparse.Namespace, dataset: dict, viewer) -> tuple[dict, int]:
    rows = dataset["tracking"] if viewer is None else visible_records(dataset["tracking"], viewer)
    if args.user_id:
        rows = [row for row in rows if row.get("user_id") == args.user_id]
    summary = summarise_tracking(rows, users=profile_labels(dataset["profiles"]))
    return summary, summary["invalid_points"]


def run_capture(args: argparse.Namespace, bundle: ConfigBundle, http_client: HttpClient, logger) -> tuple[dict, int]:
    if args.lat is None or args.lng is None or not args.user_id:
        raise ConfigError("capture requires --lat, --lng and --user-id")
    row = build_location_row(
        GpsFix(args.lat, args.lng, args.accuracy),
        user_id=args.user_id,
        activity_type=args.activity_type or "",
        sub_activity=args.sub_activity,
        notes=args.notes,
        geocoder=build_geocoder(bundle, http_client),
        limits=CaptureLimits(**bundle.app.get("capture", {})),
        logger=logger,
    )
    if not args.dry_run:
        build_source(bundle, http_client).insert_location(row)
    return row, 0


def execute_command(args: argparse.Namespace, bundle: ConfigBundle, logger) -> tuple[object, int]:
    if args.command == "classify":
        return run_classify(args)
    with HttpClient() as http_client:
        if args.command == "capture":
            return run_capture(args, bundle, http_client, logger)
        dataset = load_dataset(args, bundle, http_client)
    viewer = resolve_viewer(args, dataset)
    if args.command == "heatmap":
        return run_heatmap(args, bundle, dataset, viewer, logger)
    if args.command == "chart":
        return run_chart(args, bundle, dataset, viewer, logger)
    if args.command == "summary":
        return run_summary(dataset, viewer)
    if args.command == "tracking":
        return run_tracking(args, dataset, viewer)
    raise ValueError(f"Unknown command: {args.command}")


def run_command(args: argparse.Namespace) -> int:
    run_id = args.run_id or generate_run_id()
    data_dir = Path(args.data_dir) if args.data_dir else None
    overlay_config_dir = Path(args.overlay_config_dir) if args.overlay_config_dir else None

    logger = build_logger(run_id, data_dir=data_dir, level=args.log_level)
    started = time.monotonic()
    log_event(logger, "command start", run_id=run_id, command=args.command, event="COMMAND_START", status="ok")

    try:
        bundle = load_config(Path(args.config_dir), overlay_config_dir=overlay_config_dir)
        payload, skipped = execute_command(args, bundle, logger)
    except HttpRequestError as exc:
        log_event(
            logger,
            f"upstream fetch failed: {exc}",
            level=logging.ERROR,
            run_id=run_id,
            command=args.command,
            source="supabase",
            event="COMMAND_FAIL",
            status="error",
            error_code=exc.error_code,
        )
        return EXIT_HARD_FAIL
    except VaketrackerError as exc:
        log_event(
            logger,
            f"command failed: {exc}",
            level=logging.ERROR,
            run_id=run_id,
            command=args.command,
            event="COMMAND_FAIL",
            status="error",
            error_code=exc.error_code,
        )
        return EXIT_HARD_FAIL

    if args.output:
        write_json(Path(args.output), payload)
    else:
        dump_json_stdout(payload)

    log_event(
        logger,
        "command end",
        run_id=run_id,
        command=args.command,
        event="COMMAND_END",
        status="ok" if skipped == 0 else "partial",
        skipped=skipped,
        duration_ms=int((time.monotonic() - started) * 1000),
    )
    if skipped:
        return EXIT_PARTIAL
    return EXIT_SUCCESS


def main(argv: list[str] | None = None) -> int:
    args = parse_args(sys.argv[1:] if argv is None else argv)
    try:
        return run_command(args)
    except Exception:
        return EXIT_HARD_FAIL


if __name__ == "__main__":
    raise SystemExit(main())
