import argparse
import logging
import sys
from typing import Callable, Iterable, Optional

from app.batch.tag_load_batch import build_record_source, load_tag_store
from config.settings import S3DatasetSettings, TagStatsSettings
from tag_stats.application.usecase.country_selection import parse_country_selection
from tag_stats.application.usecase.tag_report_usecase import TagReportUseCase
from tag_stats.domain.errors import CountrySelectionError, UnknownBackendError
from tag_stats.domain.tag_ranking import (
    DIRECTION_BOTTOM,
    METRIC_INTERACTION,
    SCOPE_GLOBAL,
    TagRanking,
    TagReport,
)
from tag_stats.infrastructure.store.tag_stat_factory import resolve_backend

BLOCK_SPACER = "\n\n\n"

InputFn = Callable[[str], str]
OutputFn = Callable[[str], None]


def prompt_backend(input_fn: InputFn = input) -> str:
    answer = input_fn("Choose a data structure for parsing (map or bst): ")
    while True:
        try:
            return resolve_backend(answer)
        except UnknownBackendError:
            answer = input_fn("Please choose a valid data structure (map or bst): ")


def prompt_countries(available: Iterable[str], input_fn: InputFn = input, output_fn: OutputFn = print) -> list[str]:
    """
    유효한 입력이 들어올 때까지 국가 코드를 다시 묻는다.
    """
    available = list(available)
    while True:
        raw = input_fn("Select countries (use comma-separated values): ")
        try:
            return parse_country_selection(raw, available)
        except CountrySelectionError as exc:
            output_fn(str(exc))


def ranking_title(ranking: TagRanking) -> str:
    subject = "views" if ranking.metric != METRIC_INTERACTION else "positive interaction"
    verb = "to avoid for" if ranking.direction == DIRECTION_BOTTOM else "for"
    prefix = "Global top" if ranking.scope == SCOPE_GLOBAL else "Top"
    return f"{prefix} {ranking.limit} keywords/tags {verb} {subject}:"


def format_value(metric: str, value) -> str:
    if metric == METRIC_INTERACTION:
        return f"{value:.2f}"
    return str(value)


def render_ranking(ranking: TagRanking) -> list[str]:
    lines = [ranking_title(ranking)]
    lines.extend(f"{tag}: {format_value(ranking.metric, value)}" for tag, value in ranking.entries)
    return lines


def render_report(report: TagReport) -> str:
    blocks: list[str] = []
    for country_report in report.countries:
        sections = ["\n".join(render_ranking(r)) for r in country_report.rankings()]
        blocks.append(f"Country: {country_report.country}\n" + BLOCK_SPACER.join(sections))

    global_sections = ["\n".join(render_ranking(r)) for r in report.global_report.rankings()]
    blocks.append("Global\n" + BLOCK_SPACER.join(global_sections))
    return (BLOCK_SPACER + "\n").join(blocks)


def positive_int(value: str) -> int:
    number = int(value)
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be a positive integer, got {value}")
    return number


def build_parser(settings: TagStatsSettings) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tag-stats",
        description="Top/bottom tags by views and engagement-weighted interaction for trending videos.",
    )
    parser.add_argument("--source", choices=["local", "s3"], default=settings.source)
    parser.add_argument("--data-dir", default=settings.data_dir, help="folder of <CC>*.csv trending files")
    parser.add_argument("--s3-prefix", default=None, help="key prefix under AWS_S3_BUCKET")
    parser.add_argument("--backend", default=None, help="mapping (map) or tree (bst)")
    parser.add_argument(
        "--interactive-backend",
        action="store_true",
        help="ask for the backend on stdin instead of using TAG_STATS_BACKEND",
    )
    parser.add_argument("--countries", default=None, help="comma-separated country codes, or ALL")
    parser.add_argument("--limit", type=positive_int, default=settings.report_limit)
    parser.add_argument("--global-extended", action="store_true", default=settings.global_extended)
    parser.add_argument("--log-level", default="INFO")
    return parser


def main(
    argv: Optional[list[str]] = None,
    input_fn: InputFn = input,
    output_fn: OutputFn = print,
) -> int:
    settings = TagStatsSettings()
    args = build_parser(settings).parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level.upper(), logging.INFO),
        format="%(asctime)s - %(levelname)s - %(message)s",
    )

    try:
        if args.interactive_backend and not args.backend:
            backend = prompt_backend(input_fn)
        else:
            backend = resolve_backend(args.backend or settings.backend)
    except UnknownBackendError as exc:
        output_fn(str(exc))
        return 2

    settings.backend = backend
    settings.source = args.source
    settings.data_dir = args.data_dir
    s3_settings = S3DatasetSettings()
    if args.s3_prefix is not None:
        s3_settings.prefix = args.s3_prefix

    try:
        store, summary = load_tag_store(settings, build_record_source(settings, s3_settings))
    except (FileNotFoundError, ValueError) as exc:
        output_fn(str(exc))
        return 1
    output_fn(f"Time taken to parse data using {backend}: {summary.elapsed_ms} milliseconds")

    if not store.countries:
        output_fn("No trending records were loaded.")
        return 1
    output_fn("Available countries: " + " ".join(store.countries))

    if args.countries is not None:
        try:
            selected = parse_country_selection(args.countries, store.countries)
        except CountrySelectionError as exc:
            output_fn(str(exc))
            return 2
    else:
        selected = prompt_countries(store.countries, input_fn, output_fn)

    usecase = TagReportUseCase(store, limit=args.limit, global_extended=args.global_extended)
    output_fn(render_report(usecase.build_report(selected)))
    return 0


if __name__ == "__main__":
    sys.exit(main())
