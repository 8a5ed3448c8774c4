"""Command line entry point: `memorable-ids`."""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Iterable, List, Mapping, Optional, Sequence

import anyio
from dotenv import load_dotenv

from .config import GeneratorConfig, apply_env_overrides
from .errors import ConfigurationError, MemorableIdError
from .generator import IdGenerator
from .telemetry import (
    ConsoleTelemetrySink,
    FanoutTelemetrySink,
    JsonLinesTelemetrySink,
    StructuredTelemetrySink,
    TelemetrySink,
)
from .wordlists import WordList, catalog, find_invalid_words

DEFAULT_LISTS = [WordList.COLOURS.value, WordList.ANIMALS.value]


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="memorable-ids",
        description="Generate short, human-memorable identifiers from curated word lists",
    )
    parser.add_argument(
        "--lists",
        nargs="+",
        choices=[identifier.value for identifier in WordList],
        default=DEFAULT_LISTS,
        help="Word lists to draw from, in output order (default: colours animals)",
    )
    parser.add_argument("--joiner", default=None, help="Separator placed between words")
    parser.add_argument("--max-length", type=int, default=None, help="Ids must be shorter than this")
    parser.add_argument("--max-attempts", type=int, default=None, help="Retries per id (default 100)")
    parser.add_argument("--seed", type=int, default=None, help="Seed for reproducible output")
    parser.add_argument("--allow-duplicates", action="store_true", help="Permit the same id more than once")
    parser.add_argument("-n", "--count", type=int, default=1, help="Number of ids to generate")
    parser.add_argument("--exclude", type=Path, help="File of existing ids (one per line) that must not be produced")
    parser.add_argument("-v", "--verbose", action="store_true", help="Show every attempt on stderr")
    parser.add_argument("--json-events", action="store_true", help="Write every event to stderr as a JSON line")
    parser.add_argument("--export", type=Path, help="Write a JSON telemetry bundle for this run to this path")
    parser.add_argument("--check-lists", action="store_true", help="Validate the bundled word lists and exit")
    return parser.parse_args(argv)


def build_config(args: argparse.Namespace, environ: Optional[Mapping[str, str]] = None) -> GeneratorConfig:
    """Defaults, then MEMORABLE_IDS_* environment variables, then explicit flags."""

    config = GeneratorConfig(lists=tuple(WordList(name) for name in args.lists))
    config = apply_env_overrides(config, environ)
    if args.joiner is not None:
        config = config.with_joiner(args.joiner)
    if args.max_length is not None:
        config = config.with_max_length(args.max_length)
    if args.max_attempts is not None:
        config = config.with_max_attempts(args.max_attempts)
    if args.seed is not None:
        config = config.with_seed(args.seed)
    if args.allow_duplicates:
        config = config.allowing_duplicates()
    return config


def main(argv: Optional[Sequence[str]] = None) -> int:
    load_dotenv()
    args = parse_args(argv)
    if args.check_lists:
        return _check_lists()

    recorder = StructuredTelemetrySink()
    sinks: List[TelemetrySink] = [recorder]
    if args.verbose:
        sinks.append(ConsoleTelemetrySink())
    if args.json_events:
        sinks.append(JsonLinesTelemetrySink())

    ids: List[str] = []
    status = 0
    config: Optional[GeneratorConfig] = None
    try:
        config = build_config(args)
        generator = IdGenerator.from_config(config, telemetry=FanoutTelemetrySink(sinks))
        if args.exclude:
            anyio.run(_generate_excluding, generator, args.count, args.exclude, ids)
        else:
            for _ in range(args.count):
                ids.append(generator.generate())
    except MemorableIdError as exc:
        print(f"error: {exc}", file=sys.stderr)
        status = 2

    for value in ids:
        print(value)

    if args.export:
        bundle = recorder.build_bundle(
            config=config.model_dump(mode="json") if config is not None else {},
            ids=ids,
            extra={"status": "completed" if status == 0 else "failed", "requested": args.count},
        )
        args.export.parent.mkdir(parents=True, exist_ok=True)
        args.export.write_text(json.dumps(bundle, indent=2, ensure_ascii=False))
        print(f"[export] wrote {args.export}", file=sys.stderr)
    return status


async def _generate_excluding(generator: IdGenerator, count: int, path: Path, out: List[str]) -> None:
    try:
        text = await anyio.Path(path).read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigurationError(f"Cannot read exclusions from {path}: {exc.strerror or exc}") from exc
    excluded = set(_parse_exclusions(text.splitlines()))

    async def _not_taken(candidate: str) -> bool:
        return candidate not in excluded

    for _ in range(count):
        out.append(await generator.generate_async(_not_taken))


def _parse_exclusions(lines: Iterable[str]) -> Iterable[str]:
    for line in lines:
        value = line.strip()
        if value:
            yield value


def _check_lists() -> int:
    problems = 0
    for identifier, words in catalog().items():
        invalid = find_invalid_words(words)
        marker = "ok" if not invalid else f"{len(invalid)} invalid: {', '.join(invalid)}"
        print(f"{identifier.value}: {len(words)} words ({marker})")
        problems += len(invalid)
    return 1 if problems else 0


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
