# ==============================================
# CLI - Command Line Entry Point
# ==============================================
#
# COMMANDS:
# ---------
# 1. Classify the fields of a profile or sample:
#    python -m profilegen.cli classify data/movies.profile.json
#    python -m profilegen.cli classify data/movies.jsonl --pk imdb_id --format table
#
# 2. Print the entity class (or just its properties without a class name):
#    python -m profilegen.cli entity data/movies.profile.json "App\\Entity\\Movie"
#    python -m profilegen.cli entity data/movies.profile.json
#
# 3. Print search-index settings:
#    python -m profilegen.cli index data/movies.profile.json
#
# 4. Print the result-card configuration:
#    python -m profilegen.cli card data/movies.profile.json
#
# 5. Sample a live API and classify what comes back:
#    python -m profilegen.cli fetch http://127.0.0.1:8000/record --count 20
#
# Every command accepts --pk, --unique (repeatable) and --heuristic.
# Results go to stdout. Nothing is written to disk.
#
# ==============================================

import argparse
import json
import sys
from typing import List, Optional

from profilegen import __version__
from profilegen.exceptions import ProfileGenError
from profilegen.generator import CodeGenerator, GenerationResult
from profilegen.emitters.doctrine import render_entity, render_properties


def _add_key_options(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--pk", dest="primary_key", help="Primary key field (overrides everything)")
    parser.add_argument(
        "--unique", dest="unique_fields", action="append", default=None,
        help="Unique field hint, in priority order (repeatable)",
    )
    parser.add_argument(
        "--heuristic", action="store_true", default=None,
        help="Infer the primary key from uniqueness when nothing else names one",
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="profilegen",
        description="Classify profiled fields into column types, keys and search facets.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    sub = parser.add_subparsers(dest="command", required=True)

    classify = sub.add_parser("classify", help="Classify every field")
    classify.add_argument("input", help="*.profile.json, *.jsonl or *.json sample")
    classify.add_argument("--format", choices=("json", "table"), default="json")
    _add_key_options(classify)

    entity = sub.add_parser("entity", help="Print the entity class, or its ORM properties")
    entity.add_argument("input", help="*.profile.json, *.jsonl or *.json sample")
    entity.add_argument(
        "class_name", nargs="?", default=None,
        help="Fully-qualified entity class (e.g. App\\Entity\\Movie); properties only if omitted",
    )
    entity.add_argument(
        "--repository", dest="repository_class", default=None,
        help="Repository FQCN (default: <Namespace>\\Repository\\<Short>Repository)",
    )
    _add_key_options(entity)

    for name, help_text in (
        ("index", "Print search-index settings"),
        ("card", "Print the result-card configuration"),
    ):
        cmd = sub.add_parser(name, help=help_text)
        cmd.add_argument("input", help="*.profile.json, *.jsonl or *.json sample")
        _add_key_options(cmd)

    fetch = sub.add_parser("fetch", help="Sample records from an API and classify them")
    fetch.add_argument("url", nargs="?", default=None, help="Endpoint (default: PROFILEGEN_SAMPLE_URL)")
    fetch.add_argument("--count", type=int, default=None, help="Records to sample")
    fetch.add_argument("--format", choices=("json", "table"), default="json")
    _add_key_options(fetch)

    return parser


def format_table(result: GenerationResult) -> str:
    rows = [("field", "type", "pk", "roles")]
    for name, r in result.report.results.items():
        type_text = r.resolved_type.value
        if r.length is not None:
            type_text += f"({r.length})"
        roles = ",".join(role.value for role in sorted(r.facet_roles, key=lambda x: x.value))
        rows.append((name, type_text, "yes" if r.is_primary_key else "", roles or "-"))

    widths = [max(len(row[i]) for row in rows) for i in range(4)]
    return "\n".join(
        "  ".join(cell.ljust(widths[i]) for i, cell in enumerate(row)).rstrip()
        for row in rows
    )


def _dump(data) -> str:
    return json.dumps(data, indent=2, ensure_ascii=False)


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    key_options = dict(
        primary_key=args.primary_key,
        unique_fields=args.unique_fields,
        heuristic=args.heuristic,
    )

    try:
        generator = CodeGenerator()
        if args.command == "fetch":
            result = generator.generate_from_url(args.url, count=args.count, **key_options)
        else:
            result = generator.generate(args.input, **key_options)
        if args.command == "entity" and args.class_name:
            entity_text = render_entity(
                args.class_name,
                result.columns,
                repository_class=args.repository_class,
                source=result.profile.input,
            )
        elif args.command == "entity":
            entity_text = render_properties(result.columns)
    except ProfileGenError as e:
        print(f"✗ {e.message}", file=sys.stderr)
        return 1

    if args.command in ("classify", "fetch"):
        if args.format == "table":
            print(format_table(result))
        else:
            print(_dump(result.report.to_dict()))
    elif args.command == "entity":
        print(entity_text.rstrip("\n"))
    elif args.command == "index":
        print(_dump(result.index_settings.to_dict()))
    elif args.command == "card":
        print(_dump(result.card_config.to_dict()))

    return 0


if __name__ == "__main__":
    sys.exit(main())
