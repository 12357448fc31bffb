"""CLI entry point: ``siteid generate``, ``inspect``, ``render`` and ``attribute``."""

from __future__ import annotations

# Singleton logging, configured before the rest of the package is imported
from siteid.logging_config import set_level, setup_logging

setup_logging()

import argparse  # noqa: E402
import json  # noqa: E402
import sys  # noqa: E402
from pathlib import Path  # noqa: E402

from siteid import __version__  # noqa: E402
from siteid.config import Settings  # noqa: E402
from siteid.constants import DuplicatePolicy, IdFormat  # noqa: E402
from siteid.errors import SiteIdError  # noqa: E402
from siteid.generation.runner import GenerationResult  # noqa: E402


def main(argv: list[str] | None = None) -> None:
    """Main CLI entry point."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.version:
        print(f"siteid {__version__}")
        return

    if args.command == "generate":
        _run_generate(args)
    elif args.command == "inspect":
        _run_inspect(args)
    elif args.command == "render":
        _run_render(args)
    elif args.command == "attribute":
        _run_attribute(args)
    else:
        parser.print_help()


def _build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="siteid",
        description=(
            "Generate stable per-site identifiers for "
            "[UniqueId]-annotated C# parameters."
        ),
    )
    parser.add_argument(
        "--version",
        action="store_true",
        help="Print version and exit",
    )

    sub = parser.add_subparsers(dest="command")

    gen = sub.add_parser(
        "generate",
        help="Scan sources and write generated constants",
    )
    gen.add_argument(
        "source_root",
        type=str,
        help="Directory containing C# sources",
    )
    gen.add_argument(
        "--output-dir",
        "-o",
        default="Generated",
        help="Output directory (default: Generated)",
    )
    gen.add_argument(
        "--on-duplicate",
        choices=[p.value for p in DuplicatePolicy],
        default=None,
        help=(
            "What to do when two sites claim one constant "
            "(default: from settings)"
        ),
    )
    gen.add_argument(
        "--emit-attribute",
        action="store_true",
        help="Also write the UniqueIdAttribute source",
    )
    gen.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable verbose output",
    )

    insp = sub.add_parser(
        "inspect",
        help="List annotated sites and their identifiers",
    )
    insp.add_argument(
        "source_root",
        type=str,
        help="Directory containing C# sources",
    )
    insp.add_argument(
        "--json",
        action="store_true",
        help="Print JSON instead of a table",
    )

    rnd = sub.add_parser(
        "render",
        help="Compute the identifier for one coordinate tuple",
    )
    rnd.add_argument("--path", required=True, help="Source path")
    rnd.add_argument("--member", required=True, help="Member name")
    rnd.add_argument("--parameter", required=True, help="Parameter name")
    rnd.add_argument("--line", type=int, required=True, help="0-based line")
    rnd.add_argument(
        "--column", type=int, required=True, help="0-based column"
    )
    rnd.add_argument(
        "--format",
        "-f",
        default=IdFormat.HEX16.value,
        help="Identifier format (default: hex16)",
    )

    attr = sub.add_parser(
        "attribute",
        help="Print or write the UniqueIdAttribute source",
    )
    attr.add_argument(
        "--namespace",
        "-n",
        default=None,
        help="Namespace for the attribute (default: from settings)",
    )
    attr.add_argument(
        "--output-dir",
        "-o",
        default=None,
        help="Write to this directory instead of stdout",
    )

    return parser


def _run_generate(args: argparse.Namespace) -> None:
    """Execute the generate command."""
    from siteid.collection.csharp_scanner import CSharpSiteSource
    from siteid.generation.emitter import render_attribute_unit
    from siteid.generation.runner import generate
    from siteid.generation.sinks import DirectorySink

    source_root = Path(args.source_root).resolve()
    if not source_root.is_dir():
        print(f"Error: {source_root} is not a directory", file=sys.stderr)
        sys.exit(1)

    settings = Settings()
    if args.on_duplicate:
        settings = settings.model_copy(
            update={"duplicate_policy": DuplicatePolicy(args.on_duplicate)}
        )
    set_level("DEBUG" if args.verbose else settings.log_level)

    output_dir = Path(args.output_dir)
    sink = DirectorySink(output_dir, settings.output_extension)
    source = CSharpSiteSource(source_root, settings)

    print(f"Scanning: {source_root}")
    try:
        result = generate(source, sink, settings)
    except SiteIdError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        sys.exit(1)

    if args.emit_attribute:
        unit = render_attribute_unit(settings.attribute_namespace)
        sink.accept(unit.unit_name, unit.text)

    _report(result, args.verbose)
    print(f"Output: {output_dir}/ ({result.duration_ms:.0f}ms)")
    if not result.ok:
        sys.exit(1)


def _report(result: GenerationResult, verbose: bool) -> None:
    """Print per-unit status and a summary line."""
    for outcome in result.outcomes:
        if verbose or not outcome.ok:
            status = "ok" if outcome.ok else "FAILED"
            print(
                f"  [{status}] {outcome.unit_name} "
                f"({outcome.duration_ms:.0f}ms)"
            )
            if outcome.error:
                print(f"    Error: {outcome.error}")
    print(
        f"\nDone! {len(result.units)} units from "
        f"{result.site_count} sites ({len(result.failures)} failed)"
    )


def _run_inspect(args: argparse.Namespace) -> None:
    """List every annotated site with its identifier."""
    from siteid.collection.collector import collect_sites
    from siteid.collection.csharp_scanner import CSharpSiteSource
    from siteid.generation.emitter import unit_name
    from siteid.generation.grouping import identify_site

    source_root = Path(args.source_root).resolve()
    if not source_root.is_dir():
        print(f"Error: {source_root} is not a directory", file=sys.stderr)
        sys.exit(1)

    settings = Settings()
    try:
        sites = collect_sites(CSharpSiteSource(source_root, settings))
    except SiteIdError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        sys.exit(1)

    rows = [
        {
            "unit": unit_name(site.declaration, settings.unit_suffix),
            "constant": site.constant_name,
            "format": site.format.value,
            "id": identify_site(site),
            "location": site.coordinates.location,
        }
        for site in sites
    ]

    if args.json:
        print(json.dumps(rows, indent=2))
        return
    for row in rows:
        print(
            f"{row['location']}  {row['unit']}.{row['constant']}"
            f"  [{row['format']}]  {row['id']}"
        )
    print(f"\n{len(rows)} annotated sites")


def _run_render(args: argparse.Namespace) -> None:
    """Print the identifier for one coordinate tuple."""
    from siteid.identity.formats import identify, parse_format
    from siteid.identity.value_objects import CoordinateTuple

    try:
        coords = CoordinateTuple(
            source_path=args.path,
            member_name=args.member,
            parameter_name=args.parameter,
            line=args.line,
            column=args.column,
        )
        fmt = parse_format(args.format)
    except (SiteIdError, ValueError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        sys.exit(2)
    print(identify(coords, fmt))


def _run_attribute(args: argparse.Namespace) -> None:
    """Print or write the attribute source."""
    from siteid.generation.emitter import render_attribute_unit
    from siteid.generation.sinks import DirectorySink

    settings = Settings()
    unit = render_attribute_unit(args.namespace or settings.attribute_namespace)
    if args.output_dir is None:
        print(unit.text, end="")
        return
    sink = DirectorySink(Path(args.output_dir), settings.output_extension)
    sink.accept(unit.unit_name, unit.text)
    print(f"Wrote {sink.written[0]}")


if __name__ == "__main__":
    main()
