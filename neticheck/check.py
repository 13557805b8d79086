#!/usr/bin/env python3
"""Neticheck — Netiquette checks for emails.

Checks .eml files against the Netiquette and reports hints about what
might not be respected: subject tags, line lengths, signature, headers.
Results can be saved to a .json file and merged back in later runs.

Usage:
    python -m neticheck.check [-r] [-o results.json] [-i previous.json] SOURCE...
"""

import argparse
import logging
import os
import sys
from pathlib import Path

from neticheck.checks.structure import check_eml
from neticheck.hints import AnalysisResult, Hint, HintType, count_by_type, sorted_hints
from neticheck.message import MessageView
from neticheck.results import import_results, save_results

logger = logging.getLogger(__name__)

EML_EXTENSION = ".eml"
CONTEXT_CHUNK = 60


# --- Analysis ---

def analyze_file(path: Path) -> AnalysisResult:
    """Analyze one .eml file. A file that cannot be read or parsed yields a single error hint."""
    hints: list[Hint] = []
    try:
        check_eml(MessageView.from_file(path), hints)
    except Exception as e:
        # The stdlib parser raises more than MessageError on malformed input
        logger.warning("Could not analyze %s: %s", path, e, exc_info=True)
        hints = [HintType.ERROR.with_message(f"Error on analysis: {e}")]
    logger.debug("%s: %d hint(s)", path, len(hints))
    return AnalysisResult(path.name, hints)


def find_eml_files(directory: Path) -> list[Path]:
    return sorted(p for p in directory.rglob(f"*{EML_EXTENSION}") if p.is_file())


def collect_sources(sources: list[Path], recursive: bool, meta_hints: list[Hint]) -> list[Path]:
    """Expand SOURCE arguments into the list of files to analyze."""
    files = []
    for source in sources:
        if source.is_dir():
            if recursive:
                files.extend(find_eml_files(source))
            else:
                meta_hints.append(HintType.WARNING.with_message(
                    "Tried to process a directory without -r option").ctx(str(source)))
        else:
            files.append(source)
    return files


def analyze(files: list[Path]) -> list[AnalysisResult]:
    return [analyze_file(f) for f in files]


# --- Output formatting ---

SEVERITY_CHOICES = {"error": HintType.ERROR, "warning": HintType.WARNING, "info": HintType.INFO}
SEVERITY_GH = {HintType.ERROR: "error", HintType.WARNING: "warning", HintType.INFO: "notice"}


def at_least(hint: Hint, severity: HintType) -> bool:
    return hint.type.priority <= severity.priority


def format_summary(hints: list[Hint]) -> str:
    counts = count_by_type(hints)
    return (f"{len(hints)} hint(s) total ({counts[HintType.ERROR]} errors "
            f"{counts[HintType.WARNING]} warnings {counts[HintType.INFO]} info)")


def format_hint(hint: Hint) -> str:
    """Format a hint for console output, context cut into 60-character chunks."""
    out = f"[{hint.type.symbol}] {hint.message}"
    if hint.reference is not None:
        out += f" (see {hint.reference})"
    if hint.context is not None:
        context = hint.context.strip()
        out += "\n |- context:"
        for i in range(0, len(context), CONTEXT_CHUNK):
            out += f"\n |  | {context[i:i + CONTEXT_CHUNK]}"
    return out


def escape_annotation_data(s: str) -> str:
    return s.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")


def escape_annotation_property(s: str) -> str:
    return escape_annotation_data(s).replace(":", "%3A").replace(",", "%2C")


def format_github_annotation(name: str, hint: Hint) -> str:
    """Format as GitHub Actions annotation."""
    level = SEVERITY_GH[hint.type]
    msg = hint.message
    if hint.reference is not None:
        msg += f" (see {hint.reference})"
    if hint.context is not None:
        msg += f" | context: {hint.context.strip()}"
    return f"::{level} title={escape_annotation_property(name)}::{escape_annotation_data(msg)}"


def print_hints(hints: list[Hint]) -> None:
    print(format_summary(hints))
    for hint in sorted_hints(hints):
        print(format_hint(hint))


# --- Main ---

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="neticheck",
        description="Neticheck is a simple tool for checking whether emails (in .eml file format) "
                    "conform to the Netiquette. It can be used to see the results directly or can "
                    "store the results in a .json file and print the results from these .json files.",
    )
    parser.add_argument("source", nargs="*", type=Path, metavar="SOURCE",
                        help="Source .eml files (and folders if -r is set)")
    parser.add_argument("-r", "--recursive", action="store_true",
                        help="Enable recursion (scanning for .eml files in folders specified in SOURCE)")
    parser.add_argument("-s", "--silent", action="store_true", help="Disable console output")
    parser.add_argument("-o", "--out", type=Path, default=None,
                        help="Path for output to a .json file with the results")
    parser.add_argument("-i", "--import", dest="import_path", type=Path, default=None,
                        help="Import results from a .json file. These results will then be merged "
                             "with the results from the files chosen in SOURCE")
    parser.add_argument("--severity", default="info", choices=list(SEVERITY_CHOICES),
                        help="Minimum severity to report")
    parser.add_argument("--fail-on", default="never", choices=[*SEVERITY_CHOICES, "never"],
                        help="Exit with status 1 when a hint of this severity (or worse) is reported")
    parser.add_argument("-v", "--verbose", action="store_true", help="Verbose diagnostics on stderr")
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    meta_hints: list[Hint] = []
    results = import_results(args.import_path, meta_hints) if args.import_path else []
    results.extend(analyze(collect_sources(args.source, args.recursive, meta_hints)))

    min_sev = SEVERITY_CHOICES[args.severity]
    all_reported = [h for r in results for h in r.hints if at_least(h, min_sev)]
    all_reported += [h for h in meta_hints if at_least(h, min_sev)]

    if not args.silent:
        if meta_hints:
            print("Neticheck")
            print_hints(meta_hints)
            print()
        for result in results:
            hints = [h for h in result.hints if at_least(h, min_sev)]
            print(f"File {result.info}")
            print_hints(hints)
            print()
        print()
        print("-- Report by Neticheck")

    # Output GitHub annotations (if in CI)
    is_ci = os.environ.get("CI") or os.environ.get("GITHUB_ACTIONS")
    if is_ci:
        for result in results:
            for hint in sorted_hints(result.hints):
                if at_least(hint, min_sev):
                    print(format_github_annotation(result.info, hint))
        ghout = os.environ.get("GITHUB_OUTPUT", "")
        if ghout:
            counts = count_by_type(all_reported)
            with open(ghout, "a") as f:
                f.write(f"hints={len(all_reported)}\n")
                f.write(f"errors={counts[HintType.ERROR]}\n")
                f.write(f"warnings={counts[HintType.WARNING]}\n")
                f.write(f"infos={counts[HintType.INFO]}\n")

    if args.out is not None:
        save_results(args.out, results)

    # Exit code
    if args.fail_on == "never":
        return 0
    fail_sev = SEVERITY_CHOICES[args.fail_on]
    return 1 if any(at_least(h, fail_sev) for h in all_reported) else 0


if __name__ == "__main__":
    sys.exit(main())
