from __future__ import annotations

import argparse
import json
import sys
from collections.abc import Sequence
from pathlib import Path

from pydantic import ValidationError

from resume_builder.api.schemas.resumes import ResumeRecordModel
from resume_builder.config import configure_logging
from resume_builder.models.errors import ExportEncodingError, PrintUnavailableError
from resume_builder.models.pagination import PageAssignment
from resume_builder.services.export import ExportPipeline, resume_filename
from resume_builder.services.layout import compute_layout
from resume_builder.services.resume_data import ResumeRecord, sample_resume
from resume_builder.services.surface import RenderSurface, grayscale
from resume_builder.templates import get_template, list_templates


def _load_record(path: Path | None) -> ResumeRecord:
    """Load a resume record from a JSON file, or the sample resume.

    Raises:
        ValueError: If the file is not valid JSON or not a valid resume.
    """
    if path is None:
        return sample_resume()
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
        return ResumeRecordModel.model_validate(data).to_record()
    except OSError as exc:
        raise ValueError(f"Cannot read {path}: {exc.strerror or exc}") from exc
    except json.JSONDecodeError as exc:
        raise ValueError(f"{path} is not valid JSON: {exc}") from exc
    except ValidationError as exc:
        raise ValueError(f"{path} is not a valid resume:\n{exc}") from exc


def _describe(assignment: PageAssignment) -> None:
    suffix = " (fallback, measurement incomplete)" if assignment.is_fallback else ""
    print(f"Pages: {assignment.total_pages}{suffix}")
    for page in assignment:
        marker = "  [overflow]" if page.overflow else ""
        print(f"\nPage {page.page_number}: {page.used_height:.0f}/{page.capacity:.0f}px{marker}")
        for section_slice in page.sections:
            label = str(section_slice.name)
            if section_slice.is_continuation:
                label += " (continued)"
            items = ", ".join(str(i) for i in section_slice.items)
            print(f"  - {label}: {items}")


def _cmd_templates(_: argparse.Namespace) -> int:
    default = get_template(None).key
    for key in list_templates():
        marker = " (default)" if key == default else ""
        print(f"{key}{marker}")
    return 0


def _cmd_paginate(args: argparse.Namespace) -> int:
    record = _load_record(args.file)
    template = get_template(args.template)
    assignment = compute_layout(record, template, RenderSurface(page_width=args.width))
    if args.json:
        print(json.dumps(assignment.to_dict(), indent=2))
    else:
        print(f"Template: {template.key}")
        _describe(assignment)
    return 0


def _cmd_export(args: argparse.Namespace) -> int:
    record = _load_record(args.file)
    template = get_template(args.template)
    surface = RenderSurface(page_width=args.width)
    assignment = compute_layout(record, template, surface)
    transform = grayscale if args.grayscale else None
    pipeline = ExportPipeline(surface)

    if args.command == "print":
        job = pipeline.print_document(
            assignment, record, template, printer=args.printer, color_transform=transform
        )
        print(f"Sent {assignment.total_pages} page(s) to the printer. {job}".rstrip())
        return 0

    document = pipeline.export_document(assignment, record, template, color_transform=transform)
    output = args.output or Path(resume_filename(record))
    output.write_bytes(document)
    print(f"Wrote {assignment.total_pages} page(s) to {output}")
    return 0


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="resume-builder",
        description="Paginate resumes and export them as print-ready PDFs.",
    )
    parser.add_argument("--log-level", default=None, help="Override RESUME_LOG_LEVEL")
    commands = parser.add_subparsers(dest="command", required=True)

    commands.add_parser("templates", help="List style variants").set_defaults(
        handler=_cmd_templates
    )

    layout = argparse.ArgumentParser(add_help=False)
    layout.add_argument(
        "file",
        nargs="?",
        type=Path,
        help="Resume JSON file (the sample resume when omitted)",
    )
    layout.add_argument("-t", "--template", default=None, help="Style variant")
    layout.add_argument("--width", type=float, default=None, help="Page width in px")

    paginate = commands.add_parser("paginate", parents=[layout], help="Show page breaks")
    paginate.add_argument("--json", action="store_true", help="Print the assignment as JSON")
    paginate.set_defaults(handler=_cmd_paginate)

    export = commands.add_parser("export", parents=[layout], help="Write a PDF")
    export.add_argument("-o", "--output", type=Path, default=None, help="Output path")
    export.add_argument("--grayscale", action="store_true", help="Map colours to grey")
    export.set_defaults(handler=_cmd_export)

    printing = commands.add_parser("print", parents=[layout], help="Send to the printer")
    printing.add_argument("-P", "--printer", default=None, help="Printer name")
    printing.add_argument("--grayscale", action="store_true", help="Map colours to grey")
    printing.set_defaults(handler=_cmd_export)

    return parser


def run_cli(argv: Sequence[str] | None = None) -> int:
    """Parse *argv* and run the selected command.

    Returns:
        Exit code (0 for success, 1 for failure).
    """
    args = _build_parser().parse_args(argv)
    configure_logging(args.log_level)
    try:
        return args.handler(args)
    except ValueError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    except ExportEncodingError:
        print(f"Error: {ExportEncodingError.user_message}", file=sys.stderr)
        return 1
    except PrintUnavailableError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1


def main(argv: Sequence[str] | None = None) -> int:
    """Entry point for the CLI application."""
    try:
        return run_cli(argv)
    except KeyboardInterrupt:
        print("\nInterrupted by user. Exiting.", file=sys.stderr)
        return 130
    except Exception as exc:
        print(f"Unexpected error: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
