#!/usr/bin/env python3
"""
Resume Export CLI

Paginates, compacts and exports a tailored resume payload. A payload is a YAML
or JSON file with a "resume" object and an optional "sourceLayout" object.

Commands:
    plan     - Show the pagination plan (line and page breaks)
    pdf      - Export to PDF
    docx     - Export to DOCX
    bundle   - Export both formats from one plan and check they agree
    compact  - Run one-page compaction and report what was trimmed
    revision - Print the export revision fingerprint
    layout   - Extract the source layout of a raw resume text file

Examples:\n

    export_resume.py plan payload.yaml                          # Inspect line/page breaks

    export_resume.py pdf payload.yaml -o resume.pdf             # One-page PDF

    export_resume.py docx payload.yaml -o resume.docx           # One-page DOCX

    export_resume.py pdf payload.yaml -o cv.pdf --allow-multi-page

    export_resume.py compact payload.yaml --budget 56 -o compacted.yaml
"""

import os
from pathlib import Path
from typing import Optional

import typer
from dotenv import load_dotenv
from omegaconf import OmegaConf
from typing_extensions import Annotated

from tailorfit.contexts.fitting import compact_resume_for_one_page
from tailorfit.contexts.fitting.compaction import DEFAULT_MAX_ESTIMATED_LINES
from tailorfit.contexts.fitting.logger import setup_fitting_logger
from tailorfit.contexts.intake import extract_source_layout
from tailorfit.contexts.intake.logger import setup_intake_logger
from tailorfit.contexts.modeling import (
    InvalidResumeDataError,
    OnePageFitConflictError,
    RenderParityError,
    SourceLayout,
    TailoredResume,
    build_document_model,
    compute_export_revision,
    load_payload,
    load_style_table,
)
from tailorfit.contexts.modeling.logger import setup_modeling_logger
from tailorfit.contexts.rendering import (
    LineBreak,
    ReportLabTextMeasure,
    build_docx_export,
    build_export_bundle,
    build_pagination_plan,
    build_pdf_export,
)
from tailorfit.contexts.rendering.logger import setup_rendering_logger
from tailorfit.utils.timestamp import now

load_dotenv()
LOGS_PATH = Path(os.getenv("LOGS_PATH", "outs/logs"))

BREAK_MARKERS = {
    LineBreak.NONE: " ",
    LineBreak.LINE: "↵",
    LineBreak.PAGE: "⇟",
}


app = typer.Typer(
    help="Paginate, compact and export tailored resumes to PDF and DOCX",
    add_completion=False,
    invoke_without_command=True,
)


@app.callback()
def main(ctx: typer.Context):
    """Show help by default when no command is provided."""
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit()


def read_payload(payload_path: Path):
    """Load a YAML/JSON payload into (resume, layout), exiting with an error if malformed."""
    if not payload_path.exists():
        typer.secho(f"Error: payload not found: {payload_path}\n", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    data = OmegaConf.to_container(OmegaConf.load(payload_path), resolve=True)
    try:
        return load_payload(data)
    except InvalidResumeDataError as e:
        typer.secho(f"Error: {e}\n", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)


def write_payload(output_path: Path, resume: TailoredResume, layout: SourceLayout) -> None:
    payload = {"resume": resume.to_dict(), "sourceLayout": layout.to_dict()}
    OmegaConf.save(OmegaConf.create(payload), output_path)


def start_session(output_format: str) -> Path:
    return setup_rendering_logger(LOGS_PATH / f"export_{now()}", output_format=output_format)


PayloadArgument = Annotated[
    Path,
    typer.Argument(help="YAML/JSON payload with 'resume' and optional 'sourceLayout'"),
]
BudgetOption = Annotated[
    Optional[int],
    typer.Option("--budget", "-b", help="Estimated line budget (default: TAILORFIT_MAX_ESTIMATED_LINES or 58)", min=1),
]
AllowMultiPageOption = Annotated[
    bool,
    typer.Option("--allow-multi-page", help="Export even if the resume cannot fit one page"),
]
NoCompactOption = Annotated[
    bool,
    typer.Option("--no-compact", help="Skip one-page compaction"),
]
StyleConfigOption = Annotated[
    Optional[Path],
    typer.Option("--styles", "-s", help="YAML paragraph style overrides (default: TAILORFIT_STYLE_CONFIG)"),
]


@app.command("plan")
def plan_command(payload: PayloadArgument, styles: StyleConfigOption = None):
    """
    Show the pagination plan of a payload, uncompacted.

    Each line is prefixed with its break marker: ↵ line break, ⇟ page break.
    """
    resume, layout = read_payload(payload)
    setup_modeling_logger(LOGS_PATH / f"plan_{now()}")
    model = build_document_model(resume, layout, load_style_table(styles))
    plan = build_pagination_plan(model, ReportLabTextMeasure())

    for planned in plan.paragraphs:
        typer.secho(f"[{planned.paragraph.style}]", fg=typer.colors.BLUE)
        for line in planned.lines:
            prefix = BREAK_MARKERS[line.break_before]
            bullet = "• " if line.bullet_marker else ""
            label = line.skills_label or ""
            typer.echo(f"  {prefix} {bullet}{label}{line.text}")

    color = typer.colors.GREEN if plan.page_count == 1 else typer.colors.YELLOW
    typer.secho(f"\nPages: {plan.page_count}", fg=color, bold=True)


def _export(output_format: str, payload: Path, output: Path, **options):
    resume, layout = read_payload(payload)
    start_session(output_format)

    builder = build_pdf_export if output_format == "pdf" else build_docx_export
    try:
        result = builder(resume, layout, **options)
    except OnePageFitConflictError as e:
        typer.secho(f"✗ {e.reason}", fg=typer.colors.RED, bold=True, err=True)
        typer.echo(f"  Estimated lines: {e.estimated_lines}", err=True)
        if e.page_count:
            typer.echo(f"  Exact pages: {e.page_count}", err=True)
        raise typer.Exit(code=1)
    except RenderParityError as e:
        typer.secho(f"✗ {e}", fg=typer.colors.RED, bold=True, err=True)
        raise typer.Exit(code=1)

    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_bytes(result.content)

    typer.secho(f"✓ Wrote {output}", fg=typer.colors.GREEN, bold=True)
    typer.echo(f"  Pages: {result.page_count}")
    typer.echo(f"  Estimated lines: {result.estimated_lines}")
    typer.echo(f"  Revision: {result.revision}")


@app.command("pdf")
def pdf_command(
    payload: PayloadArgument,
    output: Annotated[Path, typer.Option("--output", "-o", help="Output PDF path")] = Path("resume.pdf"),
    budget: BudgetOption = None,
    allow_multi_page: AllowMultiPageOption = False,
    no_compact: NoCompactOption = False,
    styles: StyleConfigOption = None,
):
    """
    Export a payload to PDF.

    Examples:\n

        $ export_resume.py pdf payload.yaml -o resume.pdf
    """
    _export(
        "pdf",
        payload,
        output,
        compact=not no_compact,
        allow_multi_page=allow_multi_page,
        max_estimated_lines=budget,
        style_table=load_style_table(styles),
    )


@app.command("docx")
def docx_command(
    payload: PayloadArgument,
    output: Annotated[Path, typer.Option("--output", "-o", help="Output DOCX path")] = Path("resume.docx"),
    budget: BudgetOption = None,
    allow_multi_page: AllowMultiPageOption = False,
    no_compact: NoCompactOption = False,
    styles: StyleConfigOption = None,
):
    """
    Export a payload to DOCX.

    Examples:\n

        $ export_resume.py docx payload.yaml -o resume.docx
    """
    _export(
        "docx",
        payload,
        output,
        compact=not no_compact,
        allow_multi_page=allow_multi_page,
        max_estimated_lines=budget,
        style_table=load_style_table(styles),
    )


@app.command("bundle")
def bundle_command(
    payload: PayloadArgument,
    output_dir: Annotated[Path, typer.Option("--output-dir", "-o", help="Directory for resume.pdf and resume.docx")] = Path("."),
    budget: BudgetOption = None,
    allow_multi_page: AllowMultiPageOption = False,
    styles: StyleConfigOption = None,
):
    """Export PDF and DOCX from one plan and verify page parity and PDF text."""
    resume, layout = read_payload(payload)
    start_session("bundle")

    try:
        bundle = build_export_bundle(
            resume,
            layout,
            allow_multi_page=allow_multi_page,
            max_estimated_lines=budget,
            style_table=load_style_table(styles),
            check_text=True,
        )
    except OnePageFitConflictError as e:
        typer.secho(f"✗ {e.reason}", fg=typer.colors.RED, bold=True, err=True)
        raise typer.Exit(code=1)
    except RenderParityError as e:
        typer.secho(f"✗ {e}", fg=typer.colors.RED, bold=True, err=True)
        raise typer.Exit(code=1)

    output_dir.mkdir(parents=True, exist_ok=True)
    (output_dir / "resume.pdf").write_bytes(bundle.pdf.content)
    (output_dir / "resume.docx").write_bytes(bundle.docx.content)

    if bundle.parity.consistent:
        typer.secho(f"✓ Wrote resume.pdf and resume.docx to {output_dir}", fg=typer.colors.GREEN, bold=True)
    else:
        typer.secho("⚠ Outputs written with parity issues:", fg=typer.colors.YELLOW, bold=True)
        for issue in bundle.parity.issues:
            typer.echo(f"  - {issue}")
    typer.echo(f"  Pages: {bundle.parity.plan_pages}")
    typer.echo(f"  Revision: {bundle.pdf.revision}")


@app.command("compact")
def compact_command(
    payload: PayloadArgument,
    budget: BudgetOption = None,
    output: Annotated[
        Optional[Path],
        typer.Option("--output", "-o", help="Write the compacted payload (YAML)"),
    ] = None,
):
    """Run one-page compaction and report what was trimmed."""
    resume, layout = read_payload(payload)
    setup_fitting_logger(
        LOGS_PATH / f"compact_{now()}",
        DEFAULT_MAX_ESTIMATED_LINES if budget is None else budget,
    )
    result = compact_resume_for_one_page(resume, layout, budget)
    diagnostics = result.diagnostics

    if result.fits:
        typer.secho("✓ Fits one page", fg=typer.colors.GREEN, bold=True)
    else:
        typer.secho(f"✗ {result.reason}", fg=typer.colors.RED, bold=True)

    typer.echo(
        f"  Estimated lines: {diagnostics.initial_estimated_lines} -> "
        f"{diagnostics.final_estimated_lines} (budget {diagnostics.max_estimated_lines})"
    )
    typer.echo(f"  Experience bullets removed: {diagnostics.removed_experience_bullets}")
    typer.echo(f"  Project bullets removed: {diagnostics.removed_project_bullets}")
    typer.echo(f"  Skill items removed: {diagnostics.removed_skill_items}")

    if output is not None:
        write_payload(output, result.resume, result.source_layout)
        typer.echo(f"  Wrote {output}")

    if not result.fits:
        raise typer.Exit(code=1)


@app.command("revision")
def revision_command(payload: PayloadArgument):
    """Print the export revision fingerprint of a payload."""
    resume, layout = read_payload(payload)
    typer.echo(compute_export_revision(resume, layout))


@app.command("layout")
def layout_command(
    raw_text: Annotated[Path, typer.Argument(help="Plain text extracted from the uploaded resume")],
    payload: PayloadArgument,
    output: Annotated[
        Optional[Path],
        typer.Option("--output", "-o", help="Write the payload with the extracted sourceLayout (YAML)"),
    ] = None,
):
    """Extract the section layout of a raw resume text file."""
    resume, _ = read_payload(payload)
    setup_intake_logger(LOGS_PATH / f"layout_{now()}")
    layout = extract_source_layout(raw_text.read_text(encoding="utf-8"), resume)

    for section in layout.sections:
        typer.secho(f"{section.kind:<11} {section.heading}", fg=typer.colors.BLUE)
        typer.echo(f"            {len(section.lines)} lines")

    if output is not None:
        write_payload(output, resume, layout)
        typer.echo(f"Wrote {output}")


if __name__ == "__main__":
    app()
