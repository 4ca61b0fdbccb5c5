"""
Cross-renderer validation.

Reads rendered bytes back and checks them against the pagination plan: page
counts must agree across the plan, the PDF and the DOCX, and every planned
line should be findable in the PDF text on its planned page.
"""

from dataclasses import dataclass, field
from io import BytesIO
from typing import List, Optional

from docx import Document

from tailorfit.contexts.rendering.docx_renderer import count_page_breaks
from tailorfit.contexts.rendering.logger import log_parity_result
from tailorfit.contexts.rendering.pagination import LineBreak, PaginationPlan
from tailorfit.utils.pdf_processing import extract_page_lines, normalize_for_matching, page_count


@dataclass
class ParityResult:
    """
    Result of a parity check.

    Attributes:
        plan_pages: Page count of the plan
        pdf_pages: Pages read back from the PDF (None if unreadable)
        docx_pages: Page break markers + 1 read back from the DOCX
        missing_lines: Planned line texts not found on their PDF page
    """

    plan_pages: int
    pdf_pages: Optional[int]
    docx_pages: int
    missing_lines: List[str] = field(default_factory=list)

    @property
    def consistent(self) -> bool:
        return self.plan_pages == self.pdf_pages == self.docx_pages and not self.missing_lines

    @property
    def issues(self) -> List[str]:
        issues = []
        if self.pdf_pages != self.plan_pages:
            issues.append(f"PDF has {self.pdf_pages} page(s), plan expects {self.plan_pages}")
        if self.docx_pages != self.plan_pages:
            issues.append(f"DOCX implies {self.docx_pages} page(s), plan expects {self.plan_pages}")
        for text in self.missing_lines:
            issues.append(f"Planned line not found in PDF: {text!r}")
        return issues


def planned_lines_by_page(plan: PaginationPlan) -> List[List[str]]:
    """Full printed text of every planned line, grouped by page."""
    pages: List[List[str]] = [[]]
    for paragraph in plan.paragraphs:
        for line in paragraph.lines:
            if line.break_before == LineBreak.PAGE:
                pages.append([])
            text = f"{line.skills_label or ''}{line.text}"
            if line.bullet_marker:
                text = f"• {text}"
            pages[-1].append(text)
    return pages


def find_missing_lines(plan: PaginationPlan, pdf_bytes: bytes) -> List[str]:
    """Planned lines whose text does not appear on the matching PDF page."""
    pdf_pages = extract_page_lines(pdf_bytes)
    missing = []
    for page_index, planned_lines in enumerate(planned_lines_by_page(plan)):
        page_text = ""
        if page_index < len(pdf_pages):
            page_text = normalize_for_matching(" ".join(pdf_pages[page_index]))
        for text in planned_lines:
            needle = normalize_for_matching(text)
            if needle and needle not in page_text:
                missing.append(text)
    return missing


def extract_docx_paragraph_texts(docx_bytes: bytes) -> List[str]:
    """Paragraph texts of a .docx package, in order."""
    document = Document(BytesIO(docx_bytes))
    return [paragraph.text for paragraph in document.paragraphs]


def check_renderer_parity(
    plan: PaginationPlan, pdf_bytes: bytes, docx_bytes: bytes, check_text: bool = False
) -> ParityResult:
    """
    Compare both rendered outputs with the plan.

    Args:
        plan: Plan both outputs were rendered from
        pdf_bytes: Rendered PDF
        docx_bytes: Rendered DOCX
        check_text: Also verify every planned line is present in the PDF text

    Returns:
        ParityResult (see .consistent and .issues)
    """
    result = ParityResult(
        plan_pages=plan.page_count,
        pdf_pages=page_count(pdf_bytes),
        docx_pages=count_page_breaks(docx_bytes) + 1,
    )
    if check_text:
        result.missing_lines = find_missing_lines(plan, pdf_bytes)

    log_parity_result(result)
    return result
