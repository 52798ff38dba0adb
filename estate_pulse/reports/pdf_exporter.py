"""
PDF reports for projects and units.

Text is wrapped with the font metrics of the standard Helvetica faces before
anything is placed, so page breaks are decided from measured heights.
"""

import logging
from dataclasses import dataclass, field
from io import BytesIO
from typing import List, Optional, Sequence

from reportlab.lib.pagesizes import A4
from reportlab.lib.units import mm
from reportlab.lib.utils import simpleSplit
from reportlab.pdfgen import canvas

from estate_pulse.schemas.project import ProjectResponse
from estate_pulse.schemas.unit import UnitResponse

logger = logging.getLogger(__name__)

REGULAR = "Helvetica"
BOLD = "Helvetica-Bold"
BULLET = "•"

MARGIN = 20 * mm
LINE_SPACING = 1.4
SECTION_GAP = 10
# Body lines that must fit below a heading before it is placed on a page
KEEP_WITH_HEADING = 2


@dataclass(frozen=True)
class TextStyle:
    font: str = REGULAR
    size: float = 10
    indent: float = 0
    centred: bool = False

    @property
    def leading(self) -> float:
        return self.size * LINE_SPACING


TITLE = TextStyle(font=BOLD, size=20, centred=True)
SECTION_HEADING = TextStyle(font=BOLD, size=14)
MAIN_HEADING = TextStyle(font=BOLD, size=16)
INFO = TextStyle(size=12)
BODY = TextStyle(size=10)
DETAIL = TextStyle(size=10, indent=5 * mm)
SUBHEADING = TextStyle(font=BOLD, size=10, indent=5 * mm)
BULLET_ITEM = TextStyle(size=10, indent=5 * mm)
UNIT_BULLET_ITEM = TextStyle(size=10, indent=10 * mm)


@dataclass
class Paragraph:
    text: str
    style: TextStyle = BODY


@dataclass
class PlacedLine:
    """One line of text at its final position on a page"""

    text: str
    style: TextStyle
    x: float
    y: float


@dataclass
class PdfPage:
    number: int
    lines: List[PlacedLine] = field(default_factory=list)
    headings: List[str] = field(default_factory=list)

    @property
    def texts(self) -> List[str]:
        return [line.text for line in self.lines]


class PdfReportBuilder:
    """
    Lays out a titled report as measured pages.

    Sections are added in order. A section starts on a fresh page when its
    heading and first body lines do not fit in the remaining space; body
    lines that still overflow continue on following pages.
    """

    def __init__(
        self,
        title: str,
        page_size=A4,
        margin: float = MARGIN,
    ):
        self.title = title
        self.width, self.height = page_size
        self.margin = margin
        self.pages: List[PdfPage] = []
        self._y = 0.0
        self._new_page()
        for line in self._wrap(Paragraph(title, TITLE)):
            self._place(line, TITLE)
        self._y -= SECTION_GAP

    @property
    def content_width(self) -> float:
        return self.width - 2 * self.margin

    @property
    def remaining(self) -> float:
        """Vertical space left above the bottom margin of the current page"""
        return self._y - self.margin

    def _new_page(self) -> None:
        self.pages.append(PdfPage(number=len(self.pages) + 1))
        self._y = self.height - self.margin

    def _wrap(self, paragraph: Paragraph) -> List[str]:
        style = paragraph.style
        width = self.content_width - style.indent
        return simpleSplit(paragraph.text, style.font, style.size, width) or [""]

    def _place(self, text: str, style: TextStyle) -> None:
        if style.leading > self.remaining and self.pages[-1].lines:
            self._new_page()

        x = self.width / 2 if style.centred else self.margin + style.indent
        self._y -= style.leading
        self.pages[-1].lines.append(PlacedLine(text=text, style=style, x=x, y=self._y))

    def add_section(
        self,
        heading: str,
        paragraphs: Sequence[Paragraph],
        heading_style: TextStyle = SECTION_HEADING,
    ) -> None:
        """Place a heading followed by its wrapped paragraphs"""
        body = [
            (line, paragraph.style)
            for paragraph in paragraphs
            for line in self._wrap(paragraph)
        ]
        head = [(line, heading_style) for line in self._wrap(Paragraph(heading, heading_style))]

        kept = head + body[:KEEP_WITH_HEADING]
        needed = sum(style.leading for _, style in kept)
        if needed > self.remaining and self.pages[-1].lines:
            self._new_page()

        self.pages[-1].headings.append(heading)
        for text, style in head + body:
            self._place(text, style)
        self._y -= SECTION_GAP

    def render(self) -> bytes:
        """Draw the laid-out pages and return the PDF document"""
        buffer = BytesIO()
        pdf = canvas.Canvas(buffer, pagesize=(self.width, self.height), pageCompression=0)
        pdf.setTitle(self.title)

        for page in self.pages:
            for line in page.lines:
                pdf.setFont(line.style.font, line.style.size)
                if line.style.centred:
                    pdf.drawCentredString(line.x, line.y, line.text)
                else:
                    pdf.drawString(line.x, line.y, line.text)
            pdf.showPage()

        pdf.save()
        logger.debug(f"Rendered '{self.title}' with {len(self.pages)} pages")
        return buffer.getvalue()


def _bullets(items: Sequence[str], style: TextStyle) -> List[Paragraph]:
    return [Paragraph(f"{BULLET} {item}", style) for item in items]


def _or_na(value: Optional[object]) -> str:
    return "N/A" if value in (None, "") else str(value)


def build_project_report(project: ProjectResponse) -> PdfReportBuilder:
    """
    Lay out the report for one project.

    Optional sections are included only when their source field has content.
    """
    builder = PdfReportBuilder(f"{project.name} Estate - Project Report")

    info = [
        f"Status: {project.status}",
        f"Progress: {project.progress}%",
        f"Location: {project.location}",
        f"Manager: {project.manager}",
        f"Start Date: {project.start_date}",
        f"Target Completion: {project.target_completion}",
        f"Current Phase: {project.current_phase}",
        f"Budget: {project.budget}",
        f"Total Units: {project.total_units}",
        f"Completed Units: {project.completed_units}",
    ]
    builder.add_section(
        "Project Information",
        [Paragraph(text, INFO) for text in info],
        heading_style=MAIN_HEADING,
    )

    if project.target_milestone:
        builder.add_section("Target Milestone", [Paragraph(project.target_milestone)])
    if project.weekly_notes:
        builder.add_section("Weekly Notes", [Paragraph(project.weekly_notes)])
    if project.monthly_notes:
        builder.add_section("Monthly Summary", [Paragraph(project.monthly_notes)])
    if project.challenges:
        builder.add_section("Project Challenges", _bullets(project.challenges, BULLET_ITEM))

    return builder


def build_units_report(units: Sequence[UnitResponse], project_name: str) -> PdfReportBuilder:
    """Lay out one section per unit"""
    builder = PdfReportBuilder(f"{project_name} - Units Report")

    for unit in units:
        paragraphs = [
            Paragraph(f"Sub Type: {_or_na(unit.sub_type)}", DETAIL),
            Paragraph(f"Bedrooms: {_or_na(unit.bedrooms)}", DETAIL),
            Paragraph(f"Status: {unit.status}", DETAIL),
            Paragraph(f"Progress: {unit.progress}%", DETAIL),
            Paragraph(f"Target Completion: {unit.target_completion}", DETAIL),
            Paragraph(f"Current Phase: {unit.current_phase}", DETAIL),
            Paragraph(f"Last Updated: {unit.last_updated}", DETAIL),
        ]
        if unit.challenges:
            paragraphs.append(Paragraph("Challenges:", SUBHEADING))
            paragraphs.extend(_bullets(unit.challenges, UNIT_BULLET_ITEM))

        builder.add_section(f"Unit {unit.unit_number} - {unit.type}", paragraphs)

    return builder


def project_to_pdf(project: ProjectResponse) -> bytes:
    return build_project_report(project).render()


def units_to_pdf(units: Sequence[UnitResponse], project_name: str) -> bytes:
    return build_units_report(units, project_name).render()
