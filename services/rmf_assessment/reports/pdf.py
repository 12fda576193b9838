"""
PDF Report Encoding
===================

Paginated document rendering of one assessment.

Layout (points, origin bottom-left, cursor starts at 750):
- Title block: two bold lines, 60 units
- Detail lines: 12pt, 20 units each, then a 20 unit gap
- Per function: header (break below 100), status line, then per
  subcategory (break below 80) an id/outcome line, a colored
  implementation line and wrapped notes (break below 60 per line)

Version: 0.1.0
"""

from services.rmf_assessment.models.assessment import (
    FrameworkSection,
    Implementation,
    SubcategoryRecord,
)
from services.rmf_assessment.models.template import FrameworkFunction
from services.rmf_assessment.reports.canvas import BLACK, RGB, Canvas, wrap_text
from services.rmf_assessment.reports.content import ReportContent


TITLE_COLOR: RGB = (0.2, 0.3, 0.7)
SECTION_COLOR: RGB = (0.2, 0.5, 0.8)
NOTE_COLOR: RGB = (0.4, 0.4, 0.4)

IMPLEMENTATION_COLORS: dict[str, RGB] = {
    Implementation.FULLY_IMPLEMENTED.value: (0, 0.8, 0),
    Implementation.SUBSTANTIALLY_IMPLEMENTED.value: (0.8, 0.8, 0),
    Implementation.PARTIALLY_IMPLEMENTED.value: (1, 0.5, 0),
    Implementation.NOT_STARTED.value: (1, 0, 0),
}

# Page-break thresholds
SECTION_BREAK = 100
SUBCATEGORY_BREAK = 80
NOTE_BREAK = 60

NOTE_WIDTH = 60


def implementation_color(level: Implementation | str) -> RGB:
    key = level.value if isinstance(level, Implementation) else level
    return IMPLEMENTATION_COLORS.get(key, BLACK)


def _draw_title(canvas: Canvas) -> None:
    canvas.draw("NIST AI Risk Management Framework", x=50, size=18, bold=True, color=TITLE_COLOR)
    canvas.advance(25)
    canvas.draw("Compliance Assessment Report", x=50, size=16, bold=True, color=TITLE_COLOR)
    canvas.advance(35)


def _draw_details(canvas: Canvas, content: ReportContent) -> None:
    for label, value in content.details():
        canvas.draw(f"{label}: {value}", x=50, size=12)
        canvas.advance(20)
    canvas.advance(20)


def _draw_subcategory(canvas: Canvas, sub: SubcategoryRecord) -> None:
    canvas.ensure_space(SUBCATEGORY_BREAK)

    canvas.draw(f"{sub.subcategory_id}: {sub.outcome}", x=90, size=10)
    canvas.advance(15)

    canvas.draw(
        f"Implementation: {sub.implementation.value}",
        x=110,
        size=9,
        color=implementation_color(sub.implementation),
    )
    canvas.advance(15)

    if sub.notes:
        for line in wrap_text(sub.notes, NOTE_WIDTH):
            canvas.ensure_space(NOTE_BREAK)
            canvas.draw(f"Notes: {line}", x=110, size=8, color=NOTE_COLOR)
            canvas.advance(12)

    canvas.advance(10)


def _draw_section(canvas: Canvas, function: FrameworkFunction, section: FrameworkSection) -> None:
    canvas.ensure_space(SECTION_BREAK)

    canvas.draw(f"{function.value.upper()} Framework", x=50, size=14, bold=True, color=SECTION_COLOR)
    canvas.advance(25)

    canvas.draw(f"Status: {'Completed' if section.completed else 'In Progress'}", x=70, size=11)
    canvas.advance(20)

    for sub in section.subcategories:
        _draw_subcategory(canvas, sub)

    canvas.advance(20)


def layout_pdf(content: ReportContent) -> Canvas:
    """Lay out the whole report on a fresh canvas."""
    canvas = Canvas()
    _draw_title(canvas)
    _draw_details(canvas, content)
    for function, section in content.sections():
        _draw_section(canvas, function, section)
    return canvas


def render_pdf(content: ReportContent) -> bytes:
    return layout_pdf(content).save()
