"""
Paginated Drawing Canvas
========================

Cursor-and-page abstraction over a reportlab canvas. Pages are US Letter
(612 x 792 points) with the origin at the bottom-left; the cursor starts
each page at y=750 and moves down as lines are drawn.

Version: 0.1.0
"""

import io
from dataclasses import dataclass, field

from reportlab.pdfgen import canvas as rl_canvas


PAGE_SIZE: tuple[float, float] = (612, 792)
TOP_Y: float = 750

RGB = tuple[float, float, float]
BLACK: RGB = (0, 0, 0)


@dataclass
class DrawnLine:
    """A line of text placed on a page."""

    page: int
    x: float
    y: float
    text: str
    size: float
    font: str
    color: RGB


def wrap_text(text: str | None, max_length: int = 60) -> list[str]:
    """
    Greedy word wrap.

    A word joins the current line while `len(current + word) <= max_length`;
    words are never broken. Empty text yields a single empty line.
    """
    if not text:
        return [""]

    lines: list[str] = []
    current = ""
    for word in text.split(" "):
        if len(current + word) <= max_length:
            current += (" " if current else "") + word
        else:
            if current:
                lines.append(current)
            current = word

    if current:
        lines.append(current)
    return lines or [""]


@dataclass
class Canvas:
    """
    Owns the current page and the vertical cursor.

    Usage:
        c = Canvas()
        c.ensure_space(100)
        c.draw("GOVERN Framework", x=50, size=14, bold=True)
        c.advance(25)
        pdf_bytes = c.save()
    """

    top: float = TOP_Y
    page_size: tuple[float, float] = PAGE_SIZE
    regular_font: str = "Helvetica"
    bold_font: str = "Helvetica-Bold"
    y: float = field(init=False)
    page: int = field(init=False, default=1)
    lines: list[DrawnLine] = field(init=False, default_factory=list)

    def __post_init__(self) -> None:
        self._buffer = io.BytesIO()
        self._canvas = rl_canvas.Canvas(self._buffer, pagesize=self.page_size)
        self.y = self.top

    @property
    def page_count(self) -> int:
        return self.page

    def new_page(self) -> None:
        self._canvas.showPage()
        self.page += 1
        self.y = self.top

    def ensure_space(self, threshold: float) -> bool:
        """
        Start a new page when the cursor has dropped below `threshold`.

        Returns:
            True if a page break happened.
        """
        if self.y < threshold:
            self.new_page()
            return True
        return False

    def advance(self, height: float) -> None:
        self.y -= height

    def draw(
        self,
        text: str,
        x: float,
        size: float,
        bold: bool = False,
        color: RGB = BLACK,
    ) -> None:
        """Draw one line of text at the cursor without moving it."""
        font = self.bold_font if bold else self.regular_font
        self._canvas.setFont(font, size)
        self._canvas.setFillColorRGB(*color)
        self._canvas.drawString(x, self.y, text)
        self.lines.append(DrawnLine(self.page, x, self.y, text, size, font, color))

    def save(self) -> bytes:
        """Finish the document and return the PDF bytes."""
        self._canvas.save()
        return self._buffer.getvalue()
