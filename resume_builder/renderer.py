"""Resume rendering: Jinja2 templates to HTML, PyMuPDF for PDF export."""

import io
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import fitz  # PyMuPDF
import jinja2
from markupsafe import Markup

from resume_builder.config import RenderConfig
from resume_builder.exceptions import RenderError
from resume_builder.logger import Timer, get_logger
from resume_builder.resume import ResumeData

logger = get_logger(__name__)

TEMPLATE_DIR = Path(__file__).parent / "templates"
TEMPLATES = ("modern", "classic", "minimal", "creative", "executive", "technical")


@dataclass
class RenderedDocument:
    content: bytes
    media_type: str
    file_name: str
    fallback: bool = False


class ResumeRenderer:
    """Renders resume data into one of the visual templates.

    ``export`` produces a PDF; if PDF layout fails it falls back to a
    print-ready HTML page that opens the browser's print dialog.
    """

    def __init__(self, config: Optional[RenderConfig] = None):
        self.config = config or RenderConfig()
        self.env = jinja2.Environment(
            loader=jinja2.FileSystemLoader(TEMPLATE_DIR),
            autoescape=jinja2.select_autoescape(["html"]),
            trim_blocks=True,
            lstrip_blocks=True,
        )

    @property
    def templates(self) -> tuple[str, ...]:
        return TEMPLATES

    def resolve_template(self, name: Optional[str]) -> str:
        """Map a requested template name to a known one."""
        key = (name or "").strip().lower()
        if key in TEMPLATES:
            return key
        default = self.config.default_template
        if default not in TEMPLATES:
            default = TEMPLATES[0]
        if key:
            logger.warning(
                "Unknown template requested, using default",
                extra_data={"requested": name, "template": default},
            )
        return default

    def render_html(self, resume: ResumeData) -> str:
        """Render the resume body markup for its selected template.

        Raises:
            RenderError: If the resume has no personal info or the template fails
        """
        if resume.personal_info is None:
            raise RenderError("Resume data must include personal information.")

        template_name = self.resolve_template(resume.selected_template)
        try:
            return self.env.get_template(f"{template_name}.html").render(resume=resume)
        except jinja2.TemplateError as exc:
            logger.error(
                "Template rendering failed",
                extra_data={
                    "template": template_name,
                    "error_type": type(exc).__name__,
                    "error": str(exc),
                },
                exc_info=True,
            )
            raise RenderError(
                "Unable to render resume template.", details=str(exc)
            ) from exc

    def render_css(self, resume: ResumeData) -> str:
        template_name = self.resolve_template(resume.selected_template)
        base = self.env.get_template("styles/base.css").render()
        specific = self.env.get_template(f"styles/{template_name}.css").render()
        return f"{base}\n{specific}"

    def render_print_html(self, resume: ResumeData) -> str:
        """A standalone HTML document that triggers the print dialog on load."""
        return self._print_document(
            resume, self.render_html(resume), self.render_css(resume)
        )

    def export(self, resume: ResumeData) -> RenderedDocument:
        """Render resume data to a print-ready document.

        Raises:
            RenderError: If the resume cannot be rendered at all
        """
        template_name = self.resolve_template(resume.selected_template)
        body = self.render_html(resume)
        css = self.render_css(resume)

        try:
            with Timer("pdf_export") as timer:
                content = self._layout_pdf(body, css)
        except Exception as exc:
            logger.warning(
                "PDF export failed, falling back to print view",
                extra_data={
                    "template": template_name,
                    "error_type": type(exc).__name__,
                    "error": str(exc),
                },
                exc_info=True,
            )
            return RenderedDocument(
                content=self._print_document(resume, body, css).encode("utf-8"),
                media_type="text/html; charset=utf-8",
                file_name=f"{resume.file_stem}.html",
                fallback=True,
            )

        logger.info(
            "Resume exported to PDF",
            extra_data={
                "template": template_name,
                "pdf_size_bytes": len(content),
                "export_time_ms": timer.get_elapsed_ms(),
            },
        )
        return RenderedDocument(
            content=content,
            media_type="application/pdf",
            file_name=f"{resume.file_stem}.pdf",
        )

    def _print_document(self, resume: ResumeData, body: str, css: str) -> str:
        return self.env.get_template("print.html").render(
            resume=resume, body=Markup(body), css=Markup(css)
        )

    def _layout_pdf(self, body: str, css: str) -> bytes:
        mediabox = fitz.Rect(0, 0, self.config.page_width, self.config.page_height)
        margin = self.config.margin
        where = mediabox + (margin, margin, -margin, -margin)

        buffer = io.BytesIO()
        story = fitz.Story(html=body, user_css=css)
        writer = fitz.DocumentWriter(buffer)
        more = True
        page_count = 0
        while more:
            device = writer.begin_page(mediabox)
            more, _ = story.place(where)
            story.draw(device)
            writer.end_page()
            page_count += 1
        writer.close()

        logger.debug(
            "PDF layout completed",
            extra_data={"page_count": page_count, "pdf_size_bytes": buffer.tell()},
        )
        return buffer.getvalue()
