from __future__ import annotations

"""WeasyPrint-based PDF rendering for the assessment report.

This module only owns the Jinja2 environment and the WeasyPrint call.
Deciding what goes into the report is :mod:`cmmc_tracker.reports.generator`'s job.
"""

import logging
from pathlib import Path
from typing import Any

import jinja2

logger = logging.getLogger(__name__)


class PDFRenderer:
    """Render Jinja2 HTML templates and convert them to PDF via WeasyPrint.

    Parameters:
        templates_dir: Directory holding ``base.html`` and the section templates.
        styles_dir: Directory holding ``report.css``.
    """

    # Rendered in order and stitched into base.html.
    _SECTION_TEMPLATES: tuple[str, ...] = (
        "summary.html",
        "sprs.html",
        "domains.html",
        "controls.html",
    )

    def __init__(self, templates_dir: Path, styles_dir: Path) -> None:
        self._templates_dir = templates_dir
        self._styles_dir = styles_dir
        self._env = jinja2.Environment(
            loader=jinja2.FileSystemLoader(str(templates_dir)),
            autoescape=jinja2.select_autoescape(["html"]),
            trim_blocks=True,
            lstrip_blocks=True,
        )
        self._css_content: str = self._load_css()

    def _load_css(self) -> str:
        css_path = self._styles_dir / "report.css"
        if css_path.exists():
            return css_path.read_text(encoding="utf-8")
        logger.warning("report.css not found at %s; PDF will be unstyled.", css_path)
        return ""

    def render_html(self, template_name: str, context: dict[str, Any]) -> str:
        """Render a single template to an HTML string.

        Raises:
            jinja2.TemplateNotFound: When *template_name* does not exist.
        """
        template = self._env.get_template(template_name)
        return template.render(**context)

    def render_report_html(self, report_data: dict[str, Any]) -> str:
        """Render every section and wrap the result in ``base.html``.

        Parameters:
            report_data: Shared context for all section templates.

        Returns:
            A complete HTML document ready for :meth:`generate_pdf`.
        """
        sections: list[str] = []
        for template_name in self._SECTION_TEMPLATES:
            try:
                sections.append(self.render_html(template_name, report_data))
            except jinja2.TemplateNotFound:
                logger.warning("Section template '%s' not found; skipping.", template_name)

        base = self._env.get_template("base.html")
        return base.render(
            **report_data,
            css_content=self._css_content,
            sections=sections,
        )

    def generate_pdf(self, html: str, output_path: Path) -> Path:
        """Convert *html* to a PDF file at *output_path* and return its resolved path."""
        output_path = output_path.resolve()
        output_path.parent.mkdir(parents=True, exist_ok=True)

        logger.info("Generating PDF report at %s", output_path)
        base_url = self._styles_dir.resolve().as_uri() + "/"

        import weasyprint  # lazy import: requires pango/cairo system libs

        weasyprint.HTML(string=html, base_url=base_url).write_pdf(str(output_path))

        logger.info("PDF written (%d bytes)", output_path.stat().st_size)
        return output_path
