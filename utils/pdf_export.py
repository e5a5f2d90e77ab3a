"""
HTML-to-PDF export for course materials.

The converter (xhtml2pdf) is imported when a PDF is first requested so that
the HTML pages keep working on hosts where it is not installed; callers get
a PdfLibraryUnavailable error and show the troubleshooting page instead.
"""
import logging
import tempfile

logger = logging.getLogger(__name__)

INSTALL_COMMAND = "pip install xhtml2pdf"


class PdfExportError(Exception):
    """The PDF could not be produced."""


class PdfLibraryUnavailable(PdfExportError):
    """The HTML-to-PDF library is not installed."""


PAGE_SIZES_MM = {
    "A4": (210, 297),
    "A5": (148, 210),
    "LETTER": (215.9, 279.4),
    "LEGAL": (215.9, 355.6),
}


def build_pdf_options(config):
    """Collect the converter settings (page, margins, font, temp dir) from app config."""
    margins = dict(config.get("PDF_MARGINS_MM") or {})
    page_size = str(config.get("PDF_PAGE_SIZE", "A4")).upper()
    if page_size not in PAGE_SIZES_MM:
        raise PdfExportError(f"Unsupported PDF page size: {page_size}")
    width_mm, height_mm = PAGE_SIZES_MM[page_size]

    return {
        "page_size": page_size,
        "width_mm": width_mm,
        "height_mm": height_mm,
        "margins": {
            "left": margins.get("left", 15),
            "right": margins.get("right", 15),
            "top": margins.get("top", 20),
            "bottom": margins.get("bottom", 20),
            "header": margins.get("header", 10),
            "footer": margins.get("footer", 10),
        },
        "font_family": config.get("PDF_FONT_FAMILY", "Helvetica"),
        "font_size": int(config.get("PDF_FONT_SIZE", 12)),
        "temp_dir": config.get("PDF_TEMP_DIR") or tempfile.gettempdir(),
    }


def _load_converter():
    try:
        from xhtml2pdf import pisa
    except ImportError as e:
        logger.warning(f"xhtml2pdf is not installed: {e}")
        raise PdfLibraryUnavailable(
            f"PDF library (xhtml2pdf) not found or not properly installed. Run: {INSTALL_COMMAND}"
        ) from e
    return pisa


def html_to_pdf(html, options):
    """Convert a complete HTML document to PDF bytes.

    The output is written to a temporary file in ``options['temp_dir']`` and
    read back once the converter is done.
    """
    pisa = _load_converter()

    with tempfile.TemporaryFile(dir=options["temp_dir"]) as out:
        try:
            status = pisa.CreatePDF(html, dest=out, encoding="utf-8")
        except Exception as e:
            logger.exception("PDF conversion raised")
            raise PdfExportError(f"PDF conversion failed: {e}") from e

        if status.err:
            logger.error(f"PDF conversion reported {status.err} error(s)")
            raise PdfExportError(f"PDF conversion reported {status.err} error(s)")

        out.seek(0)
        data = out.read()

    if not data:
        raise PdfExportError("PDF conversion produced an empty document")
    return data
