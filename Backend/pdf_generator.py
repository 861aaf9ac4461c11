from io import BytesIO
from datetime import datetime
from typing import Optional

from reportlab.lib.pagesizes import LETTER
from reportlab.lib.units import inch
from reportlab.pdfgen import canvas

from Backend.ModelCodeEngine.messages import MessageLookup, default_messages
from Backend.summary import ConfigurationSummary, line3_label


def _draw_table_header(c: canvas.Canvas, y: float, columns, left: float, right: float) -> float:
    c.setFont("Helvetica-Bold", 9)
    for x, title in columns:
        c.drawString(x, y, title)
    y -= 10

    c.setLineWidth(0.5)
    c.line(left, y, right, y)
    y -= 8

    c.setFont("Helvetica", 9)
    return y


def generate_configuration_pdf(
    summary: ConfigurationSummary,
    messages: MessageLookup = default_messages,
    generated_at: Optional[datetime] = None,
) -> bytes:
    """
    Render a configuration summary as a one-document PDF.

    Parameters
    ----------
    summary:
        Output of build_summary(). Model code lines are taken from its
        encoded result, never rebuilt here.
    messages:
        Label lookup, defaults to English.
    generated_at:
        Timestamp printed in the header, defaults to now.

    Returns
    -------
    bytes:
        Raw PDF bytes.
    """
    buffer = BytesIO()
    c = canvas.Canvas(buffer, pagesize=LETTER)

    width, height = LETTER
    left_margin = 0.9 * inch
    right_margin = 0.9 * inch
    top_margin = height - 0.9 * inch

    y = top_margin
    encoded = summary.encoded

    # Header
    c.setFont("Helvetica-Bold", 18)
    c.drawString(left_margin, y, f"{summary.model_name} Configuration")
    y -= 24

    c.setFont("Helvetica", 10)
    stamp = (generated_at or datetime.now()).strftime("%Y-%m-%d %H:%M")
    c.drawString(left_margin, y, f"Generated: {stamp}")
    y -= 16

    if summary.tag:
        c.drawString(left_margin, y, f"{messages('summary_tag')}: {summary.tag}")
        y -= 16

    # Transmitter model number
    c.setFont("Helvetica-Bold", 11)
    c.drawString(left_margin, y, messages("summary_transmitterHeader").strip("- "))
    y -= 14

    c.setFont("Courier", 10)
    c.drawString(left_margin, y, f"{messages('summary_line1')}: {encoded.line1}")
    y -= 12
    c.drawString(left_margin, y, f"{messages('summary_line2')}: {encoded.line2}")
    y -= 12
    c.drawString(left_margin, y, f"{line3_label(summary, messages)}: {encoded.transmitter_line3}")
    y -= 12
    c.drawString(left_margin, y, f"{messages('summary_line4')}: {encoded.transmitter_line4}")
    y -= 18

    if encoded.manifold_code:
        c.setFont("Helvetica-Bold", 11)
        c.drawString(left_margin, y, messages("summary_manifoldHeader").strip("- "))
        y -= 14

        c.setFont("Courier", 10)
        c.drawString(left_margin, y, encoded.manifold_code)
        y -= 18

    # Option breakdown
    c.setFont("Helvetica-Bold", 11)
    c.drawString(left_margin, y, messages("summary_detailsHeader").strip("- "))
    y -= 16

    col_label_x = left_margin
    col_code_x = left_margin + 170
    col_desc_x = left_margin + 220
    columns = [(col_label_x, "Category"), (col_code_x, "Code"), (col_desc_x, "Description")]
    y = _draw_table_header(c, y, columns, left_margin, width - right_margin)

    for item in summary.selected_options:
        if y < 80:
            c.showPage()
            y = _draw_table_header(c, top_margin, columns, left_margin, width - right_margin)

        c.drawString(col_label_x, y, item.category)
        c.drawString(col_code_x, y, item.code)
        c.drawString(col_desc_x, y, item.description)
        y -= 12

    if summary.custom_range:
        y -= 6
        c.setFont("Helvetica", 10)
        c.drawString(
            left_margin,
            y,
            f"{messages('summary_customRange')}: {summary.custom_range['low']} to "
            f"{summary.custom_range['high']} {summary.custom_range['unit']}",
        )
        y -= 12

    # Performance table
    report = summary.performance
    if report is not None and report.specs:
        if y < 160:
            c.showPage()
            y = top_margin
        y -= 8
        c.setFont("Helvetica-Bold", 11)
        c.drawString(left_margin, y, messages("summary_performanceHeader").strip("- "))
        y -= 14

        c.setFont("Helvetica", 9)
        if report.ratio is not None:
            c.drawString(left_margin, y, f"{messages('summary_turndown')}: {report.ratio:.2f}:1")
            y -= 12
        for entry in report.specs.values():
            c.drawString(left_margin, y, entry.name)
            c.drawString(col_desc_x, y, entry.text)
            y -= 12

    # Footer
    c.setFont("Helvetica-Oblique", 8)
    c.drawString(
        left_margin,
        0.75 * inch,
        "Performance figures are percentages of full span at the stated turndown ratio.",
    )

    c.showPage()
    c.save()

    pdf_bytes = buffer.getvalue()
    buffer.close()
    return pdf_bytes
