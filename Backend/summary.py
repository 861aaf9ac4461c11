# Backend/summary.py

"""
Configuration summary shared by every export.

The on-screen summary, the clipboard text block, the JSON export and the PDF
all come from one ConfigurationSummary, which is itself built from encode().
"""

from dataclasses import dataclass, field
from datetime import date
from typing import Any, Dict, List, Mapping, Optional

from Backend.ModelCodeEngine.catalog import TransmitterModel
from Backend.ModelCodeEngine.codec import EncodedCode, encode
from Backend.ModelCodeEngine.messages import MessageLookup, default_messages
from Backend.ModelCodeEngine.performance import (
    CalibratedRange,
    PerformanceReport,
    evaluate,
)


NOT_AVAILABLE = "N/A"


@dataclass
class SelectedOption:
    category_id: str
    category: str
    code: str
    description: str

    def to_dict(self) -> Dict[str, str]:
        return {
            "category_id": self.category_id,
            "category": self.category,
            "code": self.code,
            "description": self.description,
        }


@dataclass
class ConfigurationSummary:
    model_id: str
    model_name: str
    tag: str
    encoded: EncodedCode
    selected_options: List[SelectedOption] = field(default_factory=list)
    custom_range: Optional[Dict[str, str]] = None
    performance: Optional[PerformanceReport] = None


def selected_options(model: TransmitterModel, selections: Mapping[str, str]) -> List[SelectedOption]:
    """Picked options in catalog order; codes not in the catalog are left out."""
    items: List[SelectedOption] = []
    for category in model.configuration:
        option = category.find_option(selections.get(category.id))
        if option is None:
            continue
        items.append(
            SelectedOption(
                category_id=category.id,
                category=category.title,
                code=option.code,
                description=option.description,
            )
        )
    return items


def build_summary(
    model: TransmitterModel,
    selections: Mapping[str, str],
    calibrated_range: Optional[CalibratedRange] = None,
    tag: str = "",
    special_request: str = "",
    messages: MessageLookup = default_messages,
) -> ConfigurationSummary:
    encoded = encode(model, selections, calibrated_range, special_request, messages)

    custom_range = None
    range_option = model.selected_range(selections)
    if encoded.line3_calibrated and range_option is not None and calibrated_range is not None:
        custom_range = {
            "low": calibrated_range.low.strip(),
            "high": calibrated_range.high.strip(),
            "unit": range_option.unit,
        }

    return ConfigurationSummary(
        model_id=model.id,
        model_name=model.NAME,
        tag=(tag or "").strip(),
        encoded=encoded,
        selected_options=selected_options(model, selections),
        custom_range=custom_range,
        performance=evaluate(model, selections, calibrated_range, messages),
    )


def line3_label(summary: ConfigurationSummary, messages: MessageLookup = default_messages) -> str:
    if summary.encoded.line3_calibrated:
        return messages("summary_line3Calibrated")
    return messages("summary_line3Selected")


def to_text_block(
    summary: ConfigurationSummary, messages: MessageLookup = default_messages
) -> str:
    """Flattened text for the clipboard."""
    encoded = summary.encoded
    lines: List[str] = [f"{messages('summary_model')}: {summary.model_name}"]
    if summary.tag:
        lines.append(f"{messages('summary_tag')}: {summary.tag}")

    lines.append("")
    lines.append(messages("summary_transmitterHeader"))
    lines.append(f"{messages('summary_line1')}: {encoded.line1}")
    lines.append(f"{messages('summary_line2')}: {encoded.line2}")
    lines.append(f"{line3_label(summary, messages)}: {encoded.transmitter_line3}")
    lines.append(f"{messages('summary_line4')}: {encoded.transmitter_line4}")

    if encoded.manifold_code:
        lines.append("")
        lines.append(messages("summary_manifoldHeader"))
        lines.append(encoded.manifold_code)

    lines.append("")
    lines.append(messages("summary_detailsHeader"))
    for item in summary.selected_options:
        lines.append(f"{item.category}: {item.description} ({item.code})")

    if summary.custom_range:
        lines.append(
            f"{messages('summary_customRange')}: {summary.custom_range['low']} to "
            f"{summary.custom_range['high']} {summary.custom_range['unit']}"
        )

    report = summary.performance
    if report is not None and report.specs:
        lines.append("")
        lines.append(messages("summary_performanceHeader"))
        if report.ratio is not None:
            lines.append(f"{messages('summary_turndown')}: {report.ratio:.2f}:1")
        for entry in report.specs.values():
            lines.append(f"{entry.name}: {entry.text}")

    return "\n".join(lines)


def to_export_dict(
    summary: ConfigurationSummary, messages: MessageLookup = default_messages
) -> Dict[str, Any]:
    """Payload of the JSON export file."""
    encoded = summary.encoded
    report = summary.performance
    return {
        "product_model": summary.model_name,
        "tag_number": summary.tag or NOT_AVAILABLE,
        "model_number": {
            "transmitter": {
                "line1": encoded.line1,
                "line2": encoded.line2,
                "line3": f"{line3_label(summary, messages)}: {encoded.transmitter_line3}",
                "line4": encoded.transmitter_line4,
            },
            "manifold": encoded.manifold_code or NOT_AVAILABLE,
        },
        "custom_calibration": summary.custom_range or NOT_AVAILABLE,
        "selected_options": [item.to_dict() for item in summary.selected_options],
        "performance": report.to_dict() if report is not None else NOT_AVAILABLE,
    }


def export_filename(summary: ConfigurationSummary, extension: str = "json", on: Optional[date] = None) -> str:
    day = (on or date.today()).isoformat()
    name = "_".join(summary.model_name.split())
    return f"{name}_Configuration_{day}.{extension}"
