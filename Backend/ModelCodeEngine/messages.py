# Backend/ModelCodeEngine/messages.py

"""
Default English message table for the configuration engine.

Every function in the engine that renders text takes a ``messages`` callable
with the signature ``(key, params=None) -> str``. Hosts that need another
language pass their own lookup; the engine never builds user-facing text
itself.
"""

from typing import Any, Callable, Dict, Mapping, Optional


MessageLookup = Callable[..., str]


DEFAULT_MESSAGES: Dict[str, str] = {
    # Validation reasons
    "validation_notInCatalog": "Option {code} is not available for this model.",
    "validation_selectHousing": "Select a housing type first.",
    "validation_requiresM20": "Requires an M20 x 1.5 housing.",
    "validation_requiresNPT": "Requires a 1/2 - 14 NPT housing.",
    "validation_notForExplosionProof": "Not allowed with explosion-proof certification {type}.",
    "validation_noManifoldWithWeldNeck": "A manifold cannot be combined with a weld neck connector.",
    "validation_noWeldNeckWithManifold": "A weld neck connector cannot be combined with a manifold.",
    "validation_only2ValveManifold": "Only 2-valve manifolds are available for this model.",
    "validation_only35ValveManifold": "Only 3-valve or 5-valve manifolds are available for this model.",
    "validation_selectProcessConnection": "Select a process connection first.",
    "validation_requiresMaleWeldNeck": "A female process connection requires a male weld neck connector.",
    "validation_requiresFemaleWeldNeck": "A male process connection requires a female weld neck connector.",
    "validation_incompatibleProcessConnection": "Not compatible with the selected process connection.",
    "validation_noWeldNeckApplicable": "Weld neck connectors are not applicable to this model.",
    # Decode
    "decode_modelNotRecognized": "Model not recognized in code '{code}'.",
    "decode_manifoldNotRecognized": "Not a valve manifold code: '{code}'.",
    # Calibrated range
    "range_notSelected": "Select a pressure range first.",
    "range_notNumber": "Range values must be numbers.",
    "range_lowNotBelowHigh": "Low value must be less than high value.",
    "range_outOfBounds": "Range must be within {min} to {max} {unit}.",
    "range_spanTooSmall": "Calibrated span must be at least {min_span} {unit}.",
    "range_ratioTooHigh": "Turndown ratio {ratio} exceeds the maximum of {max_ratio}:1.",
    # Encoded lines
    "line3_selectRange": "Select pressure range to calibrate",
    # Performance table
    "spec_accuracy": "Accuracy",
    "spec_notApplicable": "Not applicable at this ratio",
    "spec_longTermStability": "Long Term Stability",
    "spec_years": "years",
    "spec_temperatureEffect": "Temperature Effect",
    "spec_tempEffect_note": "N = per 28 °C",
    "spec_tempEffect_note_doubled": "N = per 28 °C, doubled for this range",
    "spec_vibrationEffect": "Vibration Effect",
    "spec_powerSupplyEffect": "Power Supply Effect",
    "spec_staticPressureEffect": "Static Pressure Effect",
    # Summary / export
    "summary_model": "Model",
    "summary_tag": "Tag Number",
    "summary_transmitterHeader": "--- Transmitter Model Number ---",
    "summary_manifoldHeader": "--- Valve Manifold Model Number ---",
    "summary_detailsHeader": "--- Configuration Details ---",
    "summary_performanceHeader": "--- Performance ---",
    "summary_line1": "Line 1",
    "summary_line2": "Line 2",
    "summary_line3Calibrated": "Line 3 (Calibrated Range)",
    "summary_line3Selected": "Line 3 (Selected Range)",
    "summary_line4": "Line 4 (Special Request)",
    "summary_customRange": "Custom Range",
    "summary_turndown": "Turndown Ratio",
}


def default_messages(key: str, params: Optional[Mapping[str, Any]] = None) -> str:
    template = DEFAULT_MESSAGES.get(key)
    if template is None:
        return key
    if not params:
        return template
    return template.format_map(dict(params))
