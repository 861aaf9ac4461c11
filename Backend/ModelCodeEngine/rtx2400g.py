# Backend/ModelCodeEngine/rtx2400g.py

from typing import Dict, List

from .catalog import (
    AccuracyInfo,
    CategoryId,
    Option,
    Part,
    RangeOption,
    SelectionCategory,
    TransmitterModel,
    ValidatorId,
    register_model,
    segment,
)
from .shared_segments import (
    BRACKET_AND_CONNECTOR_SEGMENTS,
    CERTIFICATION_AND_OUTPUT_SEGMENTS,
    HOUSING_AND_EXPLOSION_SEGMENTS,
    MANIFOLD_SPECTRUM_SEGMENTS,
    WELD_NECK_OPTIONS,
    flat_then_linear,
)


# Gauge ranges; RTX2400-K reuses the first four.
GAUGE_RANGES: List[RangeOption] = [
    RangeOption("G2", "-40 to 40 kPa", min=-40, max=40, unit="kPa", min_span=0.8),
    RangeOption("G4", "-100 to 200 kPa", min=-100, max=200, unit="kPa", min_span=1),
    RangeOption("G5", "-0.1 to 1 MPa", min=-0.1, max=1, unit="MPa", min_span=0.01),
    RangeOption("G6", "-0.1 to 5 MPa", min=-0.1, max=5, unit="MPa", min_span=0.05),
    RangeOption("G7", "-0.1 to 20 MPa", min=-0.1, max=20, unit="MPa", min_span=0.2),
    RangeOption("G8", "-0.1 to 40 MPa", min=-0.1, max=40, unit="MPa", min_span=0.4),
    RangeOption("G9", "-0.1 to 70 MPa", min=-0.1, max=70, unit="MPa", min_span=0.7),
]

GAUGE_ACCURACY: Dict[str, AccuracyInfo] = {
    "G2": AccuracyInfo(func=flat_then_linear(5, 0.0072, 50), max_ratio=50),
    "G4": AccuracyInfo(func=flat_then_linear(10, 0.0036, 100), max_ratio=100),
    "G5": AccuracyInfo(func=flat_then_linear(10, 0.0036, 100), max_ratio=100),
    "G6": AccuracyInfo(func=flat_then_linear(10, 0.0036, 100), max_ratio=100),
    "G7": AccuracyInfo(func=flat_then_linear(10, 0.0036, 100), max_ratio=100),
    "G8": AccuracyInfo(func=flat_then_linear(10, 0.0036, 100), max_ratio=100),
    "G9": AccuracyInfo(func=flat_then_linear(10, 0.0036, 100), max_ratio=100),
}


MASTER_SEGMENTS: List[SelectionCategory] = [
    segment(
        CategoryId.WETTED_MATERIAL,
        "Wetted Parts Material",
        Part.REQUIRED,
        1,
        [
            Option("E", "316L SS / 316L SS"),
            Option("F", "Hastelloy C-276 / 316L SS"),
            Option("G", "Hastelloy C-276 / Hastelloy C-276"),
        ],
    ),
    segment(
        CategoryId.DIAPHRAGM_FILL_FLUID,
        "Diaphragm Fill Fluid",
        Part.REQUIRED,
        2,
        [Option("D", "Silicone Oil")],
    ),
    segment(CategoryId.PRESSURE_RANGE, "Pressure Range", Part.REQUIRED, 3, GAUGE_RANGES),
    segment(
        CategoryId.PROCESS_CONNECTION,
        "Process Connection",
        Part.REQUIRED,
        4,
        [
            Option("1", "1/2 - 14 NPT Female"),
            Option("2", "1/2 - 14 NPT Male"),
            Option("3", "M20 x 1.5 Male"),
            Option("4", "G1/2 B Male"),
        ],
    ),
    segment(
        CategoryId.CHAMBER_BOLTS,
        "Chamber Bolts",
        Part.REQUIRED,
        5,
        [Option("0", "None")],
    ),
    *HOUSING_AND_EXPLOSION_SEGMENTS,
    *BRACKET_AND_CONNECTOR_SEGMENTS,
    segment(
        CategoryId.WELD_NECK,
        "Weld Neck Connector",
        Part.ADDITIONAL,
        12,
        WELD_NECK_OPTIONS,
        validator=ValidatorId.WELD_NECK_GENDER,
    ),
    *CERTIFICATION_AND_OUTPUT_SEGMENTS,
    segment(
        CategoryId.MANIFOLD,
        "Valve Manifold Assembly",
        Part.ADDITIONAL,
        18,
        [
            Option("V1", "2-valve manifold, not assembled"),
            Option("V2", "2-valve manifold, assembled"),
            Option("VN", "No manifold"),
        ],
        validator=ValidatorId.MANIFOLD_TWO_VALVE,
    ),
    segment(
        CategoryId.O_RING_MATERIAL,
        "O-ring Material",
        Part.ADDITIONAL,
        19,
        [Option("X", "None")],
    ),
    *MANIFOLD_SPECTRUM_SEGMENTS,
]


@register_model("RTX2400G")
class RTX2400GModel(TransmitterModel):
    """RTX2400-G gauge pressure transmitter."""

    NAME = "RTX2400-G"
    BASE_CODE = "RTX2400-G"
    DESCRIPTION = "Gauge Pressure Transmitter"
    MASTER_SEGMENTS = MASTER_SEGMENTS
    ACCURACY = GAUGE_ACCURACY
    MANIFOLD_WELD_NECK_EXCLUSIVE = True
