# Backend/ModelCodeEngine/rtx2300a.py

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
    flat_until,
)


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
    segment(
        CategoryId.PRESSURE_RANGE,
        "Pressure Range",
        Part.REQUIRED,
        3,
        [
            RangeOption("A2", "0 to 40 kPa", min=0, max=40, unit="kPa", min_span=10),
            RangeOption("A5", "0 to 200 kPa", min=0, max=200, unit="kPa", min_span=10),
            RangeOption("A7", "0 to 1 MPa", min=0, max=1, unit="MPa", min_span=0.01),
            RangeOption("A9", "0 to 5 MPa", min=0, max=5, unit="MPa", min_span=0.05),
        ],
    ),
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


ACCURACY: Dict[str, AccuracyInfo] = {
    "A2": AccuracyInfo(func=flat_until(0.04, 4), max_ratio=4),
    "A5": AccuracyInfo(func=flat_then_linear(10, 0.0036, 20), max_ratio=20),
    "A7": AccuracyInfo(func=flat_then_linear(10, 0.0036, 100), max_ratio=100),
    "A9": AccuracyInfo(func=flat_then_linear(10, 0.0036, 100), max_ratio=100),
}


@register_model("RTX2300A")
class RTX2300AModel(TransmitterModel):
    """
    RTX2300-A absolute pressure transmitter.

    Line 1 layout:

        RTX2300-A [wetted][fill][range][process conn][bolts][comm][display][housing][ex]

    Example:

        RTX2300-AEDA210HN1A-
    """

    NAME = "RTX2300-A"
    BASE_CODE = "RTX2300-A"
    DESCRIPTION = "Absolute Pressure Transmitter"
    MASTER_SEGMENTS = MASTER_SEGMENTS
    ACCURACY = ACCURACY
    MANIFOLD_WELD_NECK_EXCLUSIVE = True
