# Backend/ModelCodeEngine/rtx2500d.py

from typing import Dict, List, Tuple

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
from .rtx2400k import (
    DP_CHAMBER_BOLTS,
    DP_O_RINGS,
    DP_PROCESS_CONNECTIONS,
    DP_WETTED_MATERIALS,
)
from .shared_segments import (
    BRACKET_AND_CONNECTOR_SEGMENTS,
    CERTIFICATION_AND_OUTPUT_SEGMENTS,
    HOUSING_AND_EXPLOSION_SEGMENTS,
    MANIFOLD_SPECTRUM_SEGMENTS,
    flat_then_linear,
    linear_until,
)


MASTER_SEGMENTS: List[SelectionCategory] = [
    segment(
        CategoryId.WETTED_MATERIAL,
        "Wetted Parts Material",
        Part.REQUIRED,
        1,
        DP_WETTED_MATERIALS,
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
            RangeOption(
                "B0",
                "-2 to 2 kPa (No center diaphragm)",
                min=-2,
                max=2,
                unit="kPa",
                min_span=0.1,
            ),
            RangeOption("D0", "-2 to 2 kPa", min=-2, max=2, unit="kPa", min_span=0.1),
            RangeOption("D1", "-10 to 10 kPa", min=-10, max=10, unit="kPa", min_span=0.5),
            RangeOption("D3", "-100 to 100 kPa", min=-100, max=100, unit="kPa", min_span=1),
            RangeOption("D5", "-0.5 to 1 MPa", min=-0.5, max=1, unit="MPa", min_span=0.01),
            RangeOption("D6", "-0.5 to 5 MPa", min=-0.5, max=5, unit="MPa", min_span=0.05),
            RangeOption("D7", "-0.5 to 14 MPa", min=-0.5, max=14, unit="MPa", min_span=0.14),
        ],
    ),
    segment(
        CategoryId.PROCESS_CONNECTION,
        "Process Connection",
        Part.REQUIRED,
        4,
        DP_PROCESS_CONNECTIONS,
    ),
    segment(
        CategoryId.CHAMBER_BOLTS,
        "Chamber Bolts",
        Part.REQUIRED,
        5,
        DP_CHAMBER_BOLTS,
    ),
    *HOUSING_AND_EXPLOSION_SEGMENTS,
    *BRACKET_AND_CONNECTOR_SEGMENTS,
    segment(
        CategoryId.WELD_NECK,
        "Weld Neck Connector",
        Part.ADDITIONAL,
        12,
        [Option("WN", "None")],
        validator=ValidatorId.WELD_NECK_NOT_APPLICABLE,
    ),
    *CERTIFICATION_AND_OUTPUT_SEGMENTS,
    segment(
        CategoryId.MANIFOLD,
        "Valve Manifold Assembly",
        Part.ADDITIONAL,
        18,
        [
            Option("V3", "3-valve manifold, not assembled"),
            Option("V4", "3-valve manifold, assembled"),
            Option("V5", "5-valve manifold, not assembled"),
            Option("V6", "5-valve manifold, assembled"),
            Option("VN", "No manifold"),
        ],
        validator=ValidatorId.MANIFOLD_THREE_FIVE_VALVE,
    ),
    segment(
        CategoryId.O_RING_MATERIAL,
        "O-ring Material",
        Part.ADDITIONAL,
        19,
        DP_O_RINGS,
    ),
    *MANIFOLD_SPECTRUM_SEGMENTS,
]


ACCURACY: Dict[str, AccuracyInfo] = {
    "B0": AccuracyInfo(func=linear_until(0.05, 0.015, 20), max_ratio=20),
    "D0": AccuracyInfo(func=linear_until(0.05, 0.015, 20), max_ratio=20),
    "D1": AccuracyInfo(func=linear_until(0.013, 0.027, 20), max_ratio=20),
    "D3": AccuracyInfo(func=flat_then_linear(10, 0.0036, 100), max_ratio=100),
    "D5": AccuracyInfo(func=flat_then_linear(10, 0.0036, 100), max_ratio=100),
    "D6": AccuracyInfo(func=flat_then_linear(10, 0.0036, 100), max_ratio=100),
    "D7": AccuracyInfo(func=flat_then_linear(10, 0.0036, 100), max_ratio=100),
}


# Static-pressure effect per range: (percent of span per unit ratio, reference pressure).
STATIC_PRESSURE_EFFECTS: Dict[str, Tuple[float, str]] = {
    "B0": (0.2, "200 kPa"),
    "D0": (0.2, "200 kPa"),
    "D1": (0.1, "3.2 MPa"),
    "D3": (0.04, "16 MPa"),
    "D5": (0.04, "16 MPa"),
    "D6": (0.04, "16 MPa"),
    "D7": (0.04, "16 MPa"),
}


@register_model("RTX2500D")
class RTX2500DModel(TransmitterModel):
    """
    RTX2500-D differential pressure transmitter.

    The only family with a static-pressure effect in its performance table.
    """

    NAME = "RTX2500-D"
    BASE_CODE = "RTX2500-D"
    DESCRIPTION = "Differential Pressure Transmitter"
    MASTER_SEGMENTS = MASTER_SEGMENTS
    ACCURACY = ACCURACY
    STATIC_PRESSURE_EFFECTS = STATIC_PRESSURE_EFFECTS
