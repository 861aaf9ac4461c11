# Backend/ModelCodeEngine/rtx2400k.py

from typing import Dict, List

from .catalog import (
    AccuracyInfo,
    CategoryId,
    Option,
    Part,
    SelectionCategory,
    TransmitterModel,
    ValidatorId,
    register_model,
    segment,
)
from .rtx2400g import GAUGE_ACCURACY, GAUGE_RANGES
from .shared_segments import (
    BRACKET_AND_CONNECTOR_SEGMENTS,
    CERTIFICATION_AND_OUTPUT_SEGMENTS,
    HOUSING_AND_EXPLOSION_SEGMENTS,
    MANIFOLD_SPECTRUM_SEGMENTS,
)


# Flange-style process heads shared with RTX2500-D.
DP_PROCESS_CONNECTIONS: List[Option] = [
    Option("5", "1/4 - 18 NPT Female, Rear Vent"),
    Option("6", "1/4 - 18 NPT Female, Side Vent"),
]

DP_CHAMBER_BOLTS: List[Option] = [
    Option("1", "SCM435 Alloy Steel"),
    Option("2", "304 SS"),
    Option("3", "316 SS"),
]

DP_O_RINGS: List[Option] = [
    Option("Z", "Nitrile Rubber"),
    Option("Y", "Fluororubber"),
]

DP_WETTED_MATERIALS: List[Option] = [
    Option("A", "316L SS"),
    Option("B", "Hastelloy C-276"),
]


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
        GAUGE_RANGES[:4],
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
        DP_O_RINGS,
    ),
    *MANIFOLD_SPECTRUM_SEGMENTS,
]


ACCURACY: Dict[str, AccuracyInfo] = {
    code: GAUGE_ACCURACY[code] for code in ("G2", "G4", "G5", "G6")
}


@register_model("RTX2400K")
class RTX2400KModel(TransmitterModel):
    """RTX2400-K differential-pressure gauge transmitter. Same accuracy as the G."""

    NAME = "RTX2400-K"
    BASE_CODE = "RTX2400-K"
    DESCRIPTION = "Differential Pressure Gauge Transmitter"
    MASTER_SEGMENTS = MASTER_SEGMENTS
    ACCURACY = ACCURACY
