# Backend/ModelCodeEngine/shared_segments.py

from typing import List

from .catalog import (
    CategoryId,
    Option,
    Part,
    SelectionCategory,
    ValidatorId,
    segment,
)


# Category blocks shared by every RTX model. The sequence numbers give the wire
# order of each code inside line 1 / line 2, so a model module only supplies its
# own wetted material, range, process connection, chamber bolts, weld neck,
# manifold and o-ring tables (sequences 1-5, 12, 18, 19).


# Connector families used by the electrical-connector rule.
M20_CONNECTORS = ("E1", "E2", "E3", "E4", "E5")
NPT_CONNECTORS = ("E6", "E7", "E8", "E9", "EA")
# Plastic glands and dust plugs; not allowed with flame-proof / dust / Ex ec certs.
NON_EXPLOSION_PROOF_CONNECTORS = ("E1", "E6", "E4", "E5", "E9", "EA")
EXPLOSION_PROOF_REQUIRED = ("D-", "E-", "F-")

HOUSING_NPT = "1"
HOUSING_M20 = "2"


HOUSING_AND_EXPLOSION_SEGMENTS: List[SelectionCategory] = [
    segment(
        CategoryId.COMMUNICATION,
        "Communication Protocol",
        Part.REQUIRED,
        6,
        [Option("H", "HART Protocol")],
    ),
    segment(
        CategoryId.DISPLAY,
        "Display",
        Part.REQUIRED,
        7,
        [
            Option("N", "No Display"),
            Option("Y", "LCD Display"),
        ],
    ),
    segment(
        CategoryId.HOUSING_TYPE,
        "Housing Type & Electrical Connection",
        Part.REQUIRED,
        8,
        [
            Option(HOUSING_NPT, "Aluminum / 1/2 - 14 NPT"),
            Option(HOUSING_M20, "Aluminum / M20 x 1.5"),
        ],
    ),
    segment(
        CategoryId.EXPLOSION_PROOF,
        "Explosion-Proof Certification",
        Part.REQUIRED,
        9,
        [
            Option("A-", "None"),
            Option("B-", "NEPSI: Ex ia IIC T4 Ga"),
            Option("D-", "NEPSI: Ex db IIC T6 Gb"),
            Option("E-", "NEPSI: Ex tb IIIC T85°C Db"),
            Option("F-", "NEPSI: Ex ec IIC T6 Gc"),
        ],
    ),
]


BRACKET_AND_CONNECTOR_SEGMENTS: List[SelectionCategory] = [
    segment(
        CategoryId.MOUNTING_BRACKET,
        "Mounting Bracket",
        Part.ADDITIONAL,
        10,
        [
            Option("B1", "Horizontal, Carbon Steel"),
            Option("B2", "Horizontal, 304 SS"),
            Option("B3", "Horizontal, 316 SS"),
            Option("B4", "Vertical, Carbon Steel"),
            Option("B5", "Vertical, 304 SS"),
            Option("B6", "Vertical, 316 SS"),
            Option("BN", "None"),
        ],
    ),
    segment(
        CategoryId.ELECTRICAL_CONNECTOR,
        "Electrical Connector",
        Part.ADDITIONAL,
        11,
        [
            Option("E1", "M20 x 1.5, Plastic"),
            Option("E2", "M20 x 1.5, Ex d, 304 SS"),
            Option("E3", "M20 x 1.5, Ex d, 316 SS"),
            Option("E4", "M20 x 1.5, Dust Plug, Plastic/304 SS"),
            Option("E5", "M20 x 1.5, Dust Plug, Plastic/316 SS"),
            Option("E6", "1/2 - 14 NPT, Plastic"),
            Option("E7", "1/2 - 14 NPT, Ex d, 304 SS"),
            Option("E8", "1/2 - 14 NPT, Ex d, 316 SS"),
            Option("E9", "1/2 - 14 NPT, Dust Plug, Plastic/304 SS"),
            Option("EA", "1/2 - 14 NPT, Dust Plug, Plastic/316 SS"),
        ],
        validator=ValidatorId.ELECTRICAL_CONNECTOR,
    ),
]


CERTIFICATION_AND_OUTPUT_SEGMENTS: List[SelectionCategory] = [
    segment(
        CategoryId.ADDITIONAL_CERTIFICATION,
        "Additional Certification",
        Part.ADDITIONAL,
        13,
        [Option("0", "None")],
    ),
    segment(
        CategoryId.LIGHTNING_PROTECTION,
        "Lightning Protection",
        Part.ADDITIONAL,
        14,
        [
            Option("A", "None"),
            Option("B", "Lightning surge protection"),
        ],
    ),
    segment(
        CategoryId.ALARM_CURRENT,
        "Alarm Current",
        Part.ADDITIONAL,
        15,
        [
            Option("C", "3.6 mA"),
            Option("D", "22.8 mA"),
        ],
    ),
    segment(
        CategoryId.ACCEPTANCE_DATA,
        "Acceptance Data",
        Part.ADDITIONAL,
        16,
        [
            Option("E", "None"),
            Option("F1", "Full temperature performance test report"),
        ],
    ),
    segment(
        CategoryId.DISPLAY_UNIT,
        "Display Unit",
        Part.ADDITIONAL,
        17,
        [
            Option("X1", "%"),
            Option("X2", "mA"),
            Option("X3", "Pa"),
            Option("X4", "kPa"),
            Option("X5", "MPa"),
            Option("X6", "gf/cm²"),
            Option("X7", "kgf/cm²"),
            Option("X8", "mmH₂O"),
            Option("X9", "mH₂O"),
            Option("XA", "inH₂O"),
            Option("XB", "ftH₂O"),
            Option("XC", "mbar"),
            Option("XD", "bar"),
            Option("XE", "psi"),
            Option("XF", "mmHg"),
            Option("XG", "inHg"),
            Option("XH", "Torr"),
            Option("XJ", "atm"),
        ],
    ),
]


WELD_NECK_OPTIONS: List[Option] = [
    Option("W1", "1/2-14 NPT Male, 304 SS"),
    Option("W2", "1/2-14 NPT Male, 316 SS"),
    Option("W3", "1/2-14 NPT Male, 316L SS"),
    Option("W4", "G1/2 Female, 304 SS"),
    Option("W5", "G1/2 Female, 316 SS"),
    Option("W6", "G1/2 Female, 316L SS"),
    Option("W7", "M20x1.5 Female, 304 SS"),
    Option("W8", "M20x1.5 Female, 316 SS"),
    Option("W9", "M20x1.5 Female, 316L SS"),
    Option("WA", "1/2-14 NPT Female, 304 SS"),
    Option("WB", "1/2-14 NPT Female, 316 SS"),
    Option("WC", "1/2-14 NPT Female, 316L SS"),
    Option("WN", "None"),
]

MALE_WELD_NECKS = ("W1", "W2", "W3")
FEMALE_WELD_NECKS = ("W4", "W5", "W6", "W7", "W8", "W9", "WA", "WB", "WC")

# Process-connection genders on the models that take a weld neck.
FEMALE_PROCESS_CONNECTIONS = ("1",)
MALE_PROCESS_CONNECTIONS = ("2", "3", "4")


# Manifold valve-count codes and the tag each one carries in an SS2000 code.
TWO_VALVE_MANIFOLDS = ("V1", "V2")
THREE_VALVE_MANIFOLDS = ("V3", "V4")
FIVE_VALVE_MANIFOLDS = ("V5", "V6")

MANIFOLD_TYPE_TAGS = {
    "V1": "V2",
    "V2": "V2",
    "V3": "V3",
    "V4": "V3",
    "V5": "V5",
    "V6": "V5",
}

MANIFOLD_CODE_PREFIX = "SS2000-"


MANIFOLD_SPECTRUM_SEGMENTS: List[SelectionCategory] = [
    segment(
        CategoryId.MANIFOLD_PROCESS_CONNECTION,
        "Process Connection",
        Part.MANIFOLD,
        20,
        [
            Option("P1", "1/2 - 14 NPT"),
            Option("P2", "M20 x 1.5"),
            Option("P3", "G1/2"),
        ],
    ),
    segment(
        CategoryId.MANIFOLD_MATERIAL,
        "Body & Wetted Parts Material",
        Part.MANIFOLD,
        21,
        [
            Option("M1", "304 SS"),
            Option("M2", "316 SS"),
            Option("M3", "316L SS"),
            Option("M4", "Hastelloy C276"),
            Option("M5", "Monel 400"),
        ],
    ),
    segment(
        CategoryId.MANIFOLD_TRANSMITTER_CONNECTION,
        "Transmitter Connection",
        Part.MANIFOLD,
        22,
        [
            Option("C1", "1/2 - 14 NPT Male"),
            Option("C2", "G1/2 Female"),
            Option("C3", "M20 x 1.5 Female"),
            Option("C4", "1/2 - 14 NPT Female"),
        ],
    ),
    segment(
        CategoryId.MANIFOLD_MOUNTING_BOLTS,
        "Mounting Bolts",
        Part.MANIFOLD,
        23,
        [Option("BN", "None")],
    ),
    segment(
        CategoryId.MANIFOLD_PRESSURE_RATING,
        "Pressure Rating",
        Part.MANIFOLD,
        24,
        [
            Option("R1", "16 MPa"),
            Option("R2", "32 MPa"),
            Option("R3", "42 MPa"),
        ],
    ),
    segment(
        CategoryId.MANIFOLD_SEAL_TYPE,
        "Process Head Sealing Type",
        Part.MANIFOLD,
        25,
        [
            Option("S1", "Welded connection (ø14 x 2)"),
            Option("S2", "Welded connection (ø14 x 3)"),
            Option("S3", "Welded connection (ø16 x 3)"),
            Option("S4", 'Ferrule connection (1/4")'),
            Option("S5", 'Ferrule connection (3/8")'),
            Option("S6", 'Ferrule connection (7/16")'),
            Option("S7", "Ferrule connection (ø14)"),
            Option("S8", "Ferrule connection (ø12)"),
        ],
    ),
    segment(
        CategoryId.MANIFOLD_TEMPERATURE,
        "Process Medium Temperature",
        Part.MANIFOLD,
        26,
        [
            Option("T1", "-40 ~ +230 °C"),
            Option("T2", "-40 ~ +350 °C"),
        ],
    ),
    segment(
        CategoryId.MANIFOLD_PLUG,
        "Plug Type",
        Part.MANIFOLD,
        27,
        [
            Option("D1", "With drain plug"),
            Option("DN", "Without drain plug"),
        ],
    ),
    segment(
        CategoryId.MANIFOLD_ADDITIONAL,
        "Additional Options",
        Part.MANIFOLD,
        28,
        [
            Option("A1", "None"),
            Option("A2", "Degreasing wash"),
            Option("A3", "NACE test"),
        ],
    ),
]


# --------------------------------------------------------------------------------------
# Accuracy curves shared between ranges
# --------------------------------------------------------------------------------------


def flat_then_linear(flat_until: float, slope: float, limit: float):
    """
    0.04 % up to ``flat_until``, then 0.004 + slope * r below ``limit``,
    undefined from ``limit`` on.
    """

    def accuracy(r: float):
        if r <= flat_until:
            return 0.04
        if r < limit:
            return 0.004 + slope * r
        return None

    return accuracy


def linear_until(intercept: float, slope: float, limit: float):
    """intercept + slope * r up to and including ``limit``."""

    def accuracy(r: float):
        if r <= limit:
            return intercept + slope * r
        return None

    return accuracy


def flat_until(value: float, limit: float):
    def accuracy(r: float):
        if r <= limit:
            return value
        return None

    return accuracy
