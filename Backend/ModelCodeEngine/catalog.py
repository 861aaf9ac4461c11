# Backend/ModelCodeEngine/catalog.py

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, List, Mapping, Optional, Tuple, Type


logger = logging.getLogger(__name__)


# Selections are a plain mapping of category id -> option code.
Selections = Dict[str, str]


# --------------------------------------------------------------------------------------
# Error type for catalog misuse
# --------------------------------------------------------------------------------------


@dataclass
class ConfigurationError(Exception):
    """
    Error raised when the host asks the catalog for something that does not exist.

    Fields are structured so the API can return clean JSON describing:
    - which model / category was involved
    - what id or code was invalid
    - which ids or codes are valid
    """

    message: str
    model: Optional[str] = None
    category: Optional[str] = None
    invalid_code: Optional[str] = None
    valid_codes: Optional[List[str]] = None

    def __post_init__(self) -> None:
        super().__init__(self.message)
        if self.valid_codes is None:
            self.valid_codes = []

    def to_dict(self) -> Dict[str, Any]:
        return {
            "message": self.message,
            "model": self.model,
            "category": self.category,
            "invalid_code": self.invalid_code,
            "valid_codes": self.valid_codes,
        }


# --------------------------------------------------------------------------------------
# Category ids, parts and validator tags
# --------------------------------------------------------------------------------------


class CategoryId:
    """Every category id used as a selection key."""

    WETTED_MATERIAL = "wettedMaterial"
    DIAPHRAGM_FILL_FLUID = "diaphragmFillFluid"
    PRESSURE_RANGE = "pressureRange"
    PROCESS_CONNECTION = "processConnection"
    CHAMBER_BOLTS = "chamberBolts"
    COMMUNICATION = "communication"
    DISPLAY = "display"
    HOUSING_TYPE = "housingType"
    EXPLOSION_PROOF = "explosionProof"

    MOUNTING_BRACKET = "mountingBracket"
    ELECTRICAL_CONNECTOR = "electricalConnector"
    WELD_NECK = "weldNeck"
    ADDITIONAL_CERTIFICATION = "additionalCertification"
    LIGHTNING_PROTECTION = "lightningProtection"
    ALARM_CURRENT = "alarmCurrent"
    ACCEPTANCE_DATA = "acceptanceData"
    DISPLAY_UNIT = "displayUnit"
    MANIFOLD = "manifold"
    O_RING_MATERIAL = "oRingMaterial"

    MANIFOLD_PROCESS_CONNECTION = "manifold_processConnection"
    MANIFOLD_MATERIAL = "manifold_material"
    MANIFOLD_TRANSMITTER_CONNECTION = "manifold_transmitterConnection"
    MANIFOLD_MOUNTING_BOLTS = "manifold_mountingBolts"
    MANIFOLD_PRESSURE_RATING = "manifold_pressureRating"
    MANIFOLD_SEAL_TYPE = "manifold_sealType"
    MANIFOLD_TEMPERATURE = "manifold_temperature"
    MANIFOLD_PLUG = "manifold_plug"
    MANIFOLD_ADDITIONAL = "manifold_additional"


# Order of the manifold-spectrum codes inside an SS2000 manifold model number.
# Encode and decode_manifold both walk this tuple.
MANIFOLD_SPECTRUM_ORDER: Tuple[str, ...] = (
    CategoryId.MANIFOLD_PROCESS_CONNECTION,
    CategoryId.MANIFOLD_MATERIAL,
    CategoryId.MANIFOLD_TRANSMITTER_CONNECTION,
    CategoryId.MANIFOLD_MOUNTING_BOLTS,
    CategoryId.MANIFOLD_PRESSURE_RATING,
    CategoryId.MANIFOLD_SEAL_TYPE,
    CategoryId.MANIFOLD_TEMPERATURE,
    CategoryId.MANIFOLD_PLUG,
    CategoryId.MANIFOLD_ADDITIONAL,
)

NO_MANIFOLD = "VN"
NO_WELD_NECK = "WN"


class Part(str, Enum):
    REQUIRED = "required"
    ADDITIONAL = "additional"
    MANIFOLD = "manifold"


class ValidatorId(str, Enum):
    """Tag naming the compatibility rule a category is checked with."""

    ELECTRICAL_CONNECTOR = "electrical_connector"
    MANIFOLD_TWO_VALVE = "manifold_two_valve"
    MANIFOLD_THREE_FIVE_VALVE = "manifold_three_five_valve"
    WELD_NECK_GENDER = "weld_neck_gender"
    WELD_NECK_NOT_APPLICABLE = "weld_neck_not_applicable"


# --------------------------------------------------------------------------------------
# Catalog data types
# --------------------------------------------------------------------------------------


@dataclass(frozen=True)
class Option:
    code: str
    description: str
    details: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "code": self.code,
            "description": self.description,
            "details": self.details,
        }


@dataclass(frozen=True)
class RangeOption(Option):
    """
    Pressure-range option. ``min``/``max`` are the rated span, ``min_span`` the
    smallest span the instrument may be calibrated to.
    """

    min: float = 0.0
    max: float = 0.0
    unit: str = ""
    min_span: float = 0.0

    @property
    def rated_span(self) -> float:
        return self.max - self.min

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data.update(
            {
                "min": self.min,
                "max": self.max,
                "unit": self.unit,
                "min_span": self.min_span,
            }
        )
        return data


@dataclass(frozen=True)
class SelectionCategory:
    id: str
    title: str
    part: Part
    sequence: int
    options: Tuple[Option, ...]
    validator: Optional[ValidatorId] = None

    def find_option(self, code: Optional[str]) -> Optional[Option]:
        if not code:
            return None
        for option in self.options:
            if option.code == code:
                return option
        return None

    @property
    def codes(self) -> List[str]:
        return [option.code for option in self.options]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "part": self.part.value,
            "sequence": self.sequence,
            "validator": self.validator.value if self.validator else None,
            "options": [option.to_dict() for option in self.options],
        }


def segment(
    category_id: str,
    title: str,
    part: Part,
    sequence: int,
    options: List[Option],
    validator: Optional[ValidatorId] = None,
) -> SelectionCategory:
    """Small constructor used by the model modules to keep their tables readable."""
    return SelectionCategory(
        id=category_id,
        title=title,
        part=part,
        sequence=sequence,
        options=tuple(options),
        validator=validator,
    )


@dataclass(frozen=True)
class AccuracyInfo:
    """
    Piecewise accuracy (percent of span) as a function of turndown ratio.

    ``func`` returns ``None`` where the curve is not defined; ``max_ratio`` is
    the hard upper bound on turndown for the range.
    """

    func: Callable[[float], Optional[float]]
    max_ratio: float


# --------------------------------------------------------------------------------------
# Model registry and helpers
# --------------------------------------------------------------------------------------


MODEL_REGISTRY: Dict[str, Type["TransmitterModel"]] = {}


def register_model(model_id: str):
    """
    Class decorator to register a TransmitterModel definition.

    Usage:

        @register_model("RTX2300A")
        class RTX2300AModel(TransmitterModel):
            ...
    """

    def decorator(cls: Type["TransmitterModel"]) -> Type["TransmitterModel"]:
        cls.MODEL = model_id
        MODEL_REGISTRY[model_id] = cls
        return cls

    return decorator


def get_model(model_id: str) -> "TransmitterModel":
    """
    Look up a model by its id and return an instance.

    Raises ConfigurationError if the model is unknown.
    """
    try:
        model_cls = MODEL_REGISTRY[model_id]
    except KeyError:
        available = list(MODEL_REGISTRY.keys())
        logger.warning("Unknown model requested: %s", model_id)
        raise ConfigurationError(
            message=f"Unknown model '{model_id}'. Available: {available}",
            model=model_id,
            invalid_code=model_id,
            valid_codes=available,
        )

    return model_cls()


def list_models() -> List["TransmitterModel"]:
    return [model_cls() for model_cls in MODEL_REGISTRY.values()]


# --------------------------------------------------------------------------------------
# Base definition for all models
# --------------------------------------------------------------------------------------


class TransmitterModel:
    """
    Base class for all RTX transmitter models.

    Concrete subclasses must define:

        NAME: str
        BASE_CODE: str
        DESCRIPTION: str
        MASTER_SEGMENTS: List[SelectionCategory]
        ACCURACY: Dict[str, AccuracyInfo]   keyed by pressure-range code

    STATIC_PRESSURE_EFFECTS maps a range code to (percent per unit ratio,
    reference pressure) on the differential family.

    MODEL is filled in by @register_model. MANIFOLD_WELD_NECK_EXCLUSIVE marks
    models where picking a manifold forces the weld neck to "none" and vice
    versa.
    """

    MODEL: str = ""
    NAME: str = ""
    BASE_CODE: str = ""
    DESCRIPTION: str = ""
    MASTER_SEGMENTS: List[SelectionCategory] = []
    ACCURACY: Dict[str, AccuracyInfo] = {}
    STATIC_PRESSURE_EFFECTS: Dict[str, Tuple[float, str]] = {}
    MANIFOLD_WELD_NECK_EXCLUSIVE: bool = False

    @property
    def id(self) -> str:
        return self.MODEL

    @property
    def configuration(self) -> List[SelectionCategory]:
        return sorted(self.MASTER_SEGMENTS, key=lambda category: category.sequence)

    def categories(self, part: Part) -> List[SelectionCategory]:
        return [category for category in self.configuration if category.part == part]

    def find_category(self, category_id: str) -> Optional[SelectionCategory]:
        for category in self.MASTER_SEGMENTS:
            if category.id == category_id:
                return category
        return None

    def get_category(self, category_id: str) -> SelectionCategory:
        category = self.find_category(category_id)
        if category is None:
            valid = [c.id for c in self.configuration]
            raise ConfigurationError(
                message=f"Unknown category '{category_id}' for model {self.MODEL}",
                model=self.MODEL,
                category=category_id,
                invalid_code=category_id,
                valid_codes=valid,
            )
        return category

    def selected_option(
        self, category_id: str, selections: Mapping[str, str]
    ) -> Optional[Option]:
        category = self.find_category(category_id)
        if category is None:
            return None
        return category.find_option(selections.get(category_id))

    def selected_range(self, selections: Mapping[str, str]) -> Optional[RangeOption]:
        option = self.selected_option(CategoryId.PRESSURE_RANGE, selections)
        if isinstance(option, RangeOption):
            return option
        return None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.MODEL,
            "name": self.NAME,
            "base_code": self.BASE_CODE,
            "description": self.DESCRIPTION,
            "configuration": [category.to_dict() for category in self.configuration],
        }


def _check_unique_codes(model_cls: Type[TransmitterModel]) -> None:
    seen = set()
    for category in model_cls.MASTER_SEGMENTS:
        codes = category.codes
        if len(codes) != len(set(codes)):
            raise ConfigurationError(
                message=f"Duplicate option code in category {category.id}",
                model=model_cls.MODEL,
                category=category.id,
            )
        if category.id in seen:
            raise ConfigurationError(
                message=f"Duplicate category id {category.id}",
                model=model_cls.MODEL,
                category=category.id,
            )
        seen.add(category.id)


def check_registry() -> None:
    """Sanity check run once the model modules are imported."""
    for model_cls in MODEL_REGISTRY.values():
        _check_unique_codes(model_cls)
