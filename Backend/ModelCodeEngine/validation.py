# Backend/ModelCodeEngine/validation.py

"""
Compatibility rules between categories.

Each category in the catalog carries an optional ``ValidatorId``; this module
maps every tag to a plain function ``(code, selections, messages) ->
ValidationResult``. Rules never mutate the selection map and never raise for a
rejected option: a rejection is an ordinary result with a reason string.
"""

from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Mapping, Optional, Tuple

from .catalog import (
    NO_MANIFOLD,
    NO_WELD_NECK,
    CategoryId,
    Option,
    TransmitterModel,
    ValidatorId,
)
from .messages import MessageLookup, default_messages
from .shared_segments import (
    EXPLOSION_PROOF_REQUIRED,
    FEMALE_PROCESS_CONNECTIONS,
    FEMALE_WELD_NECKS,
    FIVE_VALVE_MANIFOLDS,
    HOUSING_M20,
    HOUSING_NPT,
    M20_CONNECTORS,
    MALE_PROCESS_CONNECTIONS,
    MALE_WELD_NECKS,
    NON_EXPLOSION_PROOF_CONNECTORS,
    NPT_CONNECTORS,
    THREE_VALVE_MANIFOLDS,
    TWO_VALVE_MANIFOLDS,
)


# --------------------------------------------------------------------------------------
# Result types
# --------------------------------------------------------------------------------------


@dataclass(frozen=True)
class ValidationResult:
    is_valid: bool
    reason: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {"is_valid": self.is_valid, "reason": self.reason}


VALID = ValidationResult(is_valid=True)


def _invalid(messages: MessageLookup, key: str, params: Optional[Dict[str, Any]] = None):
    return ValidationResult(is_valid=False, reason=messages(key, params))


@dataclass(frozen=True)
class OptionState:
    option: Option
    is_valid: bool
    reason: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        data = self.option.to_dict()
        data.update({"is_valid": self.is_valid, "reason": self.reason})
        return data


# --------------------------------------------------------------------------------------
# Rules
# --------------------------------------------------------------------------------------


def validate_electrical_connector(
    code: str, selections: Mapping[str, str], messages: MessageLookup
) -> ValidationResult:
    housing_type = selections.get(CategoryId.HOUSING_TYPE)
    explosion_proof = selections.get(CategoryId.EXPLOSION_PROOF)

    if not housing_type:
        return _invalid(messages, "validation_selectHousing")

    # Connector thread must match the housing thread.
    if code in M20_CONNECTORS and housing_type != HOUSING_M20:
        return _invalid(messages, "validation_requiresM20")
    if code in NPT_CONNECTORS and housing_type != HOUSING_NPT:
        return _invalid(messages, "validation_requiresNPT")

    if explosion_proof in EXPLOSION_PROOF_REQUIRED and code in NON_EXPLOSION_PROOF_CONNECTORS:
        return _invalid(
            messages, "validation_notForExplosionProof", {"type": explosion_proof}
        )

    return VALID


def _weld_neck_selected(selections: Mapping[str, str]) -> bool:
    weld_neck = selections.get(CategoryId.WELD_NECK)
    return bool(weld_neck) and weld_neck != NO_WELD_NECK


def _manifold_selected(selections: Mapping[str, str]) -> bool:
    manifold = selections.get(CategoryId.MANIFOLD)
    return bool(manifold) and manifold != NO_MANIFOLD


def _check_manifold(
    code: str,
    selections: Mapping[str, str],
    messages: MessageLookup,
    allowed: Tuple[str, ...],
    reason_key: str,
) -> ValidationResult:
    if code != NO_MANIFOLD and _weld_neck_selected(selections):
        return _invalid(messages, "validation_noManifoldWithWeldNeck")
    if code != NO_MANIFOLD and code not in allowed:
        return _invalid(messages, reason_key)
    return VALID


def validate_manifold_two_valve(
    code: str, selections: Mapping[str, str], messages: MessageLookup
) -> ValidationResult:
    return _check_manifold(
        code, selections, messages, TWO_VALVE_MANIFOLDS, "validation_only2ValveManifold"
    )


def validate_manifold_three_five_valve(
    code: str, selections: Mapping[str, str], messages: MessageLookup
) -> ValidationResult:
    return _check_manifold(
        code,
        selections,
        messages,
        THREE_VALVE_MANIFOLDS + FIVE_VALVE_MANIFOLDS,
        "validation_only35ValveManifold",
    )


def validate_weld_neck_gender(
    code: str, selections: Mapping[str, str], messages: MessageLookup
) -> ValidationResult:
    if code == NO_WELD_NECK:
        return VALID

    if _manifold_selected(selections):
        return _invalid(messages, "validation_noWeldNeckWithManifold")

    process_connection = selections.get(CategoryId.PROCESS_CONNECTION)
    if not process_connection:
        return _invalid(messages, "validation_selectProcessConnection")

    transmitter_female = process_connection in FEMALE_PROCESS_CONNECTIONS
    transmitter_male = process_connection in MALE_PROCESS_CONNECTIONS

    # The weld neck must be the opposite gender of the process connection.
    if transmitter_female and code in MALE_WELD_NECKS:
        return VALID
    if transmitter_male and code in FEMALE_WELD_NECKS:
        return VALID

    if transmitter_female:
        return _invalid(messages, "validation_requiresMaleWeldNeck")
    if transmitter_male:
        return _invalid(messages, "validation_requiresFemaleWeldNeck")
    return _invalid(messages, "validation_incompatibleProcessConnection")


def validate_weld_neck_not_applicable(
    code: str, selections: Mapping[str, str], messages: MessageLookup
) -> ValidationResult:
    if code != NO_WELD_NECK:
        return _invalid(messages, "validation_noWeldNeckApplicable")
    return VALID


Rule = Callable[[str, Mapping[str, str], MessageLookup], ValidationResult]

VALIDATORS: Dict[ValidatorId, Rule] = {
    ValidatorId.ELECTRICAL_CONNECTOR: validate_electrical_connector,
    ValidatorId.MANIFOLD_TWO_VALVE: validate_manifold_two_valve,
    ValidatorId.MANIFOLD_THREE_FIVE_VALVE: validate_manifold_three_five_valve,
    ValidatorId.WELD_NECK_GENDER: validate_weld_neck_gender,
    ValidatorId.WELD_NECK_NOT_APPLICABLE: validate_weld_neck_not_applicable,
}


# --------------------------------------------------------------------------------------
# Public API
# --------------------------------------------------------------------------------------


def validate_option(
    model: TransmitterModel,
    category_id: str,
    code: str,
    selections: Mapping[str, str],
    messages: MessageLookup = default_messages,
) -> ValidationResult:
    """
    Decide whether ``code`` may currently be picked in ``category_id``.

    Raises ConfigurationError only when the category itself is unknown for the
    model; every other outcome is a ValidationResult.
    """
    category = model.get_category(category_id)

    if category.find_option(code) is None:
        return _invalid(messages, "validation_notInCatalog", {"code": code})

    if category.validator is None:
        return VALID

    return VALIDATORS[category.validator](code, selections, messages)


def selectable_options(
    model: TransmitterModel,
    category_id: str,
    selections: Mapping[str, str],
    messages: MessageLookup = default_messages,
) -> List[OptionState]:
    category = model.get_category(category_id)
    states: List[OptionState] = []
    for option in category.options:
        result = validate_option(model, category_id, option.code, selections, messages)
        states.append(OptionState(option=option, is_valid=result.is_valid, reason=result.reason))
    return states
