import pytest

from Backend.ModelCodeEngine.catalog import CategoryId, ConfigurationError, get_model
from Backend.ModelCodeEngine.validation import selectable_options, validate_option


def _valid(model_id, category_id, code, selections):
    return validate_option(get_model(model_id), category_id, code, selections).is_valid


# ---------------------------------------------------------------------------
# Electrical connector
# ---------------------------------------------------------------------------

def test_connector_requires_housing():
    result = validate_option(get_model("RTX2300A"), CategoryId.ELECTRICAL_CONNECTOR, "E2", {})
    assert not result.is_valid
    assert result.reason == "Select a housing type first."


def test_connector_thread_must_match_housing():
    npt = {CategoryId.HOUSING_TYPE: "1", CategoryId.EXPLOSION_PROOF: "A-"}
    m20 = {CategoryId.HOUSING_TYPE: "2", CategoryId.EXPLOSION_PROOF: "A-"}

    assert _valid("RTX2300A", CategoryId.ELECTRICAL_CONNECTOR, "E6", npt)
    assert not _valid("RTX2300A", CategoryId.ELECTRICAL_CONNECTOR, "E2", npt)
    assert _valid("RTX2300A", CategoryId.ELECTRICAL_CONNECTOR, "E2", m20)
    assert not _valid("RTX2300A", CategoryId.ELECTRICAL_CONNECTOR, "EA", m20)


@pytest.mark.parametrize("ex_code", ["D-", "E-", "F-"])
def test_plastic_connectors_blocked_by_explosion_proof(ex_code):
    selections = {CategoryId.HOUSING_TYPE: "2", CategoryId.EXPLOSION_PROOF: ex_code}
    model = get_model("RTX2500D")

    result = validate_option(model, CategoryId.ELECTRICAL_CONNECTOR, "E1", selections)
    assert not result.is_valid
    assert ex_code in result.reason

    assert validate_option(model, CategoryId.ELECTRICAL_CONNECTOR, "E2", selections).is_valid


def test_intrinsically_safe_allows_plastic():
    selections = {CategoryId.HOUSING_TYPE: "1", CategoryId.EXPLOSION_PROOF: "B-"}
    assert _valid("RTX2400G", CategoryId.ELECTRICAL_CONNECTOR, "E6", selections)


# ---------------------------------------------------------------------------
# Manifold / weld neck
# ---------------------------------------------------------------------------

def test_manifold_rejected_while_weld_neck_selected():
    selections = {CategoryId.WELD_NECK: "W4"}
    result = validate_option(get_model("RTX2300A"), CategoryId.MANIFOLD, "V2", selections)
    assert not result.is_valid
    assert "weld neck" in result.reason

    assert _valid("RTX2300A", CategoryId.MANIFOLD, "VN", selections)


def test_manifold_allowed_with_no_weld_neck():
    assert _valid("RTX2300A", CategoryId.MANIFOLD, "V1", {CategoryId.WELD_NECK: "WN"})
    assert _valid("RTX2300A", CategoryId.MANIFOLD, "V1", {})


def test_weld_neck_rejected_while_manifold_selected():
    selections = {CategoryId.PROCESS_CONNECTION: "2", CategoryId.MANIFOLD: "V2"}
    assert not _valid("RTX2400G", CategoryId.WELD_NECK, "W4", selections)
    assert _valid("RTX2400G", CategoryId.WELD_NECK, "WN", selections)


def test_weld_neck_gender_complement():
    female = {CategoryId.PROCESS_CONNECTION: "1"}
    male = {CategoryId.PROCESS_CONNECTION: "3"}

    assert _valid("RTX2300A", CategoryId.WELD_NECK, "W1", female)
    assert not _valid("RTX2300A", CategoryId.WELD_NECK, "W4", female)
    assert _valid("RTX2300A", CategoryId.WELD_NECK, "WB", male)
    assert not _valid("RTX2300A", CategoryId.WELD_NECK, "W3", male)


def test_weld_neck_needs_process_connection():
    result = validate_option(get_model("RTX2300A"), CategoryId.WELD_NECK, "W1", {})
    assert not result.is_valid
    assert result.reason == "Select a process connection first."


def test_three_five_valve_manifold_on_differential():
    model = get_model("RTX2500D")
    states = {state.option.code: state.is_valid for state in selectable_options(model, CategoryId.MANIFOLD, {})}
    assert states == {"V3": True, "V4": True, "V5": True, "V6": True, "VN": True}


def test_code_outside_catalog_is_invalid():
    result = validate_option(get_model("RTX2500D"), CategoryId.MANIFOLD, "V1", {})
    assert not result.is_valid
    assert "V1" in result.reason


def test_unknown_category_raises():
    with pytest.raises(ConfigurationError):
        validate_option(get_model("RTX2300A"), "nonsense", "X", {})


# ---------------------------------------------------------------------------
# Monotonicity: filling an unrelated category never turns a valid option invalid
# ---------------------------------------------------------------------------

UNRELATED_FILLS = [
    (CategoryId.DISPLAY, "Y"),
    (CategoryId.WETTED_MATERIAL, "F"),
    (CategoryId.MOUNTING_BRACKET, "B3"),
    (CategoryId.ALARM_CURRENT, "D"),
    (CategoryId.DISPLAY_UNIT, "X4"),
]


@pytest.mark.parametrize("model_id", ["RTX2300A", "RTX2400G", "RTX2400K", "RTX2500D"])
def test_unrelated_selection_keeps_options_valid(model_id):
    model = get_model(model_id)
    base = {CategoryId.HOUSING_TYPE: "1", CategoryId.PROCESS_CONNECTION: model.configuration[3].options[0].code}

    for category_id in (CategoryId.ELECTRICAL_CONNECTOR, CategoryId.WELD_NECK, CategoryId.MANIFOLD):
        before = {state.option.code for state in selectable_options(model, category_id, base) if state.is_valid}
        for fill_id, fill_code in UNRELATED_FILLS:
            filled = dict(base)
            filled[fill_id] = fill_code
            after = {state.option.code for state in selectable_options(model, category_id, filled) if state.is_valid}
            assert before <= after, (model_id, category_id, fill_id)


def test_selectable_options_in_catalog_order():
    model = get_model("RTX2300A")
    states = selectable_options(model, CategoryId.ELECTRICAL_CONNECTOR, {CategoryId.HOUSING_TYPE: "2"})
    assert [state.option.code for state in states] == model.get_category(CategoryId.ELECTRICAL_CONNECTOR).codes
    enabled = [state.option.code for state in states if state.is_valid]
    assert enabled == ["E1", "E2", "E3", "E4", "E5"]
