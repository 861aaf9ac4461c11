from Backend.ModelCodeEngine.catalog import CategoryId, get_model
from Backend.ModelCodeEngine.codec import encode
from Backend.ModelCodeEngine.selection import (
    apply_selection,
    manifold_categories_visible,
    new_selections,
    range_changed,
    reset_for_model,
)
from Backend.ModelCodeEngine.validation import validate_option


SPECTRUM = {
    CategoryId.MANIFOLD_PROCESS_CONNECTION: "P1",
    CategoryId.MANIFOLD_MATERIAL: "M2",
    CategoryId.MANIFOLD_TRANSMITTER_CONNECTION: "C1",
}


def test_apply_selection_returns_new_map():
    model = get_model("RTX2300A")
    original = {CategoryId.DISPLAY: "N"}
    updated = apply_selection(model, original, CategoryId.DISPLAY, "Y")
    assert original == {CategoryId.DISPLAY: "N"}
    assert updated == {CategoryId.DISPLAY: "Y"}


def test_no_manifold_clears_spectrum():
    model = get_model("RTX2500D")
    selections = dict(SPECTRUM)
    selections[CategoryId.MANIFOLD] = "V3"

    updated = apply_selection(model, selections, CategoryId.MANIFOLD, "VN")
    assert updated == {CategoryId.MANIFOLD: "VN"}
    assert not manifold_categories_visible(updated)


def test_manifold_forces_no_weld_neck_on_exclusive_models():
    model = get_model("RTX2300A")
    updated = apply_selection(model, {CategoryId.WELD_NECK: "W4"}, CategoryId.MANIFOLD, "V2")
    assert updated[CategoryId.WELD_NECK] == "WN"
    assert manifold_categories_visible(updated)


def test_weld_neck_forces_no_manifold_and_clears_spectrum():
    model = get_model("RTX2400G")
    selections = dict(SPECTRUM)
    selections[CategoryId.MANIFOLD] = "V1"

    updated = apply_selection(model, selections, CategoryId.WELD_NECK, "W1")
    assert updated[CategoryId.MANIFOLD] == "VN"
    for category_id in SPECTRUM:
        assert category_id not in updated


def test_non_exclusive_model_keeps_weld_neck():
    model = get_model("RTX2500D")
    updated = apply_selection(model, {CategoryId.WELD_NECK: "WN"}, CategoryId.MANIFOLD, "V5")
    assert updated == {CategoryId.WELD_NECK: "WN", CategoryId.MANIFOLD: "V5"}


def test_exclusivity_end_to_end():
    """Pick a weld neck, then a manifold: the code never carries both."""
    model = get_model("RTX2300A")
    selections = new_selections()
    selections = apply_selection(model, selections, CategoryId.PROCESS_CONNECTION, "2")
    selections = apply_selection(model, selections, CategoryId.WELD_NECK, "W5")
    assert not validate_option(model, CategoryId.MANIFOLD, "V2", selections).is_valid

    selections = apply_selection(model, selections, CategoryId.WELD_NECK, "WN")
    assert validate_option(model, CategoryId.MANIFOLD, "V2", selections).is_valid
    selections = apply_selection(model, selections, CategoryId.MANIFOLD, "V2")
    assert not validate_option(model, CategoryId.WELD_NECK, "W5", selections).is_valid

    encoded = encode(model, selections)
    assert "WN" in encoded.line2
    assert "V2" in encoded.line2
    assert encoded.manifold_code.startswith("SS2000-V2")


def test_range_changed():
    assert range_changed({}, {CategoryId.PRESSURE_RANGE: "A2"})
    assert not range_changed({CategoryId.PRESSURE_RANGE: "A2"}, {CategoryId.PRESSURE_RANGE: "A2"})


def test_reset_for_model():
    old = get_model("RTX2300A")
    new = get_model("RTX2500D")
    selections = {CategoryId.DISPLAY: "Y"}
    assert reset_for_model(old, new, selections) == {}
    assert reset_for_model(old, old, selections) == selections
    assert reset_for_model(None, new, selections) == {}


def test_manifold_then_weld_neck_from_empty():
    model = get_model("RTX2400G")
    selections = apply_selection(model, new_selections(), CategoryId.MANIFOLD, "V2")
    assert selections[CategoryId.WELD_NECK] == "WN"

    for category_id, code in SPECTRUM.items():
        selections = apply_selection(model, selections, category_id, code)

    selections = apply_selection(model, selections, CategoryId.WELD_NECK, "W2")
    assert selections[CategoryId.MANIFOLD] == "VN"
    assert selections[CategoryId.WELD_NECK] == "W2"
    assert not any(key.startswith("manifold_") for key in selections)
