from fastapi.testclient import TestClient

from Backend.api import app
from Backend.ModelCodeEngine.catalog import CategoryId


client = TestClient(app)


def test_health():
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_list_models():
    response = client.get("/models")
    assert response.status_code == 200
    ids = [item["id"] for item in response.json()]
    assert ids == ["RTX2300A", "RTX2400G", "RTX2400K", "RTX2500D"]


def test_model_detail_and_unknown_model():
    response = client.get("/models/RTX2400K")
    assert response.status_code == 200
    assert response.json()["base_code"] == "RTX2400-K"

    response = client.get("/models/NOPE")
    assert response.status_code == 404
    detail = response.json()["detail"]
    assert detail["error_type"] == "configuration_error"
    assert detail["invalid_code"] == "NOPE"


def test_options_marks_disabled_entries():
    response = client.post(
        "/options",
        json={
            "model": "RTX2300A",
            "category": CategoryId.ELECTRICAL_CONNECTOR,
            "selections": {CategoryId.HOUSING_TYPE: "1"},
        },
    )
    assert response.status_code == 200
    enabled = [item["code"] for item in response.json()["options"] if item["is_valid"]]
    assert enabled == ["E6", "E7", "E8", "E9", "EA"]


def test_options_unknown_category():
    response = client.post("/options", json={"model": "RTX2300A", "category": "colour"})
    assert response.status_code == 422
    assert response.json()["detail"]["category"] == "colour"


def test_select_applies_cascade():
    response = client.post(
        "/select",
        json={
            "model": "RTX2300A",
            "category": CategoryId.MANIFOLD,
            "code": "V1",
            "selections": {CategoryId.WELD_NECK: "WN"},
        },
    )
    assert response.status_code == 200
    body = response.json()
    assert body["selections"] == {CategoryId.WELD_NECK: "WN", CategoryId.MANIFOLD: "V1"}
    assert body["manifold_visible"] is True
    assert body["range_changed"] is False


def test_select_rejects_invalid_pick():
    response = client.post(
        "/select",
        json={
            "model": "RTX2300A",
            "category": CategoryId.MANIFOLD,
            "code": "V2",
            "selections": {CategoryId.WELD_NECK: "W1"},
        },
    )
    assert response.status_code == 422
    detail = response.json()["detail"]
    assert detail["error_type"] == "invalid_selection"
    assert detail["invalid_code"] == "V2"


def test_encode_then_decode():
    selections = {
        CategoryId.WETTED_MATERIAL: "E",
        CategoryId.DIAPHRAGM_FILL_FLUID: "D",
        CategoryId.PRESSURE_RANGE: "A2",
        CategoryId.PROCESS_CONNECTION: "1",
        CategoryId.CHAMBER_BOLTS: "0",
        CategoryId.COMMUNICATION: "H",
        CategoryId.DISPLAY: "N",
        CategoryId.HOUSING_TYPE: "1",
        CategoryId.EXPLOSION_PROOF: "A-",
    }
    response = client.post(
        "/encode",
        json={
            "model": "RTX2300A",
            "selections": selections,
            "calibrated_range": {"low": "0", "high": "20"},
        },
    )
    assert response.status_code == 200
    encoded = response.json()
    assert encoded["line1"] == "RTX2300-AEDA210HN1A-"
    assert encoded["transmitter_line3"] == "0 ~ 20 kPa"

    response = client.post("/decode", json={"code": encoded["line1"]})
    assert response.status_code == 200
    decoded = response.json()
    assert decoded["model_id"] == "RTX2300A"
    assert decoded["status"] == "complete"
    assert decoded["selections"] == selections


def test_decode_requires_code():
    response = client.post("/decode", json={})
    assert response.status_code == 400


def test_decode_manifold_for_model():
    response = client.post(
        "/decode",
        json={"model": "RTX2500D", "manifold_code": "SS2000-V3P1M2"},
    )
    assert response.status_code == 200
    body = response.json()
    assert body["manifold_tag"] == "V3"
    assert body["selections"][CategoryId.MANIFOLD_MATERIAL] == "M2"
    assert body["status"] == "partial"


def test_performance_endpoint():
    response = client.post(
        "/performance",
        json={
            "model": "RTX2300A",
            "selections": {CategoryId.PRESSURE_RANGE: "A2"},
            "calibrated_range": {"low": "0", "high": "5"},
        },
    )
    assert response.status_code == 200
    body = response.json()
    assert body["state"] == "invalid"
    assert body["specs"] == {}


def test_accuracy_curve_endpoint():
    response = client.get("/models/RTX2300A/accuracy-curve/a7", params={"steps": 9})
    assert response.status_code == 200
    body = response.json()
    assert body["range_code"] == "A7"
    assert body["max_ratio"] == 100
    assert len(body["points"]) == 9

    response = client.get("/models/RTX2300A/accuracy-curve/G9")
    assert response.status_code == 404


def test_summary_exports():
    payload = {
        "model": "RTX2400G",
        "selections": {CategoryId.PRESSURE_RANGE: "G5"},
        "tag": "PT-7",
    }

    response = client.post("/summary", json=payload)
    assert response.status_code == 200
    assert response.json()["tag_number"] == "PT-7"

    response = client.post("/summary/text", json=payload)
    assert response.status_code == 200
    assert response.text.startswith("Model: RTX2400-G")

    response = client.post("/summary/pdf", json=payload)
    assert response.status_code == 200
    assert response.headers["content-type"] == "application/pdf"
    assert response.content.startswith(b"%PDF")


def test_decode_full_code_with_model():
    response = client.post(
        "/decode",
        json={"model": "RTX2300A", "code": "RTX2300-AEDA210HN1A-B1E6WN0ACEX4VNX"},
    )
    assert response.status_code == 200
    body = response.json()
    assert body["model_id"] == "RTX2300A"
    assert body["status"] == "complete"
    assert body["selections"][CategoryId.PRESSURE_RANGE] == "A2"
    assert body["selections"][CategoryId.MANIFOLD] == "VN"

    # Detection is limited to the named model.
    response = client.post(
        "/decode",
        json={"model": "RTX2500D", "code": "RTX2300-AEDA210HN1A-"},
    )
    assert response.status_code == 200
    assert response.json()["status"] == "unrecognized"
    assert response.json()["selections"] == {}


def test_accuracy_curve_steps_bounds():
    for steps in (-5, 0, 5000):
        response = client.get("/models/RTX2300A/accuracy-curve/A7", params={"steps": steps})
        assert response.status_code == 422

    response = client.get("/models/RTX2300A/accuracy-curve/A7", params={"steps": 1000})
    assert response.status_code == 200
    assert len(response.json()["points"]) == 1000


def test_response_shapes():
    response = client.post("/encode", json={"model": "RTX2300A", "selections": {}})
    assert response.status_code == 200
    assert set(response.json()) == {
        "line1",
        "line2",
        "manifold_code",
        "transmitter_line3",
        "transmitter_line4",
        "line3_calibrated",
    }

    response = client.post("/decode", json={"code": "XYZ"})
    assert response.status_code == 200
    assert set(response.json()) == {
        "model_id",
        "selections",
        "status",
        "unmatched",
        "stopped_at",
        "manifold_tag",
        "error",
    }

    response = client.post(
        "/performance",
        json={"model": "RTX2300A", "selections": {CategoryId.PRESSURE_RANGE: "A2"}},
    )
    assert response.status_code == 200
    body = response.json()
    assert body["state"] == "nominal"
    assert set(body["specs"]["accuracy"]) == {"key", "name", "value", "text"}
