from pathlib import Path
from typing import Any, Dict, List, Optional
from io import BytesIO
import os
import logging

from fastapi import FastAPI, HTTPException, Query
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse, StreamingResponse
from pydantic import BaseModel
from dotenv import load_dotenv

from Backend.ModelCodeEngine.catalog import (
    ConfigurationError,
    MODEL_REGISTRY,
    TransmitterModel,
    get_model,
    list_models,
)
from Backend.ModelCodeEngine.codec import decode, decode_manifold, decode_segments, encode
from Backend.ModelCodeEngine.performance import (
    CalibratedRange,
    accuracy_curve,
    evaluate,
    get_accuracy_info,
)
from Backend.ModelCodeEngine.selection import (
    apply_selection,
    manifold_categories_visible,
    range_changed,
)
from Backend.ModelCodeEngine.validation import selectable_options, validate_option
from Backend.pdf_generator import generate_configuration_pdf
from Backend.summary import build_summary, export_filename, to_export_dict, to_text_block


# ---------------------------------------------------------------------------
# Environment config
# ---------------------------------------------------------------------------

BASE_DIR = Path(__file__).resolve().parent

# Load .env from project root
load_dotenv(BASE_DIR.parent / ".env")

RTX_LOG_LEVEL = os.getenv("RTX_LOG_LEVEL", "INFO").upper()
RTX_CORS_ORIGINS = [
    origin.strip()
    for origin in os.getenv("RTX_CORS_ORIGINS", "*").split(",")
    if origin.strip()
] or ["*"]
RTX_DEFAULT_MODEL = os.getenv("RTX_DEFAULT_MODEL") or next(iter(MODEL_REGISTRY), "")


# ---------------------------------------------------------------------------
# Logging setup
# ---------------------------------------------------------------------------

logging.basicConfig(level=getattr(logging, RTX_LOG_LEVEL, logging.INFO))
logger = logging.getLogger("rtxconfig")

if RTX_DEFAULT_MODEL not in MODEL_REGISTRY:
    logger.warning("RTX_DEFAULT_MODEL=%s is not a registered model.", RTX_DEFAULT_MODEL)


# ---------------------------------------------------------------------------
# FastAPI app setup
# ---------------------------------------------------------------------------

app = FastAPI(
    title="RTX Configurator API",
    description="Model code configurator for the RTX2000 pressure transmitter series.",
    version="1.0.0",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=RTX_CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ---------------------------------------------------------------------------
# Pydantic models
# ---------------------------------------------------------------------------

class CalibratedRangePayload(BaseModel):
    low: str = ""
    high: str = ""


class ConfigurationPayload(BaseModel):
    model: Optional[str] = None
    selections: Dict[str, str] = {}
    calibrated_range: Optional[CalibratedRangePayload] = None
    special_request: str = ""


class OptionsRequest(BaseModel):
    model: Optional[str] = None
    category: str
    selections: Dict[str, str] = {}


class SelectRequest(BaseModel):
    model: Optional[str] = None
    category: str
    code: str
    selections: Dict[str, str] = {}


class DecodeRequest(BaseModel):
    """
    Payload for /decode.

    ``code`` is a full pasted model code (model detected from its prefix,
    among ``model`` alone when that is set too).
    With ``model`` set, ``required_code`` / ``additional_code`` decode the
    quick-configuration lines on top of ``selections``, and ``manifold_code``
    decodes an SS2000 code.
    """
    code: Optional[str] = None
    model: Optional[str] = None
    required_code: Optional[str] = None
    additional_code: Optional[str] = None
    manifold_code: Optional[str] = None
    selections: Dict[str, str] = {}


class SummaryRequest(ConfigurationPayload):
    tag: str = ""


class EncodeResponse(BaseModel):
    line1: str
    line2: str
    manifold_code: Optional[str] = None
    transmitter_line3: str
    transmitter_line4: str
    line3_calibrated: bool = False


class DecodeResponse(BaseModel):
    model_id: Optional[str] = None
    selections: Dict[str, str] = {}
    status: str
    unmatched: str = ""
    stopped_at: Optional[str] = None
    manifold_tag: Optional[str] = None
    error: Optional[str] = None


class SpecEntryResponse(BaseModel):
    key: str
    name: str
    value: Optional[float] = None
    text: str


class PerformanceResponse(BaseModel):
    state: str
    specs: Dict[str, SpecEntryResponse] = {}
    ratio: Optional[float] = None
    error: Optional[str] = None


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _configuration_error(exc: ConfigurationError, status_code: int = 422) -> HTTPException:
    logger.info(
        "ConfigurationError: model=%s category=%s invalid=%s",
        exc.model,
        exc.category,
        exc.invalid_code,
    )
    error_payload = {"error_type": "configuration_error"}
    error_payload.update(exc.to_dict())
    return HTTPException(status_code=status_code, detail=error_payload)


def _resolve_model(model_id: Optional[str]) -> TransmitterModel:
    """Registered model for ``model_id`` (default model when omitted), else 404."""
    model_id = (model_id or RTX_DEFAULT_MODEL).strip()
    try:
        return get_model(model_id)
    except ConfigurationError as exc:
        raise _configuration_error(exc, status_code=404) from exc


def _calibrated_range(payload: Optional[CalibratedRangePayload]) -> Optional[CalibratedRange]:
    if payload is None:
        return None
    return CalibratedRange(low=payload.low, high=payload.high)


def _summary_for(request: SummaryRequest):
    model = _resolve_model(request.model)
    return build_summary(
        model,
        request.selections,
        _calibrated_range(request.calibrated_range),
        tag=request.tag,
        special_request=request.special_request,
    )


# ---------------------------------------------------------------------------
# Routes: catalog
# ---------------------------------------------------------------------------

@app.get("/health")
async def health() -> Dict[str, str]:
    return {"status": "ok"}


@app.get("/models")
async def models() -> List[Dict[str, Any]]:
    return [
        {
            "id": model.id,
            "name": model.NAME,
            "base_code": model.BASE_CODE,
            "description": model.DESCRIPTION,
            "default": model.id == RTX_DEFAULT_MODEL,
        }
        for model in list_models()
    ]


@app.get("/models/{model_id}")
async def model_detail(model_id: str) -> Dict[str, Any]:
    return _resolve_model(model_id).to_dict()


@app.get("/models/{model_id}/accuracy-curve/{range_code}")
async def model_accuracy_curve(
    model_id: str,
    range_code: str,
    steps: int = Query(100, ge=1, le=1000),
) -> Dict[str, Any]:
    model = _resolve_model(model_id)
    info = get_accuracy_info(model, range_code.upper())
    if info is None:
        raise HTTPException(
            status_code=404,
            detail={
                "error_type": "configuration_error",
                "message": f"No accuracy data for range '{range_code}' on {model.id}",
                "model": model.id,
                "invalid_code": range_code,
                "valid_codes": list(model.ACCURACY.keys()),
            },
        )

    return {
        "model": model.id,
        "range_code": range_code.upper(),
        "max_ratio": info.max_ratio,
        "points": [[ratio, accuracy] for ratio, accuracy in accuracy_curve(info, steps)],
    }


# ---------------------------------------------------------------------------
# Routes: selection
# ---------------------------------------------------------------------------

@app.post("/options")
async def options(request: OptionsRequest) -> Dict[str, Any]:
    model = _resolve_model(request.model)
    try:
        states = selectable_options(model, request.category, request.selections)
    except ConfigurationError as exc:
        raise _configuration_error(exc) from exc

    return {
        "model": model.id,
        "category": request.category,
        "options": [state.to_dict() for state in states],
    }


@app.post("/select")
async def select(request: SelectRequest) -> Dict[str, Any]:
    """
    Validate and apply one pick. Rejected picks come back as 422 with the
    validator's reason; accepted picks return the cascaded selection map.
    """
    model = _resolve_model(request.model)
    try:
        result = validate_option(model, request.category, request.code, request.selections)
    except ConfigurationError as exc:
        raise _configuration_error(exc) from exc

    if not result.is_valid:
        logger.info(
            "SELECT rejected: model=%s category=%s code=%s reason=%s",
            model.id,
            request.category,
            request.code,
            result.reason,
        )
        raise HTTPException(
            status_code=422,
            detail={
                "error_type": "invalid_selection",
                "message": result.reason,
                "model": model.id,
                "category": request.category,
                "invalid_code": request.code,
            },
        )

    updated = apply_selection(model, request.selections, request.category, request.code)
    return {
        "model": model.id,
        "selections": updated,
        "range_changed": range_changed(request.selections, updated),
        "manifold_visible": manifold_categories_visible(updated),
    }


# ---------------------------------------------------------------------------
# Routes: codec
# ---------------------------------------------------------------------------

@app.post("/encode", response_model=EncodeResponse)
async def encode_configuration(request: ConfigurationPayload) -> Dict[str, Any]:
    model = _resolve_model(request.model)
    encoded = encode(
        model,
        request.selections,
        _calibrated_range(request.calibrated_range),
        request.special_request,
    )
    return encoded.to_dict()


@app.post("/decode", response_model=DecodeResponse)
async def decode_code(request: DecodeRequest) -> Dict[str, Any]:
    if request.model:
        model = _resolve_model(request.model)
        if (request.code or "").strip():
            # full code, detection limited to the named model
            logger.info("DECODE request: model=%s code=%s", model.id, request.code)
            return decode(request.code, models=[model]).to_dict()
        if request.manifold_code is not None:
            result = decode_manifold(model, request.manifold_code)
        else:
            result = decode_segments(
                model,
                required_code=request.required_code,
                additional_code=request.additional_code,
                selections=request.selections,
            )
        return result.to_dict()

    if not (request.code or "").strip():
        raise HTTPException(status_code=400, detail="Model code is required.")

    logger.info("DECODE request: code=%s", request.code)
    return decode(request.code).to_dict()


# ---------------------------------------------------------------------------
# Routes: performance
# ---------------------------------------------------------------------------

@app.post("/performance", response_model=PerformanceResponse)
async def performance(request: ConfigurationPayload) -> Dict[str, Any]:
    model = _resolve_model(request.model)
    report = evaluate(model, request.selections, _calibrated_range(request.calibrated_range))
    return report.to_dict()


# ---------------------------------------------------------------------------
# Routes: summary / export
# ---------------------------------------------------------------------------

@app.post("/summary")
async def summary_json(request: SummaryRequest) -> Dict[str, Any]:
    return to_export_dict(_summary_for(request))


@app.post("/summary/text", response_class=PlainTextResponse)
async def summary_text(request: SummaryRequest) -> PlainTextResponse:
    return PlainTextResponse(to_text_block(_summary_for(request)))


@app.post("/summary/pdf")
async def summary_pdf(request: SummaryRequest) -> StreamingResponse:
    summary = _summary_for(request)
    pdf_bytes = generate_configuration_pdf(summary)
    filename = export_filename(summary, extension="pdf")

    logger.info("PDF export: model=%s line1=%s", summary.model_id, summary.encoded.line1)

    return StreamingResponse(
        BytesIO(pdf_bytes),
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
