# Backend/ModelCodeEngine/performance.py

"""
Performance figures for a configured transmitter.

The turndown ratio is the rated span of the selected pressure range divided by
the span the user wants the instrument calibrated to. Accuracy and the
temperature / vibration / power-supply / static-pressure effects all degrade
with that ratio; every figure is a percentage of full span.

Range states, as seen by a host re-evaluating on every keystroke:

    no_range    no pressure range picked yet
    nominal     range picked, no custom calibration (ratio 1:1)
    calibrated  valid custom calibration
    invalid     custom calibration rejected; no figures are produced
"""

import logging
import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Tuple

from .catalog import AccuracyInfo, RangeOption, TransmitterModel
from .messages import MessageLookup, default_messages


logger = logging.getLogger(__name__)


# Fixed-precision contract for exported figures.
SPEC_DECIMALS = 4
STATIC_PRESSURE_DECIMALS = 2

LONG_TERM_STABILITY_URL_PERCENT = 0.1
LONG_TERM_STABILITY_YEARS = 10


# --------------------------------------------------------------------------------------
# Data structures
# --------------------------------------------------------------------------------------


@dataclass(frozen=True)
class CalibratedRange:
    """Raw text from the low / high calibration fields."""

    low: str = ""
    high: str = ""

    @property
    def is_empty(self) -> bool:
        return not (self.low or "").strip() and not (self.high or "").strip()


class RangeState(str, Enum):
    UNSET = "unset"
    VALID = "valid"
    INVALID = "invalid"


@dataclass(frozen=True)
class RangeCheck:
    state: RangeState
    low: Optional[float] = None
    high: Optional[float] = None
    error: Optional[str] = None

    @property
    def span(self) -> Optional[float]:
        if self.low is None or self.high is None:
            return None
        return self.high - self.low


class PerformanceState(str, Enum):
    NO_RANGE = "no_range"
    NOMINAL = "nominal"
    CALIBRATED = "calibrated"
    INVALID = "invalid"


@dataclass(frozen=True)
class SpecEntry:
    key: str
    name: str
    value: Optional[float]
    text: str

    def to_dict(self) -> Dict[str, Any]:
        return {"key": self.key, "name": self.name, "value": self.value, "text": self.text}


@dataclass
class PerformanceReport:
    state: PerformanceState
    specs: Dict[str, SpecEntry] = field(default_factory=dict)
    ratio: Optional[float] = None
    error: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "state": self.state.value,
            "specs": {key: entry.to_dict() for key, entry in self.specs.items()},
            "ratio": self.ratio,
            "error": self.error,
        }


@dataclass(frozen=True)
class AccuracyResult:
    value: Optional[float]
    error: Optional[str] = None


# --------------------------------------------------------------------------------------
# Helpers
# --------------------------------------------------------------------------------------


def _format_number(value: float) -> str:
    return f"{value:g}"


def _parse_number(text: str) -> Optional[float]:
    # digit separators ("1_0") are not range input
    if "_" in text:
        return None
    try:
        value = float(text)
    except ValueError:
        return None
    if not math.isfinite(value):
        return None
    return value


def _below(value: float, minimum: float) -> bool:
    """value < minimum, ignoring float noise from subtracting decimal inputs."""
    return value < minimum and not math.isclose(value, minimum, rel_tol=1e-9, abs_tol=1e-12)


# --------------------------------------------------------------------------------------
# Calibrated range
# --------------------------------------------------------------------------------------


def check_calibrated_range(
    option: RangeOption,
    calibrated_range: Optional[CalibratedRange],
    messages: MessageLookup = default_messages,
) -> RangeCheck:
    """
    Validate a custom calibration against the selected range option.

    Both fields empty, or only one of them filled with a number, is ``unset``.
    A filled field that is not a number is ``invalid`` straight away.
    """
    if calibrated_range is None or calibrated_range.is_empty:
        return RangeCheck(state=RangeState.UNSET)

    low_text = (calibrated_range.low or "").strip()
    high_text = (calibrated_range.high or "").strip()
    low = _parse_number(low_text) if low_text else None
    high = _parse_number(high_text) if high_text else None

    if (low_text and low is None) or (high_text and high is None):
        return RangeCheck(state=RangeState.INVALID, error=messages("range_notNumber"))

    if low is None or high is None:
        return RangeCheck(state=RangeState.UNSET)

    if low >= high:
        return RangeCheck(
            state=RangeState.INVALID,
            low=low,
            high=high,
            error=messages("range_lowNotBelowHigh"),
        )

    if low < option.min or high > option.max:
        return RangeCheck(
            state=RangeState.INVALID,
            low=low,
            high=high,
            error=messages(
                "range_outOfBounds",
                {
                    "min": _format_number(option.min),
                    "max": _format_number(option.max),
                    "unit": option.unit,
                },
            ),
        )

    if _below(high - low, option.min_span):
        return RangeCheck(
            state=RangeState.INVALID,
            low=low,
            high=high,
            error=messages(
                "range_spanTooSmall",
                {"min_span": _format_number(option.min_span), "unit": option.unit},
            ),
        )

    return RangeCheck(state=RangeState.VALID, low=low, high=high)


def turndown_ratio(option: RangeOption, check: RangeCheck) -> Optional[float]:
    if check.state != RangeState.VALID or not check.span:
        return None
    return option.rated_span / check.span


# --------------------------------------------------------------------------------------
# Accuracy
# --------------------------------------------------------------------------------------


def get_accuracy_info(model: TransmitterModel, range_code: Optional[str]) -> Optional[AccuracyInfo]:
    if not range_code:
        return None
    return model.ACCURACY.get(range_code)


def accuracy_at(
    info: AccuracyInfo,
    ratio: float,
    messages: MessageLookup = default_messages,
) -> AccuracyResult:
    """
    Evaluate the accuracy curve at ``ratio``.

    Past ``max_ratio`` the ratio itself is rejected. Inside the domain the curve
    may still be undefined, which gives ``value=None`` without an error.
    """
    if ratio > info.max_ratio:
        return AccuracyResult(
            value=None,
            error=messages(
                "range_ratioTooHigh",
                {"ratio": f"{ratio:.2f}", "max_ratio": _format_number(info.max_ratio)},
            ),
        )
    return AccuracyResult(value=info.func(ratio))


def accuracy_curve(info: AccuracyInfo, steps: int = 100) -> List[Tuple[float, float]]:
    """Sample points from ratio 1 to ``max_ratio`` for the accuracy chart."""
    if info.max_ratio <= 1 or steps < 1:
        return []

    points: List[Tuple[float, float]] = []
    for i in range(steps + 1):
        r = 1 + (i / steps) * (info.max_ratio - 1)
        accuracy = info.func(r)
        if accuracy is not None:
            points.append((r, accuracy))
    return points


# --------------------------------------------------------------------------------------
# Performance table
# --------------------------------------------------------------------------------------


def _fixed(value: float, decimals: int = SPEC_DECIMALS) -> str:
    return f"{value:.{decimals}f}"


def performance_specs(
    model: TransmitterModel,
    option: RangeOption,
    ratio: Optional[float],
    messages: MessageLookup = default_messages,
) -> Dict[str, SpecEntry]:
    """Performance table at ``ratio`` (1:1 when ``ratio`` is None)."""
    r = ratio if ratio is not None else 1.0
    specs: Dict[str, SpecEntry] = {}

    info = get_accuracy_info(model, option.code)
    accuracy = info.func(r) if info else None
    specs["accuracy"] = SpecEntry(
        key="accuracy",
        name=messages("spec_accuracy"),
        value=accuracy,
        text=f"±{_fixed(accuracy)} % FS" if accuracy is not None else messages("spec_notApplicable"),
    )

    specs["longTermStability"] = SpecEntry(
        key="longTermStability",
        name=messages("spec_longTermStability"),
        value=LONG_TERM_STABILITY_URL_PERCENT,
        text=(
            f"±{LONG_TERM_STABILITY_URL_PERCENT}% URL / "
            f"{LONG_TERM_STABILITY_YEARS} {messages('spec_years')}"
        ),
    )

    temperature_effect = 0.06 * r + 0.01
    temp_note = messages("spec_tempEffect_note")
    if option.unit == "kPa" and option.max and option.max < 40:
        temp_note = messages("spec_tempEffect_note_doubled")
    specs["temperatureEffect"] = SpecEntry(
        key="temperatureEffect",
        name=messages("spec_temperatureEffect"),
        value=temperature_effect,
        text=f"±{_fixed(temperature_effect)}% FS * N ({temp_note})",
    )

    vibration_effect = 0.03 + 0.0025 * r
    specs["vibrationEffect"] = SpecEntry(
        key="vibrationEffect",
        name=messages("spec_vibrationEffect"),
        value=vibration_effect,
        text=f"±{_fixed(vibration_effect)} % FS",
    )

    power_supply_effect = 0.025 + 0.0025 * r
    specs["powerSupplyEffect"] = SpecEntry(
        key="powerSupplyEffect",
        name=messages("spec_powerSupplyEffect"),
        value=power_supply_effect,
        text=f"±{_fixed(power_supply_effect)} % FS",
    )

    static = model.STATIC_PRESSURE_EFFECTS.get(option.code)
    if static is not None:
        per_ratio, reference = static
        static_effect = per_ratio * r
        specs["staticPressureEffect"] = SpecEntry(
            key="staticPressureEffect",
            name=messages("spec_staticPressureEffect"),
            value=static_effect,
            text=f"±{_fixed(static_effect, STATIC_PRESSURE_DECIMALS)}% FS / {reference}",
        )

    return specs


def evaluate(
    model: TransmitterModel,
    selections: Mapping[str, str],
    calibrated_range: Optional[CalibratedRange] = None,
    messages: MessageLookup = default_messages,
) -> PerformanceReport:
    """
    Validate the custom range and compute the performance table.

    Never raises for user input: every failure comes back in ``error`` with an
    empty ``specs``.
    """
    option = model.selected_range(selections)
    if option is None:
        return PerformanceReport(
            state=PerformanceState.NO_RANGE, error=messages("range_notSelected")
        )

    check = check_calibrated_range(option, calibrated_range, messages)
    if check.state == RangeState.INVALID:
        return PerformanceReport(state=PerformanceState.INVALID, error=check.error)

    if check.state == RangeState.UNSET:
        return PerformanceReport(
            state=PerformanceState.NOMINAL,
            specs=performance_specs(model, option, None, messages),
        )

    ratio = turndown_ratio(option, check)
    info = get_accuracy_info(model, option.code)
    if info is not None:
        result = accuracy_at(info, ratio, messages)
        if result.error:
            logger.info(
                "Turndown %.3f over limit %s for %s/%s",
                ratio,
                info.max_ratio,
                model.id,
                option.code,
            )
            return PerformanceReport(
                state=PerformanceState.INVALID, ratio=ratio, error=result.error
            )

    return PerformanceReport(
        state=PerformanceState.CALIBRATED,
        specs=performance_specs(model, option, ratio, messages),
        ratio=ratio,
    )
