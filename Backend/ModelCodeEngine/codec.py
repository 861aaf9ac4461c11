# Backend/ModelCodeEngine/codec.py

"""
Model code <-> selections.

Encoding concatenates option codes in category sequence order:

    line 1         BASE_CODE + required codes
    line 2         additional codes
    manifold code  SS2000- + valve-count tag + manifold-spectrum codes

Decoding is a greedy longest-prefix match. Required categories are positional:
the first one that fails to match ends required decoding. Whatever is left is
then matched against every unfilled additional / manifold category in any
order, longest codes first. Text that matches nothing is reported back in
``unmatched`` and otherwise ignored.
"""

import logging
import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple

from .catalog import (
    MANIFOLD_SPECTRUM_ORDER,
    NO_MANIFOLD,
    CategoryId,
    Part,
    SelectionCategory,
    Selections,
    TransmitterModel,
    list_models,
)
from .messages import MessageLookup, default_messages
from .performance import CalibratedRange, RangeState, check_calibrated_range
from .shared_segments import MANIFOLD_CODE_PREFIX, MANIFOLD_TYPE_TAGS


logger = logging.getLogger(__name__)


DASHES = re.compile("[–—]")
WHITESPACE = re.compile(r"\s+")
SERIES_PREFIX = re.compile(r"^[A-Z]+")
LEADING_NUMBER = re.compile(r"^[A-Z]*(\d+)")


# --------------------------------------------------------------------------------------
# Result types
# --------------------------------------------------------------------------------------


@dataclass(frozen=True)
class EncodedCode:
    line1: str
    line2: str
    manifold_code: Optional[str]
    transmitter_line3: str
    transmitter_line4: str
    line3_calibrated: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            "line1": self.line1,
            "line2": self.line2,
            "manifold_code": self.manifold_code,
            "transmitter_line3": self.transmitter_line3,
            "transmitter_line4": self.transmitter_line4,
            "line3_calibrated": self.line3_calibrated,
        }


class DecodeStatus(str, Enum):
    COMPLETE = "complete"
    PARTIAL = "partial"
    UNRECOGNIZED = "unrecognized"


@dataclass
class DecodeResult:
    model_id: Optional[str]
    selections: Selections = field(default_factory=dict)
    status: DecodeStatus = DecodeStatus.COMPLETE
    unmatched: str = ""
    stopped_at: Optional[str] = None
    manifold_tag: Optional[str] = None
    error: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "model_id": self.model_id,
            "selections": dict(self.selections),
            "status": self.status.value,
            "unmatched": self.unmatched,
            "stopped_at": self.stopped_at,
            "manifold_tag": self.manifold_tag,
            "error": self.error,
        }


# --------------------------------------------------------------------------------------
# Encode
# --------------------------------------------------------------------------------------


def _concat(categories: Iterable[SelectionCategory], selections: Mapping[str, str]) -> str:
    return "".join(selections.get(category.id) or "" for category in categories)


def manifold_type_tag(code: Optional[str]) -> str:
    if not code:
        return ""
    return MANIFOLD_TYPE_TAGS.get(code, "")


def encode_manifold(selections: Mapping[str, str]) -> Optional[str]:
    manifold = selections.get(CategoryId.MANIFOLD)
    if not manifold or manifold == NO_MANIFOLD:
        return None

    spectrum = "".join(selections.get(category_id) or "" for category_id in MANIFOLD_SPECTRUM_ORDER)
    return f"{MANIFOLD_CODE_PREFIX}{manifold_type_tag(manifold)}{spectrum}"


def encode(
    model: TransmitterModel,
    selections: Mapping[str, str],
    calibrated_range: Optional[CalibratedRange] = None,
    special_request: str = "",
    messages: MessageLookup = default_messages,
) -> EncodedCode:
    """
    Build the transmitter lines and the manifold code from a selection map.

    Every display / clipboard / JSON / PDF output must be built from this
    result so the exported artifacts never drift apart.
    """
    line1 = model.BASE_CODE + _concat(model.categories(Part.REQUIRED), selections)
    line2 = _concat(model.categories(Part.ADDITIONAL), selections)

    range_option = model.selected_range(selections)
    line3_calibrated = False
    if range_option is None:
        line3 = messages("line3_selectRange")
    else:
        check = check_calibrated_range(range_option, calibrated_range, messages)
        if check.state == RangeState.VALID:
            line3 = (
                f"{calibrated_range.low.strip()} ~ {calibrated_range.high.strip()} "
                f"{range_option.unit}"
            )
            line3_calibrated = True
        else:
            line3 = range_option.description

    return EncodedCode(
        line1=line1,
        line2=line2,
        manifold_code=encode_manifold(selections),
        transmitter_line3=line3,
        transmitter_line4=special_request or "",
        line3_calibrated=line3_calibrated,
    )


# --------------------------------------------------------------------------------------
# Decode helpers
# --------------------------------------------------------------------------------------


def normalize_code(raw_code: Optional[str]) -> str:
    """Uppercase, en/em dashes to hyphens, all whitespace removed."""
    text = (raw_code or "").upper()
    text = DASHES.sub("-", text)
    return WHITESPACE.sub("", text)


def model_prefixes(models: Iterable[TransmitterModel]) -> List[Tuple[str, TransmitterModel]]:
    """
    Every prefix a pasted code may start with, paired with its model.

    Each base code counts with and without hyphens, and without its series
    letters ("2300-A"). The bare model number ("2300") only counts when a
    single model in the catalog carries it.
    """
    models = list(models)
    candidates: List[Tuple[str, TransmitterModel]] = []
    numbers: Dict[str, List[TransmitterModel]] = {}

    for model in models:
        base = model.BASE_CODE.upper()
        series_stripped = SERIES_PREFIX.sub("", base)
        forms = {base, base.replace("-", ""), series_stripped, series_stripped.replace("-", "")}
        for form in sorted(forms):
            if form:
                candidates.append((form, model))

        number = LEADING_NUMBER.match(base)
        if number:
            numbers.setdefault(number.group(1), []).append(model)

    for number, owners in numbers.items():
        if len(owners) == 1:
            candidates.append((number, owners[0]))

    return candidates


def detect_model(
    text: str, models: Iterable[TransmitterModel]
) -> Optional[Tuple[TransmitterModel, str]]:
    best: Optional[Tuple[TransmitterModel, str]] = None
    for prefix, model in model_prefixes(models):
        if text.startswith(prefix) and (best is None or len(prefix) > len(best[1])):
            best = (model, prefix)
    return best


def match_option(category: SelectionCategory, remainder: str) -> Optional[Tuple[str, int]]:
    """
    Longest option of ``category`` at the start of ``remainder``.

    A code ending in "-" also matches without its hyphen. Returns the option
    code and the number of characters consumed.
    """
    best: Optional[Tuple[str, int, bool]] = None
    for option in category.options:
        code = option.code
        if remainder.startswith(code):
            candidate = (code, len(code), True)
        elif len(code) > 1 and code.endswith("-") and remainder.startswith(code[:-1]):
            candidate = (code, len(code) - 1, False)
        else:
            continue

        if best is None or (candidate[1], candidate[2]) > (best[1], best[2]):
            best = candidate

    if best is None:
        return None
    return best[0], best[1]


def _decode_sequential(
    categories: Iterable[SelectionCategory],
    remainder: str,
    selections: Dict[str, str],
) -> Tuple[str, Optional[str]]:
    """
    Walk ``categories`` in order; stop at the first one without a match.

    Returns the unconsumed text and the id of the category decoding stopped at.
    """
    for category in categories:
        match = match_option(category, remainder)
        if match is None:
            return remainder, category.id
        code, consumed = match
        selections[category.id] = code
        remainder = remainder[consumed:]
    return remainder, None


def _decode_unordered(
    categories: Iterable[SelectionCategory],
    remainder: str,
    selections: Dict[str, str],
) -> str:
    pool = [
        (option.code, category.id)
        for category in categories
        if category.id not in selections
        for option in category.options
    ]
    # Stable sort keeps catalog order among codes of equal length.
    pool.sort(key=lambda item: len(item[0]), reverse=True)

    while remainder:
        for code, category_id in pool:
            if category_id not in selections and remainder.startswith(code):
                selections[category_id] = code
                remainder = remainder[len(code):]
                break
        else:
            break

    return remainder


def _status(unmatched: str, stopped_at: Optional[str]) -> DecodeStatus:
    if unmatched or stopped_at:
        return DecodeStatus.PARTIAL
    return DecodeStatus.COMPLETE


def _additional_categories(model: TransmitterModel) -> List[SelectionCategory]:
    return [
        category
        for category in model.configuration
        if category.part in (Part.ADDITIONAL, Part.MANIFOLD)
    ]


# --------------------------------------------------------------------------------------
# Decode
# --------------------------------------------------------------------------------------


def decode(
    raw_code: str,
    models: Optional[Iterable[TransmitterModel]] = None,
    messages: MessageLookup = default_messages,
) -> DecodeResult:
    """
    Parse a pasted model code into a selection map.

    The model is detected from the longest recognised prefix. Decoding is best
    effort: whatever matched is kept, and ``status`` tells the host whether the
    whole code was understood.
    """
    text = normalize_code(raw_code)
    candidates = list(models) if models is not None else list_models()

    detected = detect_model(text, candidates)
    if detected is None:
        logger.info("Decode: model not recognized in %r", raw_code)
        return DecodeResult(
            model_id=None,
            status=DecodeStatus.UNRECOGNIZED,
            unmatched=text,
            error=messages("decode_modelNotRecognized", {"code": (raw_code or "").strip()}),
        )

    model, prefix = detected
    remainder = text[len(prefix):].lstrip("-")
    selections: Selections = {}

    remainder, stopped_at = _decode_sequential(
        model.categories(Part.REQUIRED), remainder, selections
    )
    remainder = _decode_unordered(_additional_categories(model), remainder, selections)

    status = _status(remainder, stopped_at)
    if status == DecodeStatus.PARTIAL:
        logger.info(
            "Decode: partial match for %s (stopped_at=%s unmatched=%r)",
            model.id,
            stopped_at,
            remainder,
        )

    return DecodeResult(
        model_id=model.id,
        selections=selections,
        status=status,
        unmatched=remainder,
        stopped_at=stopped_at,
    )


def decode_segments(
    model: TransmitterModel,
    required_code: Optional[str] = None,
    additional_code: Optional[str] = None,
    selections: Optional[Mapping[str, str]] = None,
) -> DecodeResult:
    """
    Quick-configuration decode of line 1 and / or line 2 for a known model.

    Starts from ``selections``. A given required code replaces every required
    category (those after a miss end up unset); a given additional code
    replaces every additional and manifold category. The base code in front of
    a required code is optional.
    """
    updated: Selections = dict(selections or {})
    unmatched = ""
    stopped_at: Optional[str] = None

    if required_code is not None:
        required = model.categories(Part.REQUIRED)
        for category in required:
            updated.pop(category.id, None)

        remainder = normalize_code(required_code)
        for prefix in (model.BASE_CODE.upper(), model.BASE_CODE.upper().replace("-", "")):
            if remainder.startswith(prefix):
                remainder = remainder[len(prefix):].lstrip("-")
                break
        remainder, stopped_at = _decode_sequential(required, remainder, updated)
        unmatched += remainder

    if additional_code is not None:
        additional = _additional_categories(model)
        for category in additional:
            updated.pop(category.id, None)
        unmatched += _decode_unordered(additional, normalize_code(additional_code), updated)

    return DecodeResult(
        model_id=model.id,
        selections=updated,
        status=_status(unmatched, stopped_at),
        unmatched=unmatched,
        stopped_at=stopped_at,
    )


def decode_manifold(
    model: TransmitterModel,
    manifold_code: str,
    messages: MessageLookup = default_messages,
) -> DecodeResult:
    """
    Parse an SS2000 manifold code back into the manifold-spectrum categories.

    Only the spectrum is returned: the valve-count tag cannot tell an assembled
    manifold from a loose one, so it comes back as ``manifold_tag``.
    """
    text = normalize_code(manifold_code)
    prefix = MANIFOLD_CODE_PREFIX.upper()

    if text.startswith(prefix):
        remainder = text[len(prefix):]
    elif text.startswith(prefix.rstrip("-")):
        remainder = text[len(prefix.rstrip("-")):]
    else:
        return DecodeResult(
            model_id=model.id,
            status=DecodeStatus.UNRECOGNIZED,
            unmatched=text,
            error=messages("decode_manifoldNotRecognized", {"code": (manifold_code or "").strip()}),
        )

    tag = None
    for candidate in sorted(set(MANIFOLD_TYPE_TAGS.values())):
        if remainder.startswith(candidate):
            tag = candidate
            remainder = remainder[len(candidate):]
            break

    selections: Selections = {}
    stopped_at: Optional[str] = None
    if tag is None:
        stopped_at = CategoryId.MANIFOLD
    else:
        spectrum = [model.get_category(category_id) for category_id in MANIFOLD_SPECTRUM_ORDER]
        remainder, stopped_at = _decode_sequential(spectrum, remainder, selections)

    return DecodeResult(
        model_id=model.id,
        selections=selections,
        status=_status(remainder, stopped_at),
        unmatched=remainder,
        stopped_at=stopped_at,
        manifold_tag=tag,
    )


if __name__ == "__main__":
    print("RTX model code decoder ready.")
    print("Paste a model code (line 1 and line 2 may be joined). Type q to quit.")
    print()

    while True:
        raw = input("Model code: ").strip()

        if raw.lower() in ("q", "quit", "exit"):
            break

        result = decode(raw)
        if result.error:
            print(f"Error: {result.error}")
            print()
            continue

        print(f"Model: {result.model_id}  Status: {result.status.value}")
        for category_id, code in result.selections.items():
            print(f"  {category_id}: {code}")
        if result.unmatched:
            print(f"  Unmatched: {result.unmatched}")
        print()
