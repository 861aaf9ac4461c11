# Backend/ModelCodeEngine/selection.py

import logging
from typing import Dict, Mapping, Optional

from .catalog import (
    NO_MANIFOLD,
    NO_WELD_NECK,
    CategoryId,
    Part,
    Selections,
    TransmitterModel,
)


logger = logging.getLogger(__name__)


def new_selections() -> Selections:
    return {}


def reset_for_model(
    old_model: Optional[TransmitterModel],
    new_model: TransmitterModel,
    selections: Mapping[str, str],
) -> Selections:
    """Selections never carry over between models."""
    if old_model is not None and old_model.id == new_model.id:
        return dict(selections)
    return new_selections()


def _clear_manifold_spectrum(model: TransmitterModel, selections: Dict[str, str]) -> None:
    for category in model.categories(Part.MANIFOLD):
        selections.pop(category.id, None)


def apply_selection(
    model: TransmitterModel,
    selections: Mapping[str, str],
    category_id: str,
    code: str,
) -> Selections:
    """
    Return a new selection map with ``code`` picked in ``category_id``.

    Cascades:
      - picking "no manifold" drops every manifold-spectrum entry
      - on models where manifold and weld neck exclude each other, a real
        manifold forces the weld neck to "none", and a real weld neck forces
        the manifold to "none" (dropping the spectrum as above)

    The input map is never modified. When the pressure range changes the host
    must also clear its custom calibrated range (see range_changed).
    """
    updated: Selections = dict(selections)
    updated[category_id] = code

    if category_id == CategoryId.MANIFOLD and code == NO_MANIFOLD:
        _clear_manifold_spectrum(model, updated)

    if model.MANIFOLD_WELD_NECK_EXCLUSIVE:
        if category_id == CategoryId.MANIFOLD and code != NO_MANIFOLD:
            updated[CategoryId.WELD_NECK] = NO_WELD_NECK

        if category_id == CategoryId.WELD_NECK and code != NO_WELD_NECK:
            updated[CategoryId.MANIFOLD] = NO_MANIFOLD
            _clear_manifold_spectrum(model, updated)

    logger.debug("Selection %s=%s applied on %s", category_id, code, model.id)
    return updated


def range_changed(old: Mapping[str, str], new: Mapping[str, str]) -> bool:
    return old.get(CategoryId.PRESSURE_RANGE) != new.get(CategoryId.PRESSURE_RANGE)


def manifold_categories_visible(selections: Mapping[str, str]) -> bool:
    manifold = selections.get(CategoryId.MANIFOLD)
    return bool(manifold) and manifold != NO_MANIFOLD
