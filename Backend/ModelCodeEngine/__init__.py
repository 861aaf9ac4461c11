# Backend/ModelCodeEngine/__init__.py

"""
Package init for ModelCodeEngine.

This file's job is to import all concrete model modules so that their
@register_model decorators run at import time and populate MODEL_REGISTRY
in catalog.py.

Any new model module should be imported here.
"""

# Import model modules solely for their side effects (registration).
# Each module defines a model class decorated with @register_model(...).

from . import rtx2300a  # noqa: F401
from . import rtx2400g  # noqa: F401
from . import rtx2400k  # noqa: F401
from . import rtx2500d  # noqa: F401

from .catalog import check_registry

check_registry()
