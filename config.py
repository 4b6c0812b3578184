"""Library configuration.

Binding defaults can be supplied through an external ``TOML`` file so that
command line runs and host applications can change the class map or the
missing-constructor policy without patching code.  ``XML_BINDER_CONFIG`` is
read first; when it is unset a ``config.toml`` next to this module is used if
present.  The constants below are the defaults used when neither exists.
"""

from __future__ import annotations

import os
import pytoml

_CONFIG_PATH = os.environ.get(
    "XML_BINDER_CONFIG",
    os.path.join(os.path.dirname(__file__), "config.toml"),
)

if os.path.exists(_CONFIG_PATH):
    with open(_CONFIG_PATH, "r", encoding="utf-8") as _cfg:
        _CONF = pytoml.load(_cfg)
else:
    _CONF = {}

# Element name -> constructor identifier.  Unmapped names construct with a
# constructor of the same name.
CLASS_MAP: dict = {}

# One of "error", "exception", "null" or "object".  See
# :class:`xml_object_binder.registry.MissingConstructorPolicy`.
MISSING_CONSTRUCTOR_POLICY: str = "error"

# Default log level used by :class:`~xml_object_binder.materializer.Materializer`.
LOG_LEVEL: str = "INFO"

# Override with TOML values if provided
CLASS_MAP = dict(_CONF.get("CLASS_MAP", CLASS_MAP))
MISSING_CONSTRUCTOR_POLICY = str(
    _CONF.get("MISSING_CONSTRUCTOR_POLICY", MISSING_CONSTRUCTOR_POLICY)
)
LOG_LEVEL = _CONF.get("LOG_LEVEL", LOG_LEVEL)
