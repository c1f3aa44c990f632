from ._materialize import EXCLUDED_DIRS, materialize
from ._placeholders import camelize, derive_bindings, slugify, substitute

__all__ = [
    "EXCLUDED_DIRS",
    "camelize",
    "derive_bindings",
    "materialize",
    "slugify",
    "substitute",
]
