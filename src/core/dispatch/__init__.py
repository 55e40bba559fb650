from core.dispatch.loader import default_dispatch_table, load_dispatch_table
from core.dispatch.models import (
    DispatchTable,
    ServiceEndpoint,
    VocabularyRoute,
    normalize_locale,
)

__all__ = [
    "DispatchTable",
    "ServiceEndpoint",
    "VocabularyRoute",
    "default_dispatch_table",
    "load_dispatch_table",
    "normalize_locale",
]
