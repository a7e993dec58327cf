"""Release-request form: catalog, state, validation and synchronizers."""

from .catalog import DEFAULT_CATALOG, DEPARTMENTS, DepartmentCatalog
from .model import FormState
from .release_form import ReleaseForm
from .validation import FormErrors, validate
from .variants import RELEASE, WELCOME, FormVariant, get_variant

__all__ = [
    "DEFAULT_CATALOG",
    "DEPARTMENTS",
    "DepartmentCatalog",
    "FormErrors",
    "FormState",
    "FormVariant",
    "RELEASE",
    "ReleaseForm",
    "WELCOME",
    "get_variant",
    "validate",
]
