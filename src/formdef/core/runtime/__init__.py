from .state import FormState, NOPAGE
from .runtime import FormRuntime, FormRuntimeResponse

__all__ = ("FormRuntime", "FormRuntimeResponse", "FormState", "NOPAGE")
