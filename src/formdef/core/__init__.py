from .model import FormDefinition, Page
from .runtime import FormRuntime, FormState

__all__ = ("FormDefinition", "FormRuntime", "FormState", "Page")
