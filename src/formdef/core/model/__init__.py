from .renderable import AbstractRenderable, CompositeRenderable
from .element import AbstractFormElement, FormElementInterface
from .section import AbstractSection
from .page import Page
from .processing_rule import ProcessingRule
from .type_resolver import SupertypeResolver
from .form_definition import FormDefinition

__all__ = (
    "AbstractFormElement",
    "AbstractRenderable",
    "AbstractSection",
    "CompositeRenderable",
    "FormDefinition",
    "FormElementInterface",
    "Page",
    "ProcessingRule",
    "SupertypeResolver",
)
