from formdef.error import FormDefinitionConsistencyError

from .section import AbstractSection


PAGE_TYPE = 'Formdef:Page'
PAGE_OPTION_KEYS = ('label', 'renderingOptions', 'rendererClassName', 'formEditor')


class Page(AbstractSection):
    ''' A page is the top-level section of a form, shown as one step '''
    option_keys = PAGE_OPTION_KEYS

    def __init__(self, identifier: str, type: str = PAGE_TYPE):
        super().__init__(identifier, type)

    def set_parent_renderable(self, parent_renderable):
        from .form_definition import FormDefinition

        if not isinstance(parent_renderable, FormDefinition):
            raise FormDefinitionConsistencyError(
                "F03.505",
                f"Page [{self._identifier}] can only be added to a FormDefinition, got [{type(parent_renderable).__name__}]."
            )

        super().set_parent_renderable(parent_renderable)
