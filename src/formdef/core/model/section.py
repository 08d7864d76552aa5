from typing import List, Optional

from formdef import logger
from formdef.error import TypeDefinitionNotFoundError, TypeDefinitionNotValidError
from formdef.helper import load_class

from .element import FormElementInterface
from .renderable import AbstractRenderable, CompositeRenderable


class AbstractSection(CompositeRenderable):
    ''' A composite that holds form elements: pages and sections '''

    def get_elements(self) -> List[AbstractRenderable]:
        return self.get_renderables()

    def get_elements_recursively(self) -> List[AbstractRenderable]:
        return self.get_renderables_recursively()

    def add_element(self, form_element: AbstractRenderable):
        self.add_renderable(form_element)

    def create_element(self, identifier: str, type_name: str, options: Optional[dict] = None):
        """
        Create a form element of the given type and add it to this section.

        The merged type definition is looked up in the root form. Its
        `implementationClassName` is instantiated, the element gets attached
        and the remaining definition keys are applied as options.
        """
        form_definition = self.get_root_form()
        type_definition = form_definition.get_type_definition(type_name)

        implementation = type_definition.pop('implementationClassName', None)
        if not implementation:
            raise TypeDefinitionNotFoundError(
                "T01.401", f"The \"implementationClassName\" was not set in type definition [{type_name}]."
            )

        try:
            element_class = load_class(implementation)
        except ImportError as e:
            raise TypeDefinitionNotValidError(
                "T02.503", f"The implementation class [{implementation}] of type [{type_name}] could not be loaded.", str(e)
            ) from e

        if not issubclass(element_class, FormElementInterface) or not issubclass(element_class, AbstractRenderable):
            raise TypeDefinitionNotValidError(
                "T02.504",
                f"The \"implementationClassName\" for element [{identifier}] ([{element_class.__name__}]) does not implement FormElementInterface."
            )

        type_definition.pop('formEditor', None)
        element = element_class(identifier, type_name)
        self.add_element(element)
        element.set_options(type_definition)
        if options:
            element.set_options(options)

        element.initialize_form_element()
        logger.debug('Created element [%s] of type [%s] in [%s]', identifier, type_name, self._identifier)
        return element

    def move_element_before(self, element_to_move: AbstractRenderable, reference_element: AbstractRenderable):
        self.move_renderable_before(element_to_move, reference_element)

    def move_element_after(self, element_to_move: AbstractRenderable, reference_element: AbstractRenderable):
        self.move_renderable_after(element_to_move, reference_element)

    def remove_element(self, element_to_remove: AbstractRenderable):
        self.remove_renderable(element_to_remove)
