"""
Form Definition

The root of a form tree. It owns the configuration the tree is built from
(form element types, validator presets, finisher presets), the pages, the
finishers, the processing rules per property path and an index of all form
elements by identifier.

Usage:
    form = FormDefinition('contact', form_defaults)
    page = form.create_page('page1')
    name = page.create_element('name', 'Formdef:SingleLineText')
    name.create_validator('NotEmpty')
"""
from typing import Any, Dict, List, Optional

from formdef import logger
from formdef.error import (
    DuplicateFormElementError,
    FinisherPresetNotFoundError,
    FormDefinitionConsistencyError,
    PageNotFoundError,
    TypeDefinitionNotFoundError,
    TypeDefinitionNotValidError,
)
from formdef.finishers import AbstractFinisher, FinisherRegistry
from formdef.helper import get_by_path, load_class, merge_recursive, set_by_path

from .element import FormElementInterface
from .page import PAGE_TYPE, Page
from .processing_rule import ProcessingRule
from .renderable import AbstractRenderable, CompositeRenderable
from .type_resolver import SupertypeResolver


FORM_TYPE = 'Formdef:Form'
FORM_OPTION_KEYS = ('label', 'rendererClassName', 'renderingOptions', 'finishers', 'formEditor')


class FormDefinition(CompositeRenderable):
    option_keys = FORM_OPTION_KEYS

    def __init__(self, identifier: str, form_defaults: Optional[dict] = None, type: str = FORM_TYPE):
        super().__init__(identifier, type)
        form_defaults = form_defaults or {}

        self._type_resolver = SupertypeResolver(form_defaults.get('formElementTypes') or {})
        self._validator_presets: Dict[str, dict] = dict(form_defaults.get('validatorPresets') or {})
        self._finisher_presets: Dict[str, dict] = dict(form_defaults.get('finisherPresets') or {})

        self._finishers: List[AbstractFinisher] = []
        self._processing_rules: Dict[str, ProcessingRule] = {}
        self._elements_by_identifier: Dict[str, AbstractRenderable] = {}
        self._element_default_values: Dict[str, Any] = {}

        self._initialize_from_form_defaults()

    def _initialize_from_form_defaults(self):
        if not self._type_resolver.has_type(self._type):
            return

        type_definition = self._type_resolver.get_merged_type_definition(self._type)
        type_definition.pop('implementationClassName', None)
        self.set_options(type_definition)

    def set_options(self, options: Dict[str, Any]):
        options = dict(options)
        finishers = options.pop('finishers', None) or ()
        super().set_options(options)

        for finisher_config in finishers:
            self.create_finisher(finisher_config.get('identifier'), finisher_config.get('options'))

    @property
    def type_resolver(self) -> SupertypeResolver:
        return self._type_resolver

    @property
    def validator_presets(self) -> Dict[str, dict]:
        return self._validator_presets

    @property
    def finisher_presets(self) -> Dict[str, dict]:
        return self._finisher_presets

    def get_type_definition(self, type_name: str) -> dict:
        return self._type_resolver.get_merged_type_definition(type_name)

    # Pages

    def create_page(self, identifier: str, type_name: str = PAGE_TYPE) -> Page:
        type_definition = self.get_type_definition(type_name)
        implementation = type_definition.pop('implementationClassName', None)
        if not implementation:
            raise TypeDefinitionNotFoundError(
                "T01.404", f"The \"implementationClassName\" was not set in type definition [{type_name}]."
            )

        try:
            page_class = load_class(implementation)
        except ImportError as e:
            raise TypeDefinitionNotValidError(
                "T02.505", f"The implementation class [{implementation}] of type [{type_name}] could not be loaded.", str(e)
            ) from e

        if not issubclass(page_class, Page):
            raise TypeDefinitionNotValidError(
                "T02.506", f"The \"implementationClassName\" for page [{identifier}] ([{page_class.__name__}]) is not a Page."
            )

        type_definition.pop('formEditor', None)
        page = page_class(identifier, type_name)
        self.add_page(page)
        page.set_options(type_definition)
        return page

    def add_page(self, page: Page):
        self.add_renderable(page)

    def get_pages(self) -> List[Page]:
        return self.get_renderables()

    def has_page_with_index(self, index: int) -> bool:
        return 0 <= index < len(self._renderables)

    def get_page_by_index(self, index: int) -> Page:
        if not self.has_page_with_index(index):
            raise PageNotFoundError(
                "F04.401", f"There is no page with an index of {index}.", index
            )

        return self._renderables[index]

    def move_page_before(self, page_to_move: Page, reference_page: Page):
        self.move_renderable_before(page_to_move, reference_page)

    def move_page_after(self, page_to_move: Page, reference_page: Page):
        self.move_renderable_after(page_to_move, reference_page)

    def remove_page(self, page_to_remove: Page):
        self.remove_renderable(page_to_remove)

    # Finishers

    def add_finisher(self, finisher: AbstractFinisher):
        self._finishers.append(finisher)

    def create_finisher(self, finisher_identifier: str, options: Optional[dict] = None) -> AbstractFinisher:
        preset = self._finisher_presets.get(finisher_identifier)
        if not isinstance(preset, dict) or not preset.get('implementationClassName'):
            raise FinisherPresetNotFoundError(
                "N01.401", f"The finisher preset [{finisher_identifier}] could not be found or has no implementationClassName."
            )

        try:
            finisher_class = load_class(preset['implementationClassName'], FinisherRegistry)
        except ImportError as e:
            raise FinisherPresetNotFoundError(
                "N01.402", f"The finisher class [{preset['implementationClassName']}] could not be loaded.", str(e)
            ) from e

        finisher = finisher_class(merge_recursive(preset.get('options'), options))
        self.add_finisher(finisher)
        return finisher

    def get_finishers(self) -> List[AbstractFinisher]:
        return list(self._finishers)

    # Element registry

    def register_renderable(self, renderable: AbstractRenderable):
        if not isinstance(renderable, FormElementInterface):
            return

        existing = self._elements_by_identifier.get(renderable.identifier)
        if existing is not None and existing is not renderable:
            raise DuplicateFormElementError(
                "F02.401", f"A form element with identifier [{renderable.identifier}] is already part of the form."
            )

        self._elements_by_identifier[renderable.identifier] = renderable
        logger.debug('Registered element [%s] in form [%s]', renderable.identifier, self._identifier)

    def unregister_renderable(self, renderable: AbstractRenderable):
        if self._elements_by_identifier.get(renderable.identifier) is renderable:
            del self._elements_by_identifier[renderable.identifier]

    def get_element_by_identifier(self, element_identifier: str) -> Optional[AbstractRenderable]:
        return self._elements_by_identifier.get(element_identifier)

    def get_elements(self) -> Dict[str, AbstractRenderable]:
        return dict(self._elements_by_identifier)

    def add_element_default_value(self, element_identifier: str, default_value: Any):
        set_by_path(self._element_default_values, element_identifier, default_value)

    def get_element_default_value_by_identifier(self, element_identifier: str) -> Any:
        return get_by_path(self._element_default_values, element_identifier)

    # Processing rules

    def get_processing_rule(self, property_path: str) -> ProcessingRule:
        if property_path not in self._processing_rules:
            self._processing_rules[property_path] = ProcessingRule(property_path)

        return self._processing_rules[property_path]

    def get_processing_rules(self) -> Dict[str, ProcessingRule]:
        return dict(self._processing_rules)

    def set_parent_renderable(self, parent_renderable):
        raise FormDefinitionConsistencyError(
            "F03.506", f"A form definition [{self._identifier}] cannot be nested in another renderable."
        )

    def get_root_form(self):
        return self

    def bind(self, request: Optional[dict] = None):
        ''' Bind the form to submitted request data, returning a runtime for one request cycle '''
        from formdef.core.runtime import FormRuntime

        return FormRuntime(self, request)
