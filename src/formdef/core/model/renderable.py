"""
Renderables

Everything that is part of a form tree is a renderable: the form definition
itself, its pages, sections and form elements. A renderable knows its parent
and registers itself in the root form as soon as it becomes reachable from
one, so elements can be looked up by identifier.
"""
from typing import Any, Dict, List, Optional

from formdef.error import (
    FormDefinitionConsistencyError,
    IdentifierNotValidError,
    TypeDefinitionNotValidError,
    ValidatorPresetNotFoundError,
)
from formdef.helper import invalid_keys, load_class, merge_recursive
from formdef.validation import AbstractValidator, ValidatorRegistry


RENDERABLE_OPTION_KEYS = (
    'label',
    'defaultValue',
    'properties',
    'renderingOptions',
    'validators',
    'rendererClassName',
    'formEditor',
)


class AbstractRenderable(object):
    option_keys = RENDERABLE_OPTION_KEYS

    def __init__(self, identifier: str, type: Optional[str] = None):
        if not isinstance(identifier, str) or not identifier:
            raise IdentifierNotValidError(
                "F01.401",
                "The given identifier was not a string or the string was empty.",
                repr(identifier)
            )

        self._identifier = identifier
        self._type = type
        self._parent_renderable: Optional["CompositeRenderable"] = None
        self._label = ''
        self._renderer_class_name: Optional[str] = None
        self._rendering_options: Dict[str, Any] = {}
        self._index = 0

    @property
    def identifier(self) -> str:
        return self._identifier

    @property
    def type(self) -> Optional[str]:
        return self._type

    @property
    def label(self) -> str:
        return self._label

    @label.setter
    def label(self, label: str):
        self._label = label

    @property
    def index(self) -> int:
        return self._index

    @index.setter
    def index(self, index: int):
        self._index = index

    @property
    def parent_renderable(self) -> Optional["CompositeRenderable"]:
        return self._parent_renderable

    @property
    def renderer_class_name(self) -> Optional[str]:
        ''' Falls back to the parent's renderer when none is set on this renderable '''
        if self._renderer_class_name is None and self._parent_renderable is not None:
            return self._parent_renderable.renderer_class_name

        return self._renderer_class_name

    @renderer_class_name.setter
    def renderer_class_name(self, renderer_class_name: Optional[str]):
        self._renderer_class_name = renderer_class_name

    @property
    def rendering_options(self) -> Dict[str, Any]:
        return dict(self._rendering_options)

    def set_rendering_option(self, key: str, value: Any):
        self._rendering_options[key] = value

    def get_template_name(self) -> str:
        ''' The type name without its namespace, e.g. `SingleLineText` for `Formdef:SingleLineText` '''
        return (self._type or '').rpartition(':')[2]

    def set_options(self, options: Dict[str, Any]):
        unknown = invalid_keys(options, self.option_keys)
        if unknown:
            raise TypeDefinitionNotValidError(
                "T02.501",
                f"The options [{', '.join(unknown)}] are not allowed for [{self._identifier}] of type [{self._type}].",
                unknown
            )

        if 'label' in options:
            self.label = options['label']

        if 'defaultValue' in options:
            self.default_value = options['defaultValue']

        for key, value in (options.get('properties') or {}).items():
            self.set_property(key, value)

        if 'rendererClassName' in options:
            self.renderer_class_name = options['rendererClassName']

        for key, value in (options.get('renderingOptions') or {}).items():
            self.set_rendering_option(key, value)

        for validator_config in options.get('validators') or ():
            self.create_validator(validator_config.get('identifier'), validator_config.get('options'))

    def set_property(self, key: str, value: Any):
        raise TypeDefinitionNotValidError(
            "T02.502", f"Renderable [{self._identifier}] does not support properties."
        )

    def create_validator(self, validator_identifier: str, options: Optional[dict] = None) -> AbstractValidator:
        form_definition = self.get_root_form()
        presets = form_definition.validator_presets

        preset = presets.get(validator_identifier)
        if not isinstance(preset, dict):
            raise ValidatorPresetNotFoundError(
                "V02.401", f"The validation preset [{validator_identifier}] was not found."
            )

        implementation = preset.get('implementationClassName')
        if not implementation:
            raise ValidatorPresetNotFoundError(
                "V02.402", f"The validation preset [{validator_identifier}] has no implementationClassName."
            )

        try:
            validator_class = load_class(implementation, ValidatorRegistry)
        except ImportError as e:
            raise ValidatorPresetNotFoundError(
                "V02.403", f"The validator class [{implementation}] could not be loaded.", str(e)
            ) from e

        validator = validator_class(merge_recursive(preset.get('options'), options))
        self.add_validator(validator)
        return validator

    def add_validator(self, validator: AbstractValidator):
        raise FormDefinitionConsistencyError(
            "F03.501", f"Renderable [{self._identifier}] does not accept validators."
        )

    def get_root_form(self):
        from .form_definition import FormDefinition

        renderable = self
        while renderable is not None and not isinstance(renderable, FormDefinition):
            renderable = renderable._parent_renderable

        if renderable is None:
            raise FormDefinitionConsistencyError(
                "F03.502", f"The renderable [{self._identifier}] is not attached to a parent form."
            )

        return renderable

    def set_parent_renderable(self, parent_renderable: "CompositeRenderable"):
        self._parent_renderable = parent_renderable
        self.register_in_form_if_possible()

    def register_in_form_if_possible(self):
        try:
            root_form = self.get_root_form()
        except FormDefinitionConsistencyError:
            return

        root_form.register_renderable(self)

    def unregister_from_form(self):
        try:
            root_form = self.get_root_form()
        except FormDefinitionConsistencyError:
            return

        root_form.unregister_renderable(self)

    def on_remove_from_parent_renderable(self):
        self.unregister_from_form()
        self._parent_renderable = None

    def before_rendering(self, runtime):
        ''' Called by the renderer right before this renderable is rendered '''
        pass

    def on_building_finished(self):
        ''' Called by the form factory once the whole form is built '''
        pass

    def __repr__(self):
        return f'<{type(self).__name__} {self._identifier} [{self._type}]>'


class CompositeRenderable(AbstractRenderable):
    def __init__(self, identifier: str, type: Optional[str] = None):
        super().__init__(identifier, type)
        self._renderables: List[AbstractRenderable] = []

    def add_renderable(self, renderable: AbstractRenderable):
        if renderable.parent_renderable is not None:
            raise FormDefinitionConsistencyError(
                "F03.503",
                f"The renderable [{renderable.identifier}] is already attached to [{renderable.parent_renderable.identifier}]."
            )

        renderable.index = len(self._renderables)
        self._renderables.append(renderable)
        try:
            renderable.set_parent_renderable(self)
        except Exception:
            self._renderables.remove(renderable)
            renderable._parent_renderable = None
            raise

    def _assert_child(self, renderable: AbstractRenderable, action: str):
        if renderable.parent_renderable is not self:
            raise FormDefinitionConsistencyError(
                "F03.504",
                f"Cannot {action} [{renderable.identifier}]: it is not attached to [{self._identifier}]."
            )

    def _reindex(self):
        for index, renderable in enumerate(self._renderables):
            renderable.index = index

    def move_renderable_before(self, renderable_to_move: AbstractRenderable, reference_renderable: AbstractRenderable):
        self._assert_child(renderable_to_move, 'move')
        self._assert_child(reference_renderable, 'move relative to')
        if renderable_to_move is reference_renderable:
            return

        self._renderables.remove(renderable_to_move)
        self._renderables.insert(self._renderables.index(reference_renderable), renderable_to_move)
        self._reindex()

    def move_renderable_after(self, renderable_to_move: AbstractRenderable, reference_renderable: AbstractRenderable):
        self._assert_child(renderable_to_move, 'move')
        self._assert_child(reference_renderable, 'move relative to')
        if renderable_to_move is reference_renderable:
            return

        self._renderables.remove(renderable_to_move)
        self._renderables.insert(self._renderables.index(reference_renderable) + 1, renderable_to_move)
        self._reindex()

    def remove_renderable(self, renderable: AbstractRenderable):
        self._assert_child(renderable, 'remove')

        self._renderables.remove(renderable)
        self._reindex()
        renderable.on_remove_from_parent_renderable()

    def get_renderables(self) -> List[AbstractRenderable]:
        return list(self._renderables)

    def get_renderables_recursively(self) -> List[AbstractRenderable]:
        renderables = []
        for renderable in self._renderables:
            renderables.append(renderable)
            if isinstance(renderable, CompositeRenderable):
                renderables.extend(renderable.get_renderables_recursively())

        return renderables

    def register_in_form_if_possible(self):
        super().register_in_form_if_possible()
        for renderable in self._renderables:
            renderable.register_in_form_if_possible()

    def unregister_from_form(self):
        for renderable in self._renderables:
            renderable.unregister_from_form()

        super().unregister_from_form()
