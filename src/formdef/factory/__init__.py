"""
Form Factories

A factory turns a declarative description into a FormDefinition, using a
named preset for the element types, validator presets and finisher presets.

Usage:
    factory = ArrayFormFactory()
    form = factory.build({
        'identifier': 'contact',
        'renderables': [{
            'identifier': 'page1',
            'type': 'Formdef:Page',
            'renderables': [{
                'identifier': 'name',
                'type': 'Formdef:SingleLineText',
                'validators': [{'identifier': 'Formdef:NotEmpty'}],
            }],
        }],
        'finishers': [{'identifier': 'Formdef:Confirmation'}],
    })
"""
import os

from typing import Optional

from formdef import config, logger
from formdef.core.model import AbstractSection, FormDefinition
from formdef.core.model.form_definition import FORM_TYPE
from formdef.core.model.page import PAGE_TYPE
from formdef.error import FormDefinitionConsistencyError, IdentifierNotValidError, PresetNotFoundError
from formdef.helper import load_yaml, merge_recursive


PRESETS_FILE = os.path.join(os.path.dirname(os.path.dirname(__file__)), 'resources', 'presets.yaml')


def load_form_settings(*preset_files) -> dict:
    ''' The bundled settings merged with the given (and configured) preset files '''
    settings = load_yaml(PRESETS_FILE)
    for path in tuple(config.PRESET_FILES or ()) + preset_files:
        logger.info('Loading form presets from [%s]', path)
        settings = merge_recursive(settings, load_yaml(path))

    return settings


def load_form_configuration(path) -> dict:
    return load_yaml(path)


class AbstractFormFactory(object):
    def __init__(self, form_settings: Optional[dict] = None):
        self._form_settings = form_settings if form_settings is not None else load_form_settings()

    @property
    def form_settings(self) -> dict:
        return self._form_settings

    def get_preset_names(self):
        return tuple((self._form_settings.get('presets') or {}).keys())

    def get_preset_configuration(self, preset_name: str, _seen=()) -> dict:
        presets = self._form_settings.get('presets') or {}
        if preset_name not in presets or preset_name in _seen:
            raise PresetNotFoundError(
                "P01.401", f"The preset [{preset_name}] was not defined or is part of a cycle.", list(_seen)
            )

        preset = dict(presets[preset_name] or {})
        parent_preset = preset.pop('parentPreset', None)
        if parent_preset:
            parent = self.get_preset_configuration(parent_preset, _seen + (preset_name,))
            preset = merge_recursive(parent, preset)

        return preset

    def build(self, configuration: dict, preset_name: Optional[str] = None) -> FormDefinition:
        raise NotImplementedError(f"{type(self).__name__}.build")

    def trigger_form_building_finished(self, form: FormDefinition):
        for renderable in form.get_renderables_recursively():
            renderable.on_building_finished()

        form.on_building_finished()


class ArrayFormFactory(AbstractFormFactory):
    ''' Builds a form from a nested mapping, e.g. loaded from YAML '''

    def build(self, configuration: dict, preset_name: Optional[str] = None) -> FormDefinition:
        configuration = dict(configuration)
        form_defaults = self.get_preset_configuration(preset_name or config.DEFAULT_PRESET)

        identifier = configuration.pop('identifier', None)
        form = FormDefinition(identifier, form_defaults, configuration.pop('type', FORM_TYPE))

        for page_configuration in configuration.pop('renderables', None) or ():
            self.add_nested_renderable(page_configuration, form)

        form.set_options(configuration)
        self.trigger_form_building_finished(form)

        logger.info('Built form [%s] with %d page(s) using preset [%s]',
                    form.identifier, len(form.get_pages()), preset_name or config.DEFAULT_PRESET)
        return form

    def add_nested_renderable(self, configuration: dict, parent_renderable):
        configuration = dict(configuration)
        identifier = configuration.pop('identifier', None)
        if not identifier:
            raise IdentifierNotValidError("F01.402", "Identifier not set.", configuration)

        children = configuration.pop('renderables', None) or ()
        type_name = configuration.pop('type', None)

        if isinstance(parent_renderable, FormDefinition):
            renderable = parent_renderable.create_page(identifier, type_name or PAGE_TYPE)
            if configuration:
                renderable.set_options(configuration)
        elif isinstance(parent_renderable, AbstractSection):
            if not type_name:
                raise FormDefinitionConsistencyError(
                    "F03.507", f"The element [{identifier}] has no type."
                )

            renderable = parent_renderable.create_element(identifier, type_name, configuration)
        else:
            raise FormDefinitionConsistencyError(
                "F03.508",
                f"The renderable [{parent_renderable.identifier}] cannot contain child renderables like [{identifier}]."
            )

        for child_configuration in children:
            self.add_nested_renderable(child_configuration, renderable)

        return renderable


__all__ = (
    "AbstractFormFactory",
    "ArrayFormFactory",
    "load_form_configuration",
    "load_form_settings",
)
