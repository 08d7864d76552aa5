import os

from typing import Any, Dict

import jinja2
from markupsafe import Markup

from formdef import config, logger
from formdef.error import RenderingError
from formdef.helper import ClassRegistry


TEMPLATE_DIR = os.path.join(os.path.dirname(__file__), 'templates')
DEFAULT_TEMPLATE_PATH_PATTERN = '{@type}.html'


class RendererInterface(object):
    def render(self, form_runtime) -> str:
        raise NotImplementedError(f"{type(self).__name__}.render")

    def render_renderable(self, renderable) -> str:
        raise NotImplementedError(f"{type(self).__name__}.render_renderable")


RendererRegistry = ClassRegistry(RendererInterface)


@RendererRegistry.register('jinja2')
class Jinja2FormRenderer(RendererInterface):
    """
    Renders every renderable with its own template. The template name comes
    from the `templatePathPattern` rendering option, where `{@type}` is
    replaced by the type name without namespace. Rendering options of the
    form are merged below the options of the renderable being rendered.
    """

    def __init__(self):
        self._form_runtime = None
        self._template_env = None

    def _create_environment(self, search_paths) -> jinja2.Environment:
        template_env = jinja2.Environment(
            loader=jinja2.FileSystemLoader(searchpath=search_paths),
            autoescape=jinja2.select_autoescape(['html', 'xml']),
        )
        template_env.globals['render_renderable'] = self.render_renderable
        template_env.globals['form'] = self._form_runtime
        template_env.globals['form_state_field'] = config.FORM_STATE_FIELD
        template_env.globals['current_page_field'] = config.CURRENT_PAGE_FIELD
        return template_env

    def add_filter(self, name, func):
        self._template_env.filters[name] = func

    def add_global(self, key, value):
        self._template_env.globals[key] = value

    def get_rendering_options(self, renderable) -> Dict[str, Any]:
        options = dict(self._form_runtime.rendering_options)
        if renderable is not self._form_runtime.form_definition:
            options.update(renderable.rendering_options)

        return options

    def render(self, form_runtime) -> str:
        self._form_runtime = form_runtime
        search_paths = list(form_runtime.rendering_options.get('templateSearchPaths') or [])
        search_paths += list(config.TEMPLATE_SEARCH_PATHS or [])
        search_paths.append(TEMPLATE_DIR)
        self._template_env = self._create_environment(search_paths)

        return str(self.render_renderable(form_runtime.form_definition))

    def render_renderable(self, renderable) -> Markup:
        if self._form_runtime is None:
            raise RenderingError("R01.503", "The renderer is not bound to a form runtime.")

        renderable.before_rendering(self._form_runtime)
        rendering_options = self.get_rendering_options(renderable)
        pattern = rendering_options.get('templatePathPattern') or DEFAULT_TEMPLATE_PATH_PATTERN
        template_name = pattern.replace('{@type}', renderable.get_template_name())

        try:
            template = self._template_env.get_template(template_name)
        except jinja2.TemplateNotFound as e:
            raise RenderingError(
                "R01.504",
                f"The template [{template_name}] for [{renderable.identifier}] of type [{renderable.type}] could not be found.",
                str(e)
            ) from e

        logger.debug('Rendering [%s] with template [%s]', renderable.identifier, template_name)
        return Markup(template.render(
            renderable=renderable,
            rendering_options=rendering_options,
            element_value=self._form_runtime.get_element_value(renderable.identifier),
            errors=self._form_runtime.get_errors_for(renderable.identifier),
        ))


__all__ = ("Jinja2FormRenderer", "RendererInterface", "RendererRegistry")
