"""
Form Runtime

A form definition bound to the data of one request. The runtime restores the
form state, works out which page to show, maps and validates the values of
the page that was shown last and either renders the current page or, after
the last page, runs the finishers.
"""
from typing import Any, List, Optional

from formdef import config, logger
from formdef.error import BadRequestError, PageNotFoundError, RenderingError
from formdef.finishers import FinisherContext
from formdef.helper import get_by_path, load_class
from formdef.validation import Error, Result

from ..model import FormDefinition, FormElementInterface, Page
from .state import FormState


FORM_STATE_FIELD = config.FORM_STATE_FIELD
CURRENT_PAGE_FIELD = config.CURRENT_PAGE_FIELD
DEFAULT_RENDERER = 'jinja2'


class FormRuntimeResponse(object):
    def __init__(self):
        self.content: Optional[str] = None
        self.status_code = 200
        self.redirect_uri: Optional[str] = None
        self.redirect_delay = 0

    def set_redirect(self, uri: str, status_code: int = 303, delay: int = 0):
        self.redirect_uri = uri
        self.status_code = status_code
        self.redirect_delay = delay

    @property
    def is_redirect(self) -> bool:
        return self.redirect_uri is not None


class FormRuntime(object):
    def __init__(self, form_definition: FormDefinition, request: Optional[dict] = None):
        self._form_definition = form_definition
        self._request = dict(request or {})
        self._response = FormRuntimeResponse()
        self._validation_result = Result()
        self._submitted_arguments: dict = {}
        self._current_page: Optional[Page] = None
        self._last_displayed_page: Optional[Page] = None

        self._initialize_form_state()
        self._restore_form_values()
        self._initialize_current_page()
        if self._form_state.is_form_submitted:
            self._process_submitted_form_values()

    def _initialize_form_state(self):
        serialized_state = self._request.pop(FORM_STATE_FIELD, None)
        self._form_state = FormState() if not serialized_state else FormState.unserialize(serialized_state)

    def _restore_form_values(self):
        ''' Convert the values restored from JSON back to the data types of their processing rules '''
        for property_path, processing_rule in self._form_definition.get_processing_rules().items():
            value = self._form_state.get_form_value(property_path)
            if processing_rule.data_type is None or value is None:
                continue

            self._form_state = self._form_state.with_form_value(
                property_path, processing_rule.convert(value, Result())
            )

    def _initialize_current_page(self):
        pages = self._form_definition.get_pages()
        requested_index = self._request.pop(CURRENT_PAGE_FIELD, None)

        if not self._form_state.is_form_submitted:
            self._current_page = pages[0] if pages else None
            return

        last_index = self._form_state.last_displayed_page_index
        try:
            self._last_displayed_page = self._form_definition.get_page_by_index(last_index)
        except PageNotFoundError as e:
            raise BadRequestError(
                "F05.402", f"The submitted form state refers to the unknown page {last_index}.", last_index
            ) from e

        try:
            index = int(requested_index)
        except (TypeError, ValueError):
            index = last_index

        if index > last_index + 1:
            logger.warning('Form [%s]: skipping from page %d to %d is not allowed.', self.identifier, last_index, index)
            index = last_index

        index = max(index, 0)
        self._current_page = pages[index] if index < len(pages) else None

    def _process_submitted_form_values(self):
        result = self._map_and_validate_page(self._last_displayed_page)
        if result.has_errors() and not self.user_went_back_to_previous_step():
            logger.debug('Form [%s]: page [%s] has errors: %s',
                         self.identifier, self._last_displayed_page.identifier, result.flattened_errors())
            self._current_page = self._last_displayed_page
            self._submitted_arguments = dict(self._request)
            self._validation_result = result

    def _map_and_validate_page(self, page: Page) -> Result:
        result = Result()
        for element in page.get_elements_recursively():
            if not isinstance(element, FormElementInterface) or not getattr(element, 'has_value', True):
                continue

            identifier = element.identifier
            processing_rule = self._form_definition.get_processing_rule(identifier)
            processing_rule.reset_messages()

            value = get_by_path(self._request, identifier)
            value = element.on_submit(self, value)
            value = processing_rule.process(value)

            self._form_state = self._form_state.with_form_value(identifier, value)
            result.for_property(identifier).merge(processing_rule.processing_messages)

        return result

    @property
    def identifier(self) -> str:
        return self._form_definition.identifier

    @property
    def label(self) -> str:
        return self._form_definition.label

    @property
    def form_definition(self) -> FormDefinition:
        return self._form_definition

    @property
    def form_state(self) -> FormState:
        return self._form_state

    @property
    def request(self) -> dict:
        return self._request

    @property
    def response(self) -> FormRuntimeResponse:
        return self._response

    @property
    def rendering_options(self) -> dict:
        return self._form_definition.rendering_options

    @property
    def validation_result(self) -> Result:
        return self._validation_result

    def get_current_page(self) -> Optional[Page]:
        return self._current_page

    def get_pages(self) -> List[Page]:
        return self._form_definition.get_pages()

    def get_previous_page(self) -> Optional[Page]:
        if self._current_page is None or self._current_page.index == 0:
            return None

        return self._form_definition.get_page_by_index(self._current_page.index - 1)

    def get_next_page(self) -> Optional[Page]:
        if self._current_page is None:
            return None

        next_index = self._current_page.index + 1
        if not self._form_definition.has_page_with_index(next_index):
            return None

        return self._form_definition.get_page_by_index(next_index)

    def is_after_last_page(self) -> bool:
        return self._current_page is None

    def user_went_back_to_previous_step(self) -> bool:
        return (
            self._current_page is not None
            and self._last_displayed_page is not None
            and self._current_page.index < self._last_displayed_page.index
        )

    def get_element_value(self, identifier: str) -> Any:
        ''' Submitted value when the page is re-displayed, else the processed value, else the default '''
        submitted = get_by_path(self._submitted_arguments, identifier)
        if submitted is not None:
            return submitted

        value = self._form_state.get_form_value(identifier)
        if value is not None:
            return value

        return self._form_definition.get_element_default_value_by_identifier(identifier)

    def get_errors_for(self, identifier: str) -> List[Error]:
        return self._validation_result.for_property(identifier).get_errors()

    @property
    def serialized_form_state(self) -> str:
        return self._form_state.serialize_state()

    def get_renderer(self):
        from formdef.renderers import RendererInterface, RendererRegistry

        renderer_class_name = self._form_definition.renderer_class_name or DEFAULT_RENDERER
        try:
            renderer_class = load_class(renderer_class_name, RendererRegistry)
        except ImportError as e:
            raise RenderingError("R01.501", f"The renderer [{renderer_class_name}] could not be loaded.", str(e)) from e

        if not issubclass(renderer_class, RendererInterface):
            raise RenderingError(
                "R01.502", f"The renderer [{renderer_class_name}] does not implement RendererInterface."
            )

        return renderer_class()

    def invoke_finishers(self):
        finisher_context = FinisherContext(self)
        for finisher in self._form_definition.get_finishers():
            finisher.execute(finisher_context)
            if finisher_context.is_cancelled:
                logger.info('Form [%s]: finishers cancelled by [%s]', self.identifier, type(finisher).__name__)
                break

    def render(self) -> Optional[str]:
        if self.is_after_last_page():
            self.invoke_finishers()
            return self._response.content

        self._form_state = self._form_state.set(last_displayed_page_index=self._current_page.index)
        self._response.content = self.get_renderer().render(self)
        return self._response.content
