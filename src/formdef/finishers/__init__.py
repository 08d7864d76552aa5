"""
Finishers

Finishers run in order once the last page of a form was submitted without
validation errors. Any finisher can cancel the remaining ones through the
finisher context.
"""
import re

from typing import Any, Dict, Optional

from markupsafe import escape

from formdef import logger
from formdef.error import FinisherError
from formdef.helper import ClassRegistry, get_by_path


RX_PLACEHOLDER = re.compile(r"\{([A-Za-z_][\w\-]*(?:\.[\w\-]+)*)\}")


class FinisherContext(object):
    def __init__(self, form_runtime):
        self._form_runtime = form_runtime
        self._cancelled = False

    @property
    def form_runtime(self):
        return self._form_runtime

    @property
    def form_values(self) -> Dict[str, Any]:
        return self._form_runtime.form_state.form_values

    def cancel(self):
        self._cancelled = True

    @property
    def is_cancelled(self) -> bool:
        return self._cancelled


class AbstractFinisher(object):
    default_options: Dict[str, Any] = {}

    def __init__(self, options: Optional[dict] = None):
        self._options = dict(options or {})
        self._finisher_context: Optional[FinisherContext] = None

    @property
    def options(self) -> Dict[str, Any]:
        return dict(self._options)

    def set_option(self, key: str, value: Any):
        self._options[key] = value

    def parse_option(self, name: str) -> Any:
        ''' Option value, falling back to the finisher defaults. Blank strings count as unset. '''
        value = self._options.get(name)
        if value is None or value == '':
            return self.default_options.get(name)

        return value

    def execute(self, finisher_context: FinisherContext):
        self._finisher_context = finisher_context
        logger.info('Executing finisher [%s]', type(self).__name__)
        self.execute_internal()

    def execute_internal(self):
        raise NotImplementedError(f"{type(self).__name__}.execute_internal")


FinisherRegistry = ClassRegistry(AbstractFinisher)


@FinisherRegistry.register('confirmation')
class ConfirmationFinisher(AbstractFinisher):
    """
    Replaces the form output with a message. The message is trusted HTML,
    `{identifier}` placeholders (dotted paths allowed) are replaced with the
    escaped form values. Unknown identifiers render empty, any other braces
    are left alone.
    """
    default_options = {
        'message': '<p>The form has been submitted.</p>',
    }

    def execute_internal(self):
        form_values = self._finisher_context.form_values

        def _replace(match):
            value = get_by_path(form_values, match.group(1))
            return '' if value is None else str(escape(value))

        response = self._finisher_context.form_runtime.response
        response.content = RX_PLACEHOLDER.sub(_replace, self.parse_option('message'))


@FinisherRegistry.register('redirect')
class RedirectFinisher(AbstractFinisher):
    default_options = {
        'uri': None,
        'statusCode': 303,
        'delay': 0,
    }

    def execute_internal(self):
        uri = self.parse_option('uri')
        if not uri:
            raise FinisherError("N02.401", "The option \"uri\" must be set for the RedirectFinisher.")

        self._finisher_context.form_runtime.response.set_redirect(
            uri, status_code=int(self.parse_option('statusCode')), delay=int(self.parse_option('delay'))
        )
        self._finisher_context.cancel()


@FinisherRegistry.register('closure')
class ClosureFinisher(AbstractFinisher):
    ''' Calls the `closure` option with the finisher context '''
    default_options = {
        'closure': None,
    }

    def execute_internal(self):
        closure = self.parse_option('closure')
        if not callable(closure):
            raise FinisherError("N02.402", f"The option \"closure\" must be callable, got [{type(closure).__name__}].")

        closure(self._finisher_context)


__all__ = (
    "AbstractFinisher",
    "ClosureFinisher",
    "ConfirmationFinisher",
    "FinisherContext",
    "FinisherRegistry",
    "RedirectFinisher",
)
