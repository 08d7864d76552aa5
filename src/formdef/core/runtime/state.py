from copy import deepcopy

from typing import Any, Dict

from pydantic import Field

from formdef.datadef import DataModel
from formdef.error import BadRequestError
from formdef.helper import get_by_path, set_by_path


NOPAGE = -1


class FormState(DataModel):
    """
    What the runtime remembers between two requests of the same form: the
    index of the page shown last and the values processed so far. It travels
    with the request in serialized form.
    """
    last_displayed_page_index: int = NOPAGE
    form_values: Dict[str, Any] = Field(default_factory=dict)

    @property
    def is_form_submitted(self) -> bool:
        return self.last_displayed_page_index != NOPAGE

    def get_form_value(self, property_path: str, default=None) -> Any:
        return get_by_path(self.form_values, property_path, default)

    def with_form_value(self, property_path: str, value: Any) -> "FormState":
        form_values = deepcopy(self.form_values)
        set_by_path(form_values, property_path, value)
        return self.set(form_values=form_values)

    def serialize_state(self) -> str:
        return self.model_dump_json()

    @classmethod
    def unserialize(cls, data) -> "FormState":
        if isinstance(data, FormState):
            return data

        try:
            if isinstance(data, (str, bytes)):
                return cls.model_validate_json(data)

            return cls.model_validate(data)
        except ValueError as e:
            raise BadRequestError("F05.401", "The submitted form state could not be restored.", str(e)) from e
