from typing import Any, Dict, List, Optional, Tuple

from formdef.datadef import DataModel


class Error(DataModel):
    message: str
    code: int = 0
    arguments: Tuple[Any, ...] = ()
    title: Optional[str] = None

    def render(self) -> str:
        if not self.arguments:
            return self.message

        try:
            return self.message % self.arguments
        except (TypeError, ValueError):
            return self.message

    def __str__(self):
        return self.render()


class Result(object):
    ''' A tree of validation errors, one node per property path segment '''

    def __init__(self):
        self._errors: List[Error] = []
        self._properties: Dict[str, "Result"] = {}

    def add_error(self, error: Error):
        self._errors.append(error)
        return self

    def get_errors(self) -> List[Error]:
        return list(self._errors)

    def get_first_error(self) -> Optional[Error]:
        return self._errors[0] if self._errors else None

    def for_property(self, path) -> "Result":
        if path is None or path == '':
            return self

        head, _, rest = str(path).partition('.')
        if head not in self._properties:
            self._properties[head] = Result()

        return self._properties[head].for_property(rest)

    def has_errors(self) -> bool:
        if self._errors:
            return True

        return any(sub.has_errors() for sub in self._properties.values())

    def merge(self, other: "Result") -> "Result":
        self._errors.extend(other._errors)
        for name, sub in other._properties.items():
            self.for_property(name).merge(sub)

        return self

    def flattened_errors(self, prefix: str = '') -> Dict[str, List[Error]]:
        flattened = {}
        if self._errors:
            flattened[prefix] = list(self._errors)

        for name, sub in self._properties.items():
            path = f'{prefix}.{name}' if prefix else name
            flattened.update(sub.flattened_errors(path))

        return flattened

    def __repr__(self):
        return f'<Result errors={self.flattened_errors()!r}>'
