from types import SimpleNamespace
from typing import Optional

from pydantic import BaseModel, ConfigDict


def _create(cls, data=None, defaults=None, **kwargs):
    """
    Construct a new data model object from multiple sources
    (dict, keyword args, other models, etc.)
    and allow setting default values.
    """

    base = {**defaults} if defaults else {}

    if isinstance(data, dict):
        base.update(data)
    elif isinstance(data, (type, SimpleNamespace)):
        base.update({k: v for k, v in data.__dict__.items() if not k.startswith('_')})
    elif isinstance(data, BaseModel):
        base.update(data.model_dump())
    elif data is not None:
        raise ValueError(f'Unable to extract data from object: {data}')

    base.update(kwargs)
    return cls(**base)


class DataModel(BaseModel):
    """
    Pydantic BaseModel with custom defaults:
    - frozen = True
    - model_dump(by_alias=True, exclude_none=True)
    - `set` method to update and create a new instance.
    - `create` method to construct a new instance from multiple sources
    """

    model_config = ConfigDict(frozen=True)

    create = classmethod(_create)

    def set(self, **kwargs):
        return self.model_copy(update=kwargs)

    def model_dump(self, by_alias=True, exclude_none=True, **kwargs):
        return super().model_dump(by_alias=by_alias, exclude_none=exclude_none, **kwargs)


class FileResource(DataModel):
    """
    An uploaded file as handed over by the web stack. The framework never
    stores the content, it only inspects the metadata.
    """
    filename: str
    media_type: Optional[str] = None
    size: Optional[int] = None
    sha1: Optional[str] = None
    location: Optional[str] = None

    @property
    def file_extension(self) -> str:
        _, dot, ext = self.filename.rpartition('.')
        return ext.lower() if dot else ''
