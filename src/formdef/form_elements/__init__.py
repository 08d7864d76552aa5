"""
Form Elements

Implementation classes referenced by the `implementationClassName` of the
bundled form element types.
"""
import datetime

from formdef.core.model import AbstractFormElement, AbstractSection
from formdef.datadef import FileResource
from formdef.validation import Error, FileTypeValidator, MediaTypeValidator


class GenericFormElement(AbstractFormElement):
    ''' A form element without special behavior, the look is defined by its type '''
    pass


class Section(AbstractFormElement, AbstractSection):
    ''' A group of form elements inside a page, e.g. a fieldset '''
    has_value = False


class StaticText(AbstractFormElement):
    ''' Displays the `text` property, never carries a value '''
    has_value = False


class FileUpload(AbstractFormElement):
    ''' A generic file upload, restricted to the extensions in the `allowedExtensions` property '''

    def initialize_form_element(self):
        self.set_data_type(FileResource)
        self.add_validator(FileTypeValidator({
            'allowedExtensions': self._properties.get('allowedExtensions') or []
        }))


class ImageUpload(FileUpload):
    ''' A file upload that only accepts images, restricted by extension and media type '''

    def initialize_form_element(self):
        super().initialize_form_element()
        self.add_validator(MediaTypeValidator({
            'allowedMediaTypes': self._properties.get('allowedMediaTypes') or ['image/*']
        }))


class DatePicker(AbstractFormElement):
    """
    A date input. Submitted strings are parsed with the `dateFormat` property
    (a `strftime` pattern) before the value is converted to a date.
    """

    def initialize_form_element(self):
        self.set_data_type('date')

    def on_submit(self, runtime, value):
        date_format = self._properties.get('dateFormat')
        if not date_format or not isinstance(value, str) or not value:
            return value

        try:
            return datetime.datetime.strptime(value, date_format).date()
        except ValueError:
            self._get_processing_rule().processing_messages.add_error(Error(
                message='The date "%s" does not match the format "%s".',
                code=4001,
                arguments=(value, date_format),
            ))
            return None


class PasswordWithConfirmation(AbstractFormElement):
    ''' Expects a mapping with `password` and `confirmation`, the processed value is the password '''

    def on_submit(self, runtime, value):
        if not isinstance(value, dict):
            return value

        password = value.get('password')
        if password != value.get('confirmation'):
            self._get_processing_rule().processing_messages.add_error(Error(
                message='Password doesn\'t match confirmation',
                code=4101,
            ))

        return password


__all__ = (
    "DatePicker",
    "FileUpload",
    "GenericFormElement",
    "ImageUpload",
    "PasswordWithConfirmation",
    "Section",
    "StaticText",
)
