from formdef import config, logger


DEBUG_APP_EXCEPTION = config.DEBUG_APP_EXCEPTION


class FormdefException(Exception):
    status_code = 500
    label = "Internal Error"
    errcode = "A00.000"

    def __init__(self, errcode, message, details=None):
        super().__init__(message)
        self.message = message
        self.details = details
        self.errcode = errcode

        DEBUG_APP_EXCEPTION and logger.exception(message)

    def __str__(self):
        if self.details is None:
            return f"{self.errcode} [{self.status_code}] >> {self.message}"

        return f"{self.errcode} [{self.status_code}] >> {self.message} >> {self.details}"

    @property
    def content(self):
        if not self.details:
            return {"errcode": self.errcode, "message": self.message}

        return {"errcode": self.errcode, "message": self.message, "details": self.details}


class NotFoundError(FormdefException):
    label = "Not Found"
    status_code = 404
    errcode = "A00.404"


class BadRequestError(FormdefException):
    label = "Bad Request"
    status_code = 400
    errcode = "A00.400"


class UnprocessableError(FormdefException):
    label = "Unprocessable Entity"
    status_code = 422
    errcode = "A00.422"


class InternalServerError(FormdefException):
    label = "Internal Server Error"
    status_code = 500
    errcode = "A00.500"


class IdentifierNotValidError(BadRequestError):
    label = "Identifier Not Valid"
    errcode = "F01.400"


class DuplicateFormElementError(BadRequestError):
    label = "Duplicate Form Element"
    errcode = "F02.400"


class InvalidValidationOptionsError(BadRequestError):
    label = "Invalid Validation Options"
    errcode = "V01.400"


class FormDefinitionConsistencyError(InternalServerError):
    label = "Form Definition Inconsistent"
    errcode = "F03.500"


class TypeDefinitionNotFoundError(NotFoundError):
    label = "Type Definition Not Found"
    errcode = "T01.404"


class TypeDefinitionNotValidError(InternalServerError):
    label = "Type Definition Not Valid"
    errcode = "T02.500"


class ValidatorPresetNotFoundError(NotFoundError):
    label = "Validator Preset Not Found"
    errcode = "V02.404"


class FinisherPresetNotFoundError(NotFoundError):
    label = "Finisher Preset Not Found"
    errcode = "N01.404"


class PresetNotFoundError(NotFoundError):
    label = "Preset Not Found"
    errcode = "P01.404"


class PageNotFoundError(NotFoundError):
    label = "Page Not Found"
    errcode = "F04.404"


class FinisherError(UnprocessableError):
    label = "Finisher Failed"
    errcode = "N02.422"


class RenderingError(InternalServerError):
    label = "Rendering Failed"
    errcode = "R01.500"
