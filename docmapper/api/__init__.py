from .errors import JSONAPI_MEDIA_TYPE, install_exception_handlers, validation_error_response

__all__ = ["JSONAPI_MEDIA_TYPE", "install_exception_handlers", "validation_error_response"]
