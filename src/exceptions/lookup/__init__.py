from src.exceptions.lookup.configuration_error import ConfigurationError
from src.exceptions.lookup.invalid_zip_code_error import InvalidZipCodeError
from src.exceptions.lookup.missing_endpoints_error import MissingEndpointsError

__all__ = ["ConfigurationError", "InvalidZipCodeError", "MissingEndpointsError"]
