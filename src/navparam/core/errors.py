"""Exception types raised by parameter access and validation"""

from typing import Any, Optional


class ParameterError(Exception):
    """Base class for configuration parameter failures"""


class ValidationError(ParameterError, ValueError):
    """A parameter value (or one element of it) is outside its bound"""

    def __init__(
        self,
        message: str,
        name: str,
        value: Any,
        minimum: Any,
        maximum: Optional[Any] = None,
    ):
        super().__init__(message)
        self.name = name
        self.value = value
        self.minimum = minimum
        self.maximum = maximum


class TypeMismatchError(ParameterError, TypeError):
    """A parameter is missing or stored with the wrong type"""

    def __init__(self, message: str, name: str, expected: str, value: Any = None):
        super().__init__(message)
        self.name = name
        self.expected = expected
        self.value = value
