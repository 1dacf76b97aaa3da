"""
Request Validation Middleware.

Provides the RequestValidator class that handles:
- Parameter validation of an incoming request-like object
- Attaching the output mapping to the request (``request.dto`` by default)
- Delegating failures to a caller-supplied error handler
- A generic 400 response, with logging, when no handler is given

The request object is used directly as the validation source, so schema
locations address its parts: ``query.page``, ``params.id``, ``body.tags[0]``.
"""

import inspect
import logging
from collections.abc import MutableMapping
from typing import Any, Callable, Dict, Optional

from .errors import ReqValidatorError
from .schema import ParameterSchema
from .settings import ValidatorSettings
from .validators import SchemaLike, ValidationResult, check_params

logger = logging.getLogger(__name__)

ErrorHandler = Callable[[ReqValidatorError, Any], Any]


class RequestValidator:
    """
    Validation middleware bound to one parameter schema.

    Usage:
        >>> from req_validator import RequestValidator
        >>>
        >>> validator = RequestValidator({
        ...     "id": {"type": "number", "location": "params.id"},
        ...     "verbose": {"type": "boolean", "location": "query.verbose", "default": False},
        ... })
        >>>
        >>> def handler(request):
        ...     return {"status": 200, "body": request.dto}
        >>>
        >>> response = validator(request, handler)
    """

    def __init__(
        self,
        schema: SchemaLike,
        error_handler: Optional[ErrorHandler] = None,
        settings: Optional[ValidatorSettings] = None,
    ):
        """
        Initialize the validator.

        Args:
            schema: ParameterSchema, or a dict of name -> field config
            error_handler: Called as ``error_handler(error, request)`` on failure
            settings: Middleware configuration

        Raises:
            SchemaError: If ``schema`` cannot be parsed
        """
        self._schema = ParameterSchema.from_dict(schema)
        self._error_handler = error_handler
        self._settings = settings or ValidatorSettings()

    @property
    def schema(self) -> ParameterSchema:
        return self._schema

    @property
    def settings(self) -> ValidatorSettings:
        return self._settings

    def validate(self, request: Any) -> ValidationResult:
        """Validate a request and attach the output mapping on success."""
        result = check_params(self._schema, request)
        if result.success:
            self._attach(request, result.data)
        return result

    def __call__(self, request: Any, call_next: Callable[[Any], Any]) -> Any:
        """
        Validate ``request`` and pass it on to ``call_next``.

        Returns whatever ``call_next`` returns, or the rejection response.
        """
        result = self.validate(request)
        if result.success:
            return call_next(request)
        return self.reject(result.error, request)

    async def dispatch(self, request: Any, call_next: Callable[[Any], Any]) -> Any:
        """Async variant of ``__call__`` for awaitable handlers."""
        result = self.validate(request)
        if result.success:
            return await call_next(request)

        response = self.reject(result.error, request)
        if inspect.isawaitable(response):
            response = await response
        return response

    def reject(self, error: ReqValidatorError, request: Any) -> Any:
        """Produce the response for a failed validation."""
        if self._error_handler is not None:
            return self._error_handler(error, request)

        if self._settings.log_errors:
            logger.error(
                "Request validation failed: %s",
                error.message,
                exc_info=error if self._settings.log_traceback else None,
            )
        return self.error_response(error)

    def error_response(self, error: ReqValidatorError) -> Dict[str, Any]:
        """
        Build the generic client-error response.

        Returns:
            Response dict with status, body, and headers
        """
        return {
            "status": self._settings.default_status,
            "body": {"success": False, "error": error.to_dict()},
            "headers": {},
        }

    def _attach(self, request: Any, data: Dict[str, Any]) -> None:
        key = self._settings.context_key
        if isinstance(request, MutableMapping):
            request[key] = data
        else:
            setattr(request, key, data)


def req_validator(
    schema: SchemaLike,
    error_handler: Optional[ErrorHandler] = None,
    **settings: Any,
) -> RequestValidator:
    """
    Create a RequestValidator.

    Args:
        schema: ParameterSchema, or a dict of name -> field config
        error_handler: Optional failure callback ``(error, request)``
        **settings: ValidatorSettings fields (context_key, default_status, ...)

    Example:
        >>> validator = req_validator(
        ...     {"q": {"type": "string", "location": "query.q"}},
        ...     context_key="params",
        ... )
    """
    return RequestValidator(
        schema,
        error_handler=error_handler,
        settings=ValidatorSettings(**settings),
    )
