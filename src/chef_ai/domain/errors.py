"""Error taxonomy for the recipe request pipeline."""


class ChefAIError(Exception):
    """Base class for every failure the pipeline reports to callers."""


class ImageReadError(ChefAIError, OSError):
    """Raised when a local image cannot be read or decoded."""


class ConfigError(ChefAIError):
    """Raised when required configuration is missing or invalid."""


class RemoteError(ChefAIError):
    """Raised when the model endpoint answers with a non-2xx status."""

    def __init__(self, status_code: int, body: str) -> None:
        super().__init__(f"Model API error ({status_code}): {body}")
        self.status_code = status_code
        self.body = body


class TransportError(ChefAIError):
    """Raised when the model endpoint cannot be reached in time."""


class EmptyResponseError(ChefAIError):
    """Raised when a successful model response carries no content."""


class ExtractionError(ChefAIError):
    """Raised when no JSON object can be located in model output."""


class SchemaError(ChefAIError):
    """Raised when extracted JSON is malformed or has the wrong shape."""
