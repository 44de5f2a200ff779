class ConfigurationError(Exception):
    """Raised when the CF API endpoint or token can't be determined."""


class MalformedResourceError(ValueError):
    """Raised when a CF API resource is missing a field we depend on."""

    def __init__(self, field: str, resource: dict):
        self.field = field
        self.resource = resource
        super().__init__(f"resource is missing '{field}': {resource!r}")
