"""Error taxonomy for the tag catalog pipeline."""


class TagServiceError(Exception):
    """Base error for the tag catalog service."""


class ToolExecutionError(TagServiceError):
    """The external tool could not be started, exited non-zero, or was cancelled."""


class ToolCancelledError(ToolExecutionError):
    """The request was aborted by the client while the pipeline was running."""


class MalformedCatalogError(TagServiceError):
    """Tool output is not a well-formed tag listing."""


class EncodingTransportError(TagServiceError):
    """The JSON document could not be produced or written to the client."""
