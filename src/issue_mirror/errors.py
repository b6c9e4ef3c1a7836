"""Exceptions raised while mirroring an issue."""


class MirrorError(Exception):
    """Base class for mirroring failures."""


class PreconditionError(MirrorError):
    """The event cannot be applied to the current link state.

    Raised before any tracker mutation is attempted.
    """


class LinkCorruptionError(MirrorError):
    """A bot comment carries the link prefix but does not parse as a link."""

    def __init__(self, comment_id: str, body: str):
        self.comment_id = comment_id
        self.body = body
        super().__init__(f"Malformed link comment {comment_id}: {body!r}")


class GraphQLError(MirrorError):
    """A GraphQL request returned errors or an unexpected shape."""

    def __init__(self, message: str, errors: list[dict] | None = None):
        self.errors = errors or []
        super().__init__(message)
