"""Failure taxonomy for the question-answering pipeline."""


class PipelineError(Exception):
    """Base class for failures raised while answering a question."""


class TranslationFailure(PipelineError):
    """The translator was unreachable or answered with an unusable envelope."""


class ExecutionFailure(PipelineError):
    """The data store rejected the generated query text."""

    def __init__(self, detail: str, sql: str | None = None):
        super().__init__(detail)
        self.detail = detail
        self.sql = sql


class RenderFailure(PipelineError):
    """Rows handed to the chat renderer were not a non-empty sequence."""


class IdentityFetchFailure(Exception):
    """The chat platform did not return the bot's own user id."""
