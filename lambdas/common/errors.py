# lambdas/common/errors.py


class MetapromptError(Exception):
    """Base class for every error raised by the meta-prompt lambdas."""
    pass


class InvalidRequestError(MetapromptError, ValueError):
    """Custom exception for validation errors."""
    pass


class InferenceError(MetapromptError):
    """The Bedrock call itself failed (auth, throttling, network)."""
    pass


class InvalidCompletionError(MetapromptError):
    """Bedrock answered, but not with a completion we know how to read."""
    pass


class MissingTagError(MetapromptError):
    """The expected <tag>...</tag> pair is missing from the completion."""

    def __init__(self, tag: str):
        super().__init__(f"No <{tag}> tags found in the response")
        self.tag = tag


class GraphQLError(MetapromptError):
    """AppSync rejected the request or returned GraphQL errors."""

    def __init__(self, message: str, errors: list | None = None):
        super().__init__(message)
        self.errors = errors or []
