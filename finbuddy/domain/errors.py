"""
Error taxonomy shared by every layer.

ValidationError      user input rejected before any external call, never retried.
ProviderUnavailable  a news or generation provider failed or is not configured.
StoreFailure         the backing store failed after its bounded retries.
GenerationTimeout    an external call exceeded its deadline.
"""


class FinBuddyError(Exception):
    """Base class for all application errors."""


class ValidationError(FinBuddyError):
    pass


class PromptTooLongError(ValidationError):
    """The user message alone does not fit the prompt token budget."""


class ProviderUnavailable(FinBuddyError):
    pass


class StoreFailure(FinBuddyError):
    pass


class GenerationTimeout(FinBuddyError, TimeoutError):
    pass
