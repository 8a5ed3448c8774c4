from __future__ import annotations


class MemorableIdError(Exception):
    """Base class for every error raised by memorable_ids."""


class ConfigurationError(MemorableIdError, ValueError):
    """The generator was built or configured in a way that can never succeed."""


class RetryExhaustedError(MemorableIdError, RuntimeError):
    """Every attempt of a generation call was rejected."""

    def __init__(self, attempts: int, *, validated: bool) -> None:
        self.attempts = attempts
        self.validated = validated
        if validated:
            hint = (
                "increase the max_length value, reduce the number of lists used "
                "or change the validator so that it accepts more values"
            )
        else:
            hint = "increase the max_length value, or reduce the number of lists used"
        super().__init__(f"The maximum number of attempts ({attempts}) has been exceeded, {hint}")


class ResourceLoadError(MemorableIdError, RuntimeError):
    """A bundled word list could not be found; the package is broken."""

    def __init__(self, resource: str) -> None:
        self.resource = resource
        super().__init__(f"Word list resource '{resource}' not found")


__all__ = ["MemorableIdError", "ConfigurationError", "RetryExhaustedError", "ResourceLoadError"]
