"""Engine error types."""


class KeySuggestError(Exception):
    pass


class DictionaryLoadError(KeySuggestError):
    """Base dictionary asset for a locale could not be read or parsed."""

    def __init__(self, locale: str, reason: str = ""):
        self.locale = locale
        self.reason = reason
        msg = f"Failed to load base dictionary for {locale!r}"
        if reason:
            msg += f": {reason}"
        super().__init__(msg)


class LearnedStoreUnavailable(KeySuggestError):
    """Learned dictionary could not be queried or written."""


class InvalidInput(KeySuggestError):
    """Blank word handed to an operation that needs one."""
