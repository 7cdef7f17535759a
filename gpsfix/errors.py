"""Error kinds raised while decoding a single sentence.

These never cross a sentence boundary: ``SentenceDispatcher.parse`` catches
every ``NmeaError``, logs it, and reports ``False`` to the caller. Callers
that want the reason use ``SentenceDispatcher.decode`` directly.
"""


class NmeaError(ValueError):
    """Base class for sentence-level decoding failures."""


class MalformedSentenceError(NmeaError):
    """The line does not start with the ``$`` sentence marker."""


class ChecksumMismatchError(NmeaError):
    """The ``*HH`` checksum is missing, unparseable, or wrong."""


class UnsupportedSentenceTypeError(NmeaError):
    """No built-in or registered decoder claims the sentence tag."""


class InsufficientFieldsError(NmeaError):
    """The sentence has fewer fields than its decoder requires."""

    def __init__(self, tag: str, required: int, actual: int) -> None:
        super().__init__(f"{tag}: expected at least {required} fields, got {actual}")
        self.tag = tag
        self.required = required
        self.actual = actual


class DecoderError(NmeaError):
    """A decoder failed with an error of its own; the original is ``__cause__``."""

    def __init__(self, tag: str, error: Exception) -> None:
        super().__init__(f"{tag}: decoder failed: {type(error).__name__}: {error}")
        self.tag = tag
