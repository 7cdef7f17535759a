"""Routes sentences to per-tag decoders and merges them into a FixState.

Processing Pipeline:
    1. Strip whitespace; the line must start with '$'
    2. Look up the decoder for the tag (built-ins first, then the custom
       registry). The decoder decides whether a missing checksum is allowed.
    3. Validate the checksum unless told to ignore it
    4. Split into fields and hand them to the decoder
    5. Record the sentence type on the fix

Only a sentence that gets through every step changes the fix. Decoders
check their minimum field count before writing anything, so a failure at
any step leaves the fix exactly as it was.

Custom sentence types are added through ``CustomSentenceRegistry`` without
touching this module:

    >>> registry = CustomSentenceRegistry()
    >>> def decode_pxdev(sentence, state):
    ...     state.set_record_version(sentence.fields[1])
    >>> registry.register("PXDEV", decode_pxdev)
    <SentenceType.CUSTOM_1: 128>
    >>> fix = FixState(dispatcher=SentenceDispatcher(registry))
"""

import logging
from collections.abc import Callable, Iterable, Iterator
from dataclasses import dataclass

from gpsfix.errors import (
    ChecksumMismatchError,
    DecoderError,
    MalformedSentenceError,
    NmeaError,
    UnsupportedSentenceTypeError,
)
from gpsfix.fix.state import FixState
from gpsfix.nmea.checksum import has_valid_checksum
from gpsfix.nmea.fields import SentenceFields, sentence_tag, split_sentence
from gpsfix.nmea.gga import decode_gga
from gpsfix.nmea.rmc import decode_rmc
from gpsfix.nmea.types import CUSTOM_SLOTS, SentenceType
from gpsfix.nmea.vendor import decode_gtevt, decode_gtstc, decode_gtuid
from gpsfix.nmea.vtg import decode_vtg
from gpsfix.nmea.zda import decode_zda

logger = logging.getLogger(__name__)

SENTENCE_MARKER = "$"

DecodeFunction = Callable[[SentenceFields, FixState], None]


@dataclass(frozen=True)
class SentenceDecoder:
    """A decoder bound to the sentence tag it handles.

    Attributes:
        tag: Sentence tag without '$' (e.g. "GPRMC")
        sentence_type: Bit recorded on the fix after a successful decode
        decode: Function merging the split sentence into a fix. It must
            raise an ``NmeaError`` before mutating the fix if the sentence
            cannot be applied.
        checksum_optional: Accept the sentence when it carries no '*HH'.
            A checksum that is present is always verified.
    """

    tag: str
    sentence_type: SentenceType
    decode: DecodeFunction
    checksum_optional: bool = False


BUILTIN_DECODERS: tuple[SentenceDecoder, ...] = (
    SentenceDecoder("GPRMC", SentenceType.RMC, decode_rmc),
    SentenceDecoder("GPGGA", SentenceType.GGA, decode_gga),
    SentenceDecoder("GPVTG", SentenceType.VTG, decode_vtg),
    SentenceDecoder("GPZDA", SentenceType.ZDA, decode_zda),
    SentenceDecoder("GTUID", SentenceType.GTUID, decode_gtuid, checksum_optional=True),
    SentenceDecoder("GTSTC", SentenceType.GTSTC, decode_gtstc, checksum_optional=True),
    SentenceDecoder("GTEVT", SentenceType.GTEVT, decode_gtevt, checksum_optional=True),
)

_BUILTIN_TAGS = frozenset(decoder.tag for decoder in BUILTIN_DECODERS)


class CustomSentenceRegistry:
    """Caller-supplied decoders for tags the built-in table does not know.

    Each registration takes the next free ``SentenceType.CUSTOM_n`` slot, so
    at most eight custom types can be registered.
    """

    def __init__(self) -> None:
        self._decoders: dict[str, SentenceDecoder] = {}

    def register(
        self,
        tag: str,
        decode: DecodeFunction,
        checksum_optional: bool = False,
    ) -> SentenceType:
        """Register a decoder for ``tag``.

        Args:
            tag: Sentence tag, with or without '$'
            decode: Decoder function, called as ``decode(sentence, state)``
            checksum_optional: Accept the sentence without a checksum

        Returns:
            The custom sentence type assigned to the tag

        Raises:
            ValueError: The tag is blank, already registered, shadows a
                built-in tag, or all custom slots are taken
        """
        tag = tag.strip().lstrip(SENTENCE_MARKER)
        if not tag:
            raise ValueError("Sentence tag must not be blank")
        if tag in _BUILTIN_TAGS:
            raise ValueError(f"{tag} is a built-in sentence type")
        if tag in self._decoders:
            raise ValueError(f"{tag} is already registered")
        if len(self._decoders) >= len(CUSTOM_SLOTS):
            raise ValueError(f"At most {len(CUSTOM_SLOTS)} custom sentence types can be registered")

        sentence_type = CUSTOM_SLOTS[len(self._decoders)]
        self._decoders[tag] = SentenceDecoder(tag, sentence_type, decode, checksum_optional)
        logger.debug("Registered custom sentence %s as %s", tag, sentence_type.name)
        return sentence_type

    def get(self, tag: str) -> SentenceDecoder | None:
        return self._decoders.get(tag)

    def __contains__(self, tag: object) -> bool:
        return tag in self._decoders

    def __iter__(self) -> Iterator[SentenceDecoder]:
        return iter(self._decoders.values())

    def __len__(self) -> int:
        return len(self._decoders)


class SentenceDispatcher:
    """Decode sentences into a FixState using built-in and custom decoders.

    Args:
        registry: Custom decoders consulted when the built-in table misses.
            An empty registry is created if none is given.
    """

    def __init__(self, registry: CustomSentenceRegistry | None = None) -> None:
        self._builtins = {decoder.tag: decoder for decoder in BUILTIN_DECODERS}
        self._registry = registry if registry is not None else CustomSentenceRegistry()

    @property
    def registry(self) -> CustomSentenceRegistry:
        return self._registry

    def find_decoder(self, tag: str) -> SentenceDecoder | None:
        """Return the decoder for ``tag``, built-ins taking precedence."""
        decoder = self._builtins.get(tag)
        if decoder is None:
            decoder = self._registry.get(tag)
        return decoder

    def decode(
        self,
        state: FixState,
        sentence: str,
        ignore_checksum: bool = False,
    ) -> SentenceType:
        """Decode one sentence into ``state``.

        Returns:
            The sentence type that was recorded on the fix

        Raises:
            MalformedSentenceError: Missing '$' marker or tag
            ChecksumMismatchError: Bad or (for a mandatory checksum) missing checksum
            UnsupportedSentenceTypeError: No decoder for the tag
            InsufficientFieldsError: Too few fields for the decoder
            DecoderError: The decoder raised anything other than an NmeaError
        """
        sentence = sentence.strip()
        if not sentence.startswith(SENTENCE_MARKER):
            raise MalformedSentenceError(f"Sentence must begin with '$': {sentence!r}")

        decoder = self.find_decoder(sentence_tag(sentence))
        checksum_optional = decoder is not None and decoder.checksum_optional
        checksum_ok = has_valid_checksum(sentence, checksum_optional)
        if not checksum_ok and not ignore_checksum:
            raise ChecksumMismatchError(f"Invalid checksum: {sentence!r}")

        fields = split_sentence(sentence)
        if fields is None:
            raise MalformedSentenceError(f"Sentence has no tag: {sentence!r}")
        if decoder is None:
            raise UnsupportedSentenceTypeError(f"Unsupported sentence type: {fields.tag}")

        try:
            decoder.decode(fields, state)
        except NmeaError:
            raise
        except Exception as exc:
            raise DecoderError(decoder.tag, exc) from exc
        state.mark_parsed(decoder.sentence_type, decoder.tag, checksum_ok)
        logger.debug("Decoded %s sentence", decoder.tag)
        return decoder.sentence_type

    def parse(self, state: FixState, sentence: str, ignore_checksum: bool = False) -> bool:
        """Decode one sentence, reporting failure as False instead of raising."""
        try:
            self.decode(state, sentence, ignore_checksum)
        except NmeaError as exc:
            logger.warning("%s: %s", type(exc).__name__, exc)
            return False
        return True

    def parse_all(
        self,
        state: FixState,
        sentences: Iterable[str],
        ignore_checksum: bool = False,
    ) -> bool:
        """Decode every sentence in order into the same fix.

        A failure does not stop the batch.

        Returns:
            True if the batch was non-empty and every sentence decoded
        """
        results = [self.parse(state, sentence, ignore_checksum) for sentence in sentences]
        return bool(results) and all(results)


_DEFAULT_DISPATCHER = SentenceDispatcher()


def default_dispatcher() -> SentenceDispatcher:
    """Return the shared dispatcher that knows only the built-in sentences."""
    return _DEFAULT_DISPATCHER
