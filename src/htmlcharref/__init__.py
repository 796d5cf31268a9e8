from .buffer import ConsumeBuffer
from .charref import consume_character_reference, consume_named_reference, consume_numeric_reference
from .codepoints import LEGACY_REPLACEMENTS, is_reserved_codepoint
from .decoder import CharRefDecoder, DecoderOpts, decode_entities_in_text
from .entities import DEFAULT_TABLE, NamedEntityTable
from .errors import ParseError, ParseErrorCollector, StrictModeError
from .stream import CharacterStream

__all__ = [
    "DEFAULT_TABLE",
    "LEGACY_REPLACEMENTS",
    "CharRefDecoder",
    "CharacterStream",
    "ConsumeBuffer",
    "DecoderOpts",
    "NamedEntityTable",
    "ParseError",
    "ParseErrorCollector",
    "StrictModeError",
    "consume_character_reference",
    "consume_named_reference",
    "consume_numeric_reference",
    "decode_entities_in_text",
    "is_reserved_codepoint",
]
