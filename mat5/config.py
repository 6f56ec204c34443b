"""Central configuration for the MAT-file parser."""

import zlib
from dataclasses import dataclass
from typing import Callable


@dataclass(frozen=True)
class ParserConfig:
    """All parser knobs in one place."""

    # --- Collaborators ---
    inflate: Callable[[bytes], bytes] = zlib.decompress  # compressed payload -> raw element bytes

    # --- Validation ---
    strict_version: bool = True  # Reject headers whose version field is not 0x0100
    tolerate_missing_padding: bool = True  # Last element of a buffer may omit its padding

    # --- Results ---
    keep_unsupported_bytes: bool = True  # Keep raw payloads of unsupported elements


DEFAULT_CONFIG = ParserConfig()
