"""
Fixed-length byte value types.

`FixedBytes` is an immutable `bytes` subclass with strict length checking.
Subclasses define `LENGTH` and their own text codec through `encode` and
`decode`. Pydantic models holding these types serialize them through
`encode`, so the text form seen in JSON is the one defined by the subclass.
"""

from __future__ import annotations

import re
from typing import Any, ClassVar, Iterable

from pydantic.annotated_handlers import GetCoreSchemaHandler
from pydantic_core import core_schema
from typing_extensions import Self

_HEX_DIGITS = re.compile(r"[0-9a-fA-F]*")


def strip_hex_prefix(text: str) -> str:
    """Remove a single leading '0x' marker, if present."""
    return text.removeprefix("0x")


def decode_hex(text: str) -> bytes:
    """
    Decode a hex string without a prefix.

    Unlike `bytes.fromhex`, whitespace between digit pairs is rejected.

    Raises:
        ValueError: If `text` has non-hex characters or an odd length.
    """
    if _HEX_DIGITS.fullmatch(text) is None:
        raise ValueError("non-hex character in input")
    if len(text) % 2:
        raise ValueError(f"odd number of hex digits: {len(text)}")
    return bytes.fromhex(text)


def _coerce_to_bytes(value: Any) -> bytes:
    """
    Coerce a variety of inputs to raw bytes.

    Accepts:
      - `bytes` / `bytearray` (returned as immutable `bytes`)
      - Iterables of integers in [0, 255]
      - Hex strings, with or without a '0x' prefix
    """
    if isinstance(value, (bytes, bytearray)):
        return bytes(value)
    if isinstance(value, str):
        return decode_hex(strip_hex_prefix(value))
    if isinstance(value, Iterable):
        # bytes(bytearray(iterable)) enforces each element is an int in 0..255
        return bytes(bytearray(value))
    return bytes(value)


class FixedBytes(bytes):
    """
    A base class for fixed-length byte types that inherits from `bytes`.

    Subclasses set:
      - `LENGTH`: exact number of bytes the instance must contain.
    """

    LENGTH: ClassVar[int]
    """The exact number of bytes (overridden by subclasses)."""

    def __new__(cls, value: Any = b"") -> Self:
        """
        Create and validate a new instance.

        Args:
            value: Any value coercible to bytes (see `_coerce_to_bytes`).

        Raises:
            ValueError: If the resulting byte length differs from `LENGTH`.
        """
        if not hasattr(cls, "LENGTH"):
            raise TypeError(f"{cls.__name__} must define LENGTH")

        b = _coerce_to_bytes(value)
        if len(b) != cls.LENGTH:
            raise ValueError(f"{cls.__name__} expects exactly {cls.LENGTH} bytes, got {len(b)}")
        return super().__new__(cls, b)

    def encode(self) -> str:
        """Return the canonical text form of this value."""
        raise NotImplementedError

    @classmethod
    def decode(cls, text: str) -> Self:  # type: ignore[override]
        """Parse the canonical text form of this value."""
        raise NotImplementedError

    @classmethod
    def __get_pydantic_core_schema__(
        cls, source_type: Any, handler: GetCoreSchemaHandler
    ) -> core_schema.CoreSchema:
        """
        Hook into Pydantic's validation system.

        1. If the input is already an instance of the class, accept it.
        2. Text input goes through `decode`.
        3. Raw bytes of exactly `LENGTH` are wrapped directly.
        4. For serialization (e.g., to JSON), call `encode`.
        """
        from_text = core_schema.chain_schema(
            [
                core_schema.str_schema(),
                core_schema.no_info_plain_validator_function(cls.decode),
            ]
        )
        from_bytes = core_schema.chain_schema(
            [
                core_schema.bytes_schema(min_length=cls.LENGTH, max_length=cls.LENGTH),
                core_schema.no_info_plain_validator_function(cls),
            ]
        )

        return core_schema.union_schema(
            [
                core_schema.is_instance_schema(cls),
                from_text,
                from_bytes,
            ],
            serialization=core_schema.plain_serializer_function_ser_schema(lambda x: x.encode()),
        )

    def __repr__(self) -> str:
        tname = type(self).__name__
        return f"{tname}({self.encode()})"

    def __hash__(self) -> int:
        return hash((type(self), bytes(self)))

    def hex(self, *args: Any) -> str:
        """Return the hexadecimal string representation of the underlying bytes."""
        return bytes(self).hex(*args)
