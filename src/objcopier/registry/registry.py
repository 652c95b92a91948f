"""Bounded registry of typed converters.

ConverterRegistry is a stateful, caller-owned service: it is populated by the
caller and only read by the copy engine. It does no locking of its own, so
registering converters while other threads copy through the same registry is
the caller's responsibility to avoid.
"""

from __future__ import annotations

import logging
from collections import OrderedDict

from objcopier.registry.protocol import TypedConverter, TypePair

logger = logging.getLogger(__name__)

DEFAULT_MAX_ENTRIES = 1000


class ConverterRegistry:
    """Maps exact type pairs to converters, evicting the least recently used.

    Args:
        max_entries: Maximum number of type pairs kept (default 1000).
    """

    def __init__(self, max_entries: int = DEFAULT_MAX_ENTRIES) -> None:
        """Initialize empty registry.

        Args:
            max_entries: Maximum number of type pairs kept.

        Raises:
            ValueError: If max_entries is not positive.
        """
        if max_entries <= 0:
            raise ValueError(f"max_entries must be positive, got {max_entries}")
        self._max_entries = max_entries
        self._entries: OrderedDict[TypePair, TypedConverter] = OrderedDict()

    def register(self, *converters: TypedConverter) -> None:
        """Register converters under every pair they declare.

        A pair registered again is taken over by the newer converter.

        Raises:
            TypeError: If an argument does not implement TypedConverter.
        """
        for converter in converters:
            if not isinstance(converter, TypedConverter):
                raise TypeError(
                    f"{type(converter).__name__} does not implement TypedConverter protocol"
                )
            for pair in converter.pairs():
                self._entries[pair] = converter
                self._entries.move_to_end(pair)
                logger.debug("Registered converter %s for %s", type(converter).__name__, pair)
                if len(self._entries) > self._max_entries:
                    evicted, _ = self._entries.popitem(last=False)
                    logger.debug("Evicted converter for %s", evicted)

    def lookup(self, pair: TypePair) -> TypedConverter | None:
        """Find the converter registered for an exact pair.

        A hit marks the pair as recently used.

        Args:
            pair: Source type and destination annotation.

        Returns:
            The converter, or None if the pair is not registered.
        """
        try:
            converter = self._entries.get(pair)
        except TypeError:  # unhashable annotation
            return None
        if converter is not None:
            self._entries.move_to_end(pair)
        return converter

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, pair: object) -> bool:
        return pair in self._entries

    @property
    def max_entries(self) -> int:
        return self._max_entries
