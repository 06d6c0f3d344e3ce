from __future__ import annotations
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True, order=True)
class Sample:
    """A tracked value tagged with the sequence id it was inserted under.

    Ordering compares ``value`` first and falls back to ``sequence_id``, so two
    samples holding the same value are still distinct keys inside a sorted
    container and can be removed individually.
    """

    value: Any
    sequence_id: int
