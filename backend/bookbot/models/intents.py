from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Union


class Intent(str, Enum):
    FIND = "find"
    COUNT = "count"
    GENERAL_INFO = "general_info"


class EntityType(str, Enum):
    PERSON = "PERSON"
    WORK_OF_ART = "WORK_OF_ART"
    LANGUAGE = "LANGUAGE"
    NATIONALITY = "NATIONALITY"
    LOCATION = "LOCATION"
    DATE = "DATE"
    OTHER = "OTHER"

    @classmethod
    def from_tag(cls, tag: str) -> "EntityType":
        # CoreNLP emits many more tags (CITY, NUMBER, ...) than the filters use
        try:
            return cls((tag or "").upper())
        except ValueError:
            return cls.OTHER


@dataclass(frozen=True)
class EntitySpan:
    text: str
    type: EntityType
    # raw NER tag as returned by the recognizer
    tag: str = ""


Operator = str  # one of "<", ">", "=", "<=", ">="

# field -> exact string, or field -> {operator: threshold}
FilterValue = Union[str, Dict[Operator, int]]
FilterSet = Dict[str, FilterValue]
