"""
Pydantic schemas for chemical lookup and storage classification.
Defines the strict intermediate record for LLM structured output
and the public ChemicalInfo result.
"""
from enum import Enum
from typing import Annotated, FrozenSet, List, Optional

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field


class StorageCategory(str, Enum):
    """Storage classes for hazardous chemicals."""
    UNKNOWN = "UNKNOWN"
    CAT_1 = "CAT_1"
    CAT_2 = "CAT_2"
    CAT_3 = "CAT_3"
    CAT_4 = "CAT_4"
    CAT_5 = "CAT_5"
    CAT_6 = "CAT_6"
    CAT_7 = "CAT_7"
    CAT_8 = "CAT_8"
    CAT_9 = "CAT_9"


def normalize_h_code(code: str) -> str:
    """Uppercase and trim a single H-statement code."""
    return code.strip().upper()


def normalize_h_codes(v):
    """Normalize rule codes so tables can be authored in any case."""
    if isinstance(v, str):
        v = [v]
    return frozenset(normalize_h_code(code) for code in v)


class HazardRule(BaseModel):
    """
    One entry of the ordered H-statement -> storage category table.

    A rule fires when any of its codes is present. When `flammable` is set,
    the flammability flag must also equal it exactly.
    """
    model_config = ConfigDict(frozen=True)

    h_codes: Annotated[FrozenSet[str], BeforeValidator(normalize_h_codes)]
    flammable: Optional[bool] = None
    category: StorageCategory


class ChemicalLookupResponse(BaseModel):
    """
    Structured output schema the LLM must return for one CAS lookup.
    Strict: no coercion between strings, numbers and booleans.
    """
    model_config = ConfigDict(strict=True, populate_by_name=True, extra="ignore")

    name: str = Field(..., description="Chemical name in Chinese")
    h_statements: List[str] = Field(..., alias="hStatements", description="GHS H-statements")
    is_flammable: bool = Field(..., alias="isFlammable", description="Flammable in a storage context")
    error: Optional[str] = Field(None, description="Set by the model when the CAS number is invalid")


class ChemicalInfo(BaseModel):
    """Lookup result: model-supplied hazard data plus the derived storage category."""
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    cas: str
    name: str
    h_statements: List[str] = Field(..., alias="hStatements")
    is_flammable: bool = Field(..., alias="isFlammable")
    category: StorageCategory = StorageCategory.UNKNOWN
    category_label: str = Field(..., alias="categoryLabel")


class CategoryDescription(BaseModel):
    """Category and its display label, as listed by the API."""
    category: StorageCategory
    label: str
