"""
Shared pydantic base for API schemas.

Python attributes are snake_case; JSON on the wire is camelCase.
"""
from typing import Annotated

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel

# A single criterion score: finite and never negative
CriterionScore = Annotated[float, Field(ge=0, allow_inf_nan=False)]


class CamelModel(BaseModel):
    """Base model that reads and writes camelCase field names."""

    class Config:
        alias_generator = to_camel
        populate_by_name = True
