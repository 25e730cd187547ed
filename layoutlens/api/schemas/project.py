from typing import List

from pydantic import BaseModel, Field

# Strict scalars: JSON integers pass as floats; numeric strings, bools,
# NaN and Infinity are rejected.


class Point(BaseModel):
    x: float = Field(..., strict=True, allow_inf_nan=False, examples=[0.0])
    y: float = Field(..., strict=True, allow_inf_nan=False, examples=[0.0])


class Wall(BaseModel):
    id: str = Field(..., strict=True, examples=["w1"])
    start: Point
    end: Point
    thickness: float = Field(..., strict=True, allow_inf_nan=False, examples=[0.2])  # not validated, expected > 0


class ProjectBase(BaseModel):
    name: str = Field(..., strict=True, examples=["Living Room"])


class ProjectCreate(ProjectBase):
    pass


class Project(BaseModel):
    id: str = Field(..., strict=True, examples=["123e4567-e89b-12d3-a456-426614174000"])
    name: str = Field(..., strict=True, examples=["Living Room"])
    walls: List[Wall] = Field(..., examples=[[]])
