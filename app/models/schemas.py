# Pydantic schemas for API request/response models (DTOs)
from pydantic import BaseModel, ConfigDict, Field
from typing import Optional, List, Dict
from datetime import datetime


# Base schema for all Pydantic models
class BaseSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True, use_enum_values=True)


# Request schemas
class MoveSequenceRequest(BaseSchema):
    moves: List[str] = Field(default_factory=list, description="Move tokens applied to a solved cube, e.g. [\"R\", \"U'\", \"f2\"]")


# Response schemas
class ScrambleResponse(BaseSchema):
    moves: List[str]
    quarter_turns: List[str]
    seed: Optional[int] = None


class ExpandResponse(BaseSchema):
    moves: List[str]
    quarter_turns: List[str]


class CubeStateResponse(BaseSchema):
    facelets: str
    faces: Dict[str, List[str]]
    is_solved: bool
    quarter_turns: int


class SolveResponse(BaseSchema):
    facelets: str
    solution: List[str]
    quarter_turns: List[str]
    already_solved: bool


class HealthCheck(BaseSchema):
    status: str
    version: str
    timestamp: datetime
    solver: str = "unknown"


# Error schemas
class ErrorResponse(BaseSchema):
    detail: str
    error_code: Optional[str] = None
    timestamp: float
    error_id: Optional[str] = None
