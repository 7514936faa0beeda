from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

FIELD_SEPARATOR = ":"
LIST_SEPARATOR = ","


class NetworkHeader(BaseModel):
    """
    The three constant lines at the top of a network file.
    """
    model_config = ConfigDict(frozen=True, strict=True)

    num_intersections: int = Field(..., ge=0, description="Declared number of intersections")
    num_routes: int = Field(..., ge=0, description="Declared number of routes")
    yellow_time: int = Field(..., ge=1, description="Yellow time for every traffic light")


class IntersectionRecord(BaseModel):
    """
    An intersection line, optionally carrying traffic light data.
    """
    model_config = ConfigDict(frozen=True, strict=True)

    intersection_id: str = Field(..., min_length=1, description="Intersection identifier")
    duration: Optional[int] = Field(None, description="Traffic light duration in seconds")
    order: List[str] = Field(default_factory=list, description="Origin ids in green-cycle order")

    @field_validator('intersection_id')
    @classmethod
    def validate_id(cls, v: str) -> str:
        if not v.strip():
            raise ValueError('Intersection id must not be blank')
        if FIELD_SEPARATOR in v:
            raise ValueError(f'Intersection id must not contain "{FIELD_SEPARATOR}"')
        return v

    @model_validator(mode='after')
    def validate_lights(self) -> 'IntersectionRecord':
        if self.duration is not None and not self.order:
            raise ValueError('Traffic light order must not be empty')
        if self.duration is None and self.order:
            raise ValueError('Traffic light order given without a duration')
        return self

    @property
    def has_lights(self) -> bool:
        return self.duration is not None


class RouteRecord(BaseModel):
    """
    A route line. Sensor lines for the route follow it in the file.
    """
    model_config = ConfigDict(frozen=True, strict=True)

    from_id: str = Field(..., min_length=1)
    to_id: str = Field(..., min_length=1)
    default_speed: int = Field(..., ge=0, description="Speed when no speed sign is present")
    num_sensors: int = Field(..., ge=0, description="Number of sensor lines that follow")
    speed_sign_speed: Optional[int] = Field(None, ge=0, description="Current speed sign speed")


class SensorRecord(BaseModel):
    """
    A sensor line: kind code, threshold and the data the sensor cycles through.
    """
    model_config = ConfigDict(frozen=True, strict=True)

    kind: str = Field(..., min_length=1, description="Sensor kind code, e.g. PP")
    threshold: int = Field(..., gt=0, description="Threshold the readings are compared against")
    data: List[int] = Field(..., min_length=1, description="Readings, one per second")

    @field_validator('data')
    @classmethod
    def validate_data(cls, v: List[int]) -> List[int]:
        if any(datum < 0 for datum in v):
            raise ValueError('Sensor data must not be negative')
        return v
