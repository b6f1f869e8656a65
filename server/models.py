from pydantic import BaseModel, Field

from compass.heading import HeadingState


class HeadingResponse(BaseModel):
    true_bearing: float | None = Field(description="Degrees from true north, null if unset")
    magnetic_bearing: float | None = Field(
        description="Degrees from magnetic north, null if unset"
    )
    compass_error: float | None = Field(
        description="Magnetic minus true heading in (-180, 180], null if either is unset"
    )
    deviation_direction: str | None = Field(
        description='"W", "E" or "" for no deviation; null if unset'
    )

    @classmethod
    def from_state(cls, state: HeadingState) -> "HeadingResponse":
        return cls(
            true_bearing=state.true_bearing,
            magnetic_bearing=state.magnetic_bearing,
            compass_error=state.compass_error,
            deviation_direction=state.deviation_direction,
        )
