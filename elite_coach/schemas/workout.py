from pydantic import BaseModel, Field
from typing import Optional, List
from datetime import date


class ExerciseInput(BaseModel):
    exercise_name: str = Field(min_length=1)
    sets: int = Field(ge=1)
    reps: int = Field(ge=1)
    weight_kg: Optional[float] = Field(default=None, ge=0)


class WorkoutCreate(BaseModel):
    workout_name: str = Field(min_length=1)
    workout_date: date
    duration_minutes: int = Field(ge=1)
    notes: Optional[str] = None
    exercises: List[ExerciseInput] = Field(min_length=1)


class ExerciseRead(BaseModel):
    id: int
    exercise_name: str
    sets: int
    reps: int
    weight_kg: Optional[float] = None

    class Config:
        from_attributes = True


class WorkoutRead(BaseModel):
    id: int
    workout_name: str
    workout_date: date
    duration_minutes: int
    notes: Optional[str] = None
    exercises: List[ExerciseRead] = []

    class Config:
        from_attributes = True
