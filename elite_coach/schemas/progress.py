from pydantic import BaseModel, Field
from typing import Optional, List
from datetime import date, datetime


class ProgressCreate(BaseModel):
    record_date: date
    weight_kg: Optional[float] = Field(default=None, gt=0)
    body_fat_percentage: Optional[float] = Field(default=None, ge=0, le=100)
    muscle_mass_kg: Optional[float] = Field(default=None, gt=0)
    notes: Optional[str] = None


class ProgressRead(BaseModel):
    id: int
    record_date: date
    weight_kg: Optional[float] = None
    body_fat_percentage: Optional[float] = None
    muscle_mass_kg: Optional[float] = None
    notes: Optional[str] = None

    class Config:
        from_attributes = True


class ProgressChartPoint(BaseModel):
    date: str  # "Jun 1"
    weight: Optional[float] = None
    body_fat: Optional[float] = None
    muscle: Optional[float] = None


class ProgressChanges(BaseModel):
    weight_kg: Optional[float] = None
    body_fat_percentage: Optional[float] = None
    muscle_mass_kg: Optional[float] = None


class ProgressLatest(BaseModel):
    record_date: str
    weight_kg: str
    body_fat_percentage: str
    muscle_mass_kg: str


class ProgressHistoryResponse(BaseModel):
    records: List[ProgressRead]
    latest: Optional[ProgressLatest] = None
    changes: ProgressChanges
    chart: List[ProgressChartPoint]


class PhotoRead(BaseModel):
    id: int
    progress_id: int
    filename: str
    content_type: str
    size: int
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True
