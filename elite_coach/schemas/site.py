from pydantic import BaseModel, EmailStr, Field
from typing import Optional, List
from datetime import datetime


class ContactCreate(BaseModel):
    name: str = Field(min_length=1)
    email: EmailStr
    phone: Optional[str] = None
    message: str = Field(min_length=1)


class ContactRead(BaseModel):
    id: int
    name: str
    email: str
    phone: Optional[str] = None
    message: str
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class HeroStat(BaseModel):
    value: str
    label: str


class Hero(BaseModel):
    badge: str
    headline: str
    subheading: str
    stats: List[HeroStat]


class Feature(BaseModel):
    title: str
    description: str


class About(BaseModel):
    mission: str
    features: List[Feature]
    story: List[str]
    certifications: List[str]


class Service(BaseModel):
    title: str
    description: str
    features: List[str]
    price: str
    featured: bool = False


class Testimonial(BaseModel):
    name: str
    role: str
    image: str
    text: str


class ContactInfo(BaseModel):
    email: str
    phone: str
    location: str
    what_to_expect: List[str]


class SiteContent(BaseModel):
    hero: Hero
    about: About
    services: List[Service]
    testimonials: List[Testimonial]
    contact: ContactInfo
