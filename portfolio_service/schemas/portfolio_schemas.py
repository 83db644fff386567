# schemas/portfolio_schemas.py

import re
from datetime import datetime, timezone
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator

_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


class Skill(BaseModel):
    id: str
    name: str
    imgsrc: str = ""
    group: Optional[str] = None


class PortfolioItem(BaseModel):
    """A showcased web project"""

    id: str
    name: str
    category: str
    imgsrc: str = ""
    href: str = ""


class AcademicProject(BaseModel):
    id: str
    title: str
    date: str
    desc: List[str] = Field(default_factory=list)
    tech: List[str] = Field(default_factory=list)


class Experience(BaseModel):
    id: str
    date: str
    name: str = Field(..., description="Role title")
    company: str
    desc: List[str] = Field(default_factory=list)


class Education(BaseModel):
    id: str
    date: str
    name: str = Field(..., description="Institution")
    company: str = Field(..., description="Degree")
    desc: str = ""


class Language(BaseModel):
    id: str
    name: str
    level: str


class ServiceOffering(BaseModel):
    id: str
    name: str
    desc: str


class PortfolioContent(BaseModel):
    """Everything shown on the portfolio pages"""

    summary: str
    skills: List[Skill] = Field(default_factory=list)
    portfolio: List[PortfolioItem] = Field(default_factory=list)
    projects: List[AcademicProject] = Field(default_factory=list)
    experience: List[Experience] = Field(default_factory=list)
    education: List[Education] = Field(default_factory=list)
    languages: List[Language] = Field(default_factory=list)
    services: List[ServiceOffering] = Field(default_factory=list)


class AboutResponse(BaseModel):
    summary: str
    services: List[ServiceOffering]
    languages: List[Language]


class ResumeResponse(BaseModel):
    summary: str
    experience: List[Experience]
    education: List[Education]
    projects: List[AcademicProject]
    languages: List[Language]
    skills: List[Skill]


class ProjectsResponse(BaseModel):
    category: str = "all"
    categories: List[str]
    items: List[PortfolioItem]


class ToolCategory(BaseModel):
    name: str
    slug: str
    featured: bool = False
    subtools: List[str] = Field(default_factory=list)
    preview: List[str] = Field(default_factory=list, description="First three subtools")
    has_more: bool = False


class ContactRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    email: str = Field(..., max_length=254)
    message: str = Field(..., min_length=1, max_length=5000)

    @field_validator("name", "message", mode="before")
    @classmethod
    def strip_text(cls, v):
        return v.strip() if isinstance(v, str) else v

    @field_validator("email")
    @classmethod
    def validate_email(cls, v):
        v = v.strip()
        if not _EMAIL_RE.match(v):
            raise ValueError("Please enter a valid email address")
        return v


class ContactMessage(ContactRequest):
    id: str
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class ContactResponse(BaseModel):
    id: str
    message: str = "Thanks for reaching out! I'll get back to you soon."
