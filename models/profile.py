from datetime import datetime
from typing import List, Optional, Union

from pydantic import BaseModel, Field, field_validator


class Social(BaseModel):
    youtube: Optional[str] = None
    twitter: Optional[str] = None
    facebook: Optional[str] = None
    linkedin: Optional[str] = None
    instagram: Optional[str] = None


class ProfileUpdate(BaseModel):
    status: str = Field(default="", validate_default=True)
    skills: Union[str, List[str]] = Field(default="", validate_default=True)
    company: Optional[str] = None
    website: Optional[str] = None
    location: Optional[str] = None
    bio: Optional[str] = None
    githubusername: Optional[str] = None
    social: Social = Social()

    @field_validator("status")
    @classmethod
    def status_required(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("Status is required")
        return value.strip()

    @field_validator("skills")
    @classmethod
    def split_skills(cls, value: Union[str, List[str]]) -> List[str]:
        # Accept "python, go" as well as ["python", "go"]
        if isinstance(value, str):
            value = value.split(",")
        skills = [skill.strip() for skill in value if skill.strip()]
        if not skills:
            raise ValueError("Skills is required")
        return skills


class Profile(BaseModel):
    user: str
    status: str
    skills: List[str]
    company: Optional[str] = None
    website: Optional[str] = None
    location: Optional[str] = None
    bio: Optional[str] = None
    githubusername: Optional[str] = None
    social: Social = Social()
    name: Optional[str] = None
    avatar: Optional[str] = None
    date: Optional[datetime] = None
