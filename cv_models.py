from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(
        extra="allow",
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )

    @field_validator("*", mode="before")
    @classmethod
    def null_as_default(cls, value: Any, info: ValidationInfo) -> Any:
        """Stored records write empty lists and strings as null; read them back as the field default."""
        if value is None and info.field_name:
            field = cls.model_fields[info.field_name]
            if not field.is_required():
                return field.get_default(call_default_factory=True)
        return value


class PersonalInfo(CamelModel):
    first_name: str = ""
    last_name: str = ""
    title: str = ""
    email: str = ""
    phone: str = ""
    location: str = ""
    linkedin: str = ""
    website: str = ""


class Experience(CamelModel):
    company: str = ""
    title: str = ""
    location: str = ""
    start_date: str = ""
    end_date: str = ""
    current: bool = False
    description: str = ""


class Education(CamelModel):
    institution: str = ""
    degree: str = ""
    field: str = ""
    start_date: str = ""
    end_date: str = ""
    description: str = ""


class SkillGroup(CamelModel):
    category: str = ""
    items: list[str] = Field(default_factory=list)


class Language(CamelModel):
    language: str = ""
    proficiency: str = ""


class Certification(CamelModel):
    name: str = ""
    issuer: str = ""
    date: str = ""
    url: str = ""


class FontStyle(CamelModel):
    """Appearance of one text role. A size of zero or less means "not overridden"."""

    size: float = 0
    color: list[int] = Field(default_factory=list)
    bold: bool = False
    italic: bool = False


class StyleConfig(CamelModel):
    title1: FontStyle | None = None
    title2: FontStyle | None = None
    text1: FontStyle | None = None
    text2: FontStyle | None = None
    sub: FontStyle | None = None


class SectionLabels(CamelModel):
    summary: str = ""
    experience: str = ""
    education: str = ""
    skills: str = ""
    languages: str = ""
    certifications: str = ""
    present: str = ""


class CVData(CamelModel):
    personal: PersonalInfo = Field(default_factory=PersonalInfo)
    summary: str = ""
    experience: list[Experience] = Field(default_factory=list)
    education: list[Education] = Field(default_factory=list)
    skills: list[SkillGroup] = Field(default_factory=list)
    languages: list[Language] = Field(default_factory=list)
    certifications: list[Certification] = Field(default_factory=list)
    style: StyleConfig | None = None
    labels: SectionLabels | None = None


class CV(CamelModel):
    id: str | None = None
    title: str = ""
    data: CVData = Field(default_factory=CVData)
    created_at: datetime | None = None
    updated_at: datetime | None = None


class CVVersion(CamelModel):
    id: str
    cv_id: str
    data: CVData
    message: str = ""
    created_at: datetime | None = None


class CVExport(CamelModel):
    """Shape of the JSON passthrough export."""

    title: str
    data: CVData
    exported_at: datetime
    versions: list[CVVersion] = Field(default_factory=list)
