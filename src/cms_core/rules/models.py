"""
Domain rules: policy knobs of the content domain, loaded from rules.yaml.

Value object limits (title length, slug grammar, media size cap) are type
invariants and live with the value objects, not here.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from cms_core.domain.media_values import FILENAME_MAX_LENGTH


class SlugRules(BaseModel):
    # Checks per generate_unique_slug call, base slug included
    max_attempts: int = Field(default=1000, ge=1)
    custom_min_length: int = Field(default=3, ge=1)


class SeoRules(BaseModel):
    slug_min_length: int = Field(default=3, ge=1)
    slug_max_length: int = Field(default=60, ge=1)

    @model_validator(mode="after")
    def _check_range(self) -> SeoRules:
        if self.slug_min_length > self.slug_max_length:
            raise ValueError("seo.slug_min_length cannot exceed seo.slug_max_length")
        return self


class PublicationRules(BaseModel):
    min_body_length: int = Field(default=10, ge=0)


class MediaRules(BaseModel):
    blocked_extensions: list[str] = Field(
        default_factory=lambda: [".exe", ".bat", ".com", ".scr", ".pif", ".cmd"]
    )
    # Can only tighten the MediaFilename limit
    max_filename_length: int = Field(default=FILENAME_MAX_LENGTH, ge=1, le=FILENAME_MAX_LENGTH)

    @field_validator("blocked_extensions")
    @classmethod
    def _normalize(cls, v: list[str]) -> list[str]:
        return ["." + ext.lower().lstrip(".") for ext in v]


class ExcerptRules(BaseModel):
    default_length: int = Field(default=200, ge=1)


class DomainRules(BaseModel):
    model_config = ConfigDict(frozen=True)

    slug: SlugRules = Field(default_factory=SlugRules)
    seo: SeoRules = Field(default_factory=SeoRules)
    publication: PublicationRules = Field(default_factory=PublicationRules)
    media: MediaRules = Field(default_factory=MediaRules)
    excerpt: ExcerptRules = Field(default_factory=ExcerptRules)

    @property
    def max_slug_attempts(self) -> int:
        return self.slug.max_attempts
