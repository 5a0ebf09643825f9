"""Pydantic models for exposure API JSON payloads."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from exposure_check.application.ports.exposure_api_port import (
    AccountRecord,
    ExposureDetails,
    ExposuresResult,
    PasswordCandidate,
    PasswordHashSpecification,
)
from exposure_check.domain.password_type import PasswordType


class ApiModel(BaseModel):
    """Base model for camelCase API payloads; unknown fields are tolerated."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
        frozen=True,
    )


class PasswordHashSpecificationPayload(ApiModel):
    hash_type: int | None = None
    salt: str | None = None

    def to_record(self) -> PasswordHashSpecification:
        return PasswordHashSpecification(
            hash_type=PasswordType.from_code(self.hash_type),
            salt=self.salt or "",
        )


class AccountsResponse(ApiModel):
    """Accounts lookup payload."""

    salt: str | None = None
    password_hashes_required: list[PasswordHashSpecificationPayload] = Field(default_factory=list)
    last_breach_date: datetime | None = None

    def to_record(self) -> AccountRecord:
        return AccountRecord(
            salt=self.salt or "",
            password_hashes_required=tuple(
                specification.to_record() for specification in self.password_hashes_required
            ),
            last_breach_date=self.last_breach_date,
        )


class CredentialCandidatesResponse(ApiModel):
    """Credential hashes matching the submitted prefixes."""

    candidate_hashes: list[str] = Field(default_factory=list)


class PasswordCandidatePayload(ApiModel):
    md5: str = ""
    sha1: str = ""
    sha256: str = ""
    revealed_in_exposure: bool = False
    relative_exposure_frequency: int = 0
    exposure_count: int = 0

    def to_record(self) -> PasswordCandidate:
        return PasswordCandidate(
            md5=self.md5,
            sha1=self.sha1,
            sha256=self.sha256,
            revealed_in_exposure=self.revealed_in_exposure,
            relative_exposure_frequency=self.relative_exposure_frequency,
            exposure_count=self.exposure_count,
        )


class PasswordCandidatesResponse(ApiModel):
    """Password candidates matching the submitted prefixes."""

    candidates: list[PasswordCandidatePayload] = Field(default_factory=list)


class ExposuresResponse(ApiModel):
    """Exposure ids for one username."""

    count: int = 0
    exposures: list[str] = Field(default_factory=list)

    def to_record(self) -> ExposuresResult:
        return ExposuresResult(count=self.count, exposures=tuple(self.exposures))


class ExposureDetailsResponse(ApiModel):
    """Details for one exposure."""

    id: str
    title: str | None = None
    entries: int = 0
    date: datetime | None = None
    category: str | None = None
    password_type: str | None = None
    exposed_data: list[str] = Field(default_factory=list)
    date_added: datetime | None = None
    source_urls: list[str] = Field(default_factory=list, alias="sourceURLs")
    domains_affected: int = 0

    def to_record(self) -> ExposureDetails:
        return ExposureDetails(
            id=self.id,
            title=self.title,
            entries=self.entries,
            date=self.date,
            category=self.category,
            password_type=self.password_type,
            exposed_data=tuple(self.exposed_data),
            date_added=self.date_added,
            source_urls=tuple(self.source_urls),
            domains_affected=self.domains_affected,
        )
