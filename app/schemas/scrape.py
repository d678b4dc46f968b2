from pydantic import BaseModel, ConfigDict, Field

from app.schemas.page import Platform


class NormalizedResult(BaseModel):
    emails: list[str] = []  # primary email only, 0 or 1 entries
    phones: list[str] = []  # international format, 0 or 1 entries
    social: dict[Platform, str] = {}

    def has_data(self) -> bool:
        return bool(self.emails or self.phones or self.social)


class SiteRecord(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    url: str
    company_name: str | None = Field(default=None, alias="companyName")
    data: NormalizedResult = Field(default_factory=NormalizedResult)


class BatchResult(BaseModel):
    results: list[SiteRecord] = []
