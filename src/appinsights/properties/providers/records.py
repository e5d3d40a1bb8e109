"""Operating-system and web context records."""

from pydantic import BaseModel, ConfigDict, Field


class OperatingSystem(BaseModel):
    """Operating system the telemetry was produced on."""

    name: str | None = None

    model_config = ConfigDict(extra="allow")


class Web(BaseModel):
    """Browser and page details for web-hosted telemetry."""

    browser: str | None = None
    browser_ver: str | None = Field(None, alias="browserVer")
    browser_lang: str | None = Field(None, alias="browserLang")
    domain: str | None = None
    is_manual: bool | None = Field(None, alias="isManual")
    screen_res: str | None = Field(None, alias="screenRes")
    user_consent: bool | None = Field(None, alias="userConsent")

    model_config = ConfigDict(
        validate_by_name=True, validate_by_alias=True, extra="allow"
    )
