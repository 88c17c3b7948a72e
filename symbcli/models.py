from enum import Enum
from typing import Any, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class FieldEnum(str, Enum):
    """Identifier types the conversion service can return."""

    RIC = "RIC"
    ISIN = "ISIN"
    SEDOL = "SEDOL"
    CUSIP = "CUSIP"
    TICKER = "Ticker"
    LIPPER_ID = "LipperID"
    IMO = "IMO"
    OA_PERM_ID = "OAPermID"

    @classmethod
    def lookup(cls, value: str) -> Optional["FieldEnum"]:
        wanted = value.strip().lower()
        for member in cls:
            if member.value.lower() == wanted:
                return member
        return None


class MessageFormat(str, Enum):
    NO_MESSAGES = "NoMessages"
    WITH_MESSAGES = "WithMessages"


class Token(BaseModel):
    access_token: str
    refresh_token: Optional[str] = None
    expires_in: Optional[Union[int, str]] = None
    scope: Optional[str] = None
    token_type: Optional[str] = None


class AuthErrorDetail(BaseModel):
    error: Optional[str] = None
    error_description: Optional[str] = None
    error_uri: Optional[str] = None


class ConvertRequest(BaseModel):
    universe: List[str] = []
    to: List[FieldEnum] = []

    def to_json(self) -> str:
        return self.model_dump_json(indent=2)


class Header(BaseModel):
    name: str
    title: str
    type: Optional[str] = None


class UniverseEntry(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    common_name: Optional[str] = Field(default=None, alias="Common Name")
    instrument: Optional[str] = Field(default=None, alias="Instrument")
    organization_perm_id: Optional[str] = Field(
        default=None, alias="Organization PermID"
    )
    reporting_currency: Optional[str] = Field(default=None, alias="Reporting Currency")


class Links(BaseModel):
    count: int = 0


class MessageDescription(BaseModel):
    code: int
    description: str


class Messages(BaseModel):
    codes: List[List[int]] = []
    descriptions: List[MessageDescription] = []


class ConversionResult(BaseModel):
    links: Optional[Links] = None
    variability: Optional[str] = None
    universe: List[UniverseEntry] = []
    headers: List[Header] = []
    data: List[List[Any]] = []
    messages: Optional[Messages] = None

    @property
    def row_count(self) -> int:
        if self.links is not None:
            return self.links.count
        return len(self.data)

    def to_json(self) -> str:
        return self.model_dump_json(indent=2, by_alias=True, exclude_none=True)
