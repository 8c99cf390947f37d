from typing import Annotated

from pydantic import BaseModel, EmailStr, Field, StringConstraints

AgentName = Annotated[str, StringConstraints(strip_whitespace=True, min_length=2, max_length=100)]
CountryCode = Annotated[str, StringConstraints(strip_whitespace=True, pattern=r"^\+[0-9]{1,4}$")]
MobileNumber = Annotated[str, StringConstraints(strip_whitespace=True, pattern=r"^[0-9]{7,15}$")]


class AgentCreate(BaseModel):
    name: AgentName
    email: EmailStr
    countryCode: CountryCode
    mobileNumber: MobileNumber
    password: str = Field(..., min_length=6)


class AgentUpdate(BaseModel):
    name: AgentName | None = None
    email: EmailStr | None = None
    countryCode: CountryCode | None = None
    mobileNumber: MobileNumber | None = None
    isActive: bool | None = None
