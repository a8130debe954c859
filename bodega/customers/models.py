"""
Modèles client (corps de POST /customers).
"""
from typing import Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field


class Address(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    city: str
    country: str
    postal_code: str = Field(alias="postalCode")
    province: str = ""
    street: str


class CustomerInput(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    address: Address
    company: str = ""
    email: EmailStr
    first_name: str = Field(alias="firstName", min_length=1)
    last_name: str = Field(default="", alias="lastName")
    lgpd: bool = False
    nif_cif: str = Field(default="", alias="nifCif")
    phone: Optional[str] = None

    @property
    def name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()
