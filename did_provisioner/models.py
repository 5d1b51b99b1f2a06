"""DID provisioner request and result models."""

from dataclasses import dataclass
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

KEY_PURPOSE_AUTHENTICATION = "authentication"
KEY_PURPOSE_ASSERTION_METHOD = "assertionMethod"


class UniRegistrar(BaseModel):
    """Universal registrar driver descriptor."""

    model_config = ConfigDict(populate_by_name=True)

    driver_url: Optional[str] = Field(None, alias="driverURL")
    options: Dict[str, str] = {}


class DIDCreationRequest(BaseModel):
    """DID creation request."""

    model_config = ConfigDict(populate_by_name=True)

    key_type: str = Field(alias="keyType")
    signature_type: str = Field(alias="signatureType")
    did: Optional[str] = Field(None, alias="didID")
    private_key: Optional[str] = Field(
        None,
        alias="privateKey",
        description="Base58 encoded private key of an existing DID",
    )
    key_id: Optional[str] = Field(None, alias="keyID")
    purpose: Optional[str] = None
    registrar: Optional[UniRegistrar] = Field(None, alias="uniRegistrar")


@dataclass(frozen=True)
class DIDCreationResult:
    """Created DID and the key id to sign with."""

    did: str
    public_key_id: str


class PublicKeyDescriptor(BaseModel):
    """Public key as sent to a universal registrar."""

    model_config = ConfigDict(frozen=True)

    id: Optional[str] = None
    type: Optional[str] = None
    keyType: str
    value: str
    purposes: Optional[List[str]] = None
    recovery: Optional[bool] = None
    update: Optional[bool] = None
