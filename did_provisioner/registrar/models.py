"""Universal registrar request and response schemas."""

from typing import Dict, List, Optional

from pydantic import BaseModel

from ..models import PublicKeyDescriptor

FAILURE_STATE = "failure"


class DynamicSchema(BaseModel):
    """Base Dynamic schema."""

    class Config:
        """Config."""

        extra = "allow"


class CreateDIDRequest(BaseModel):
    """Create DID request sent to a registrar driver."""

    jobId: Optional[str] = None
    options: Dict[str, str] = {}
    addPublicKeys: List[PublicKeyDescriptor] = []


class RegistrarKey(DynamicSchema):
    """Key returned by a registrar driver."""

    id: str
    purposes: List[str] = []
    publicKeyBase58: Optional[str] = None
    privateKeyBase58: Optional[str] = None


class RegistrarSecret(DynamicSchema):
    """Secret section of a registrar response."""

    keys: List[RegistrarKey] = []


class DidState(DynamicSchema):
    """DID state of a registrar response."""

    state: Optional[str] = None
    identifier: Optional[str] = None
    reason: Optional[str] = None
    secret: Optional[RegistrarSecret] = None


class CreateDIDResponse(DynamicSchema):
    """Create DID response."""

    jobId: Optional[str] = None
    didState: DidState
