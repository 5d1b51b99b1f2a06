"""Universal registrar HTTP client."""

import asyncio
import logging
import ssl
from typing import Dict, List, Optional, Sequence, Tuple

from aiohttp import ClientError, ClientSession, ClientTimeout
from pydantic import ValidationError

from ..error import RegistrarCreationError
from ..models import PublicKeyDescriptor
from .models import FAILURE_STATE, CreateDIDRequest, CreateDIDResponse, RegistrarKey

LOGGER = logging.getLogger(__name__)


class UniversalRegistrarClient:
    """Client for universal registrar drivers."""

    def __init__(
        self,
        ssl_context: Optional[ssl.SSLContext] = None,
        timeout: Optional[float] = None,
    ):
        """Initialize the client."""
        self.ssl_context = ssl_context
        self.timeout = timeout

    async def create_did(
        self,
        driver_url: str,
        public_keys: Sequence[PublicKeyDescriptor],
        options: Optional[Dict[str, str]] = None,
    ) -> Tuple[str, List[RegistrarKey]]:
        """Ask a registrar driver to create a DID.

        Returns:
            The assigned DID and the keys returned by the driver
        """
        request = CreateDIDRequest(options=options or {}, addPublicKeys=list(public_keys))
        post_kwargs = {"json": request.model_dump(exclude_none=True)}
        if self.ssl_context:
            post_kwargs["ssl"] = self.ssl_context

        async with ClientSession(timeout=ClientTimeout(total=self.timeout)) as session:
            try:
                async with session.post(driver_url, **post_kwargs) as response:
                    if not response.ok:
                        raise RegistrarCreationError(
                            "uni-registrar: create: unexpected status "
                            f"{response.status}: {await response.text()}"
                        )
                    try:
                        res = await response.json(content_type=None)
                    except ValueError:
                        raise RegistrarCreationError(
                            "uni-registrar: create: Unable to parse JSON"
                        )
            except (ClientError, asyncio.TimeoutError) as err:
                raise RegistrarCreationError(
                    f"uni-registrar: create: request to {driver_url} failed: {err}"
                ) from err

        if not res:
            raise RegistrarCreationError("uni-registrar: create: Response is None.")

        try:
            create_response = CreateDIDResponse.model_validate(res)
        except ValidationError:
            raise RegistrarCreationError(
                "uni-registrar: create: Response Format is invalid"
            )

        did_state = create_response.didState
        LOGGER.debug("uni-registrar did state: %s", did_state.state)
        if did_state.state == FAILURE_STATE:
            raise RegistrarCreationError(
                f"uni-registrar: create: failure from registrar {did_state.reason}"
            )
        if not did_state.identifier:
            raise RegistrarCreationError(
                "uni-registrar: create: Response is missing the DID identifier"
            )

        keys = did_state.secret.keys if did_state.secret else []
        return did_state.identifier, keys
