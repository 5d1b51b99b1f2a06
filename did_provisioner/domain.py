"""Expose canonical did:trustbloc identifiers under a configured domain."""

import logging
from typing import Tuple

LOGGER = logging.getLogger(__name__)

TRUSTBLOC_DID_PREFIX = "did:trustbloc"
SPLIT_DID_LENGTH = 4


def replace_canonical_did_with_domain_did(
    did: str, public_key_id: str, domain: str
) -> Tuple[str, str]:
    """Swap the ledger segment of a did:trustbloc DID for the domain.

    did:trustbloc:<ledger>:<suffix> becomes did:trustbloc:<domain>:<suffix>,
    and every occurrence of the original DID in public_key_id is replaced.
    Any other DID is returned unchanged. An empty domain disables the rewrite
    rather than producing did:trustbloc::<suffix>.
    """
    if not domain or not did.startswith(TRUSTBLOC_DID_PREFIX):
        return did, public_key_id

    split = did.split(":")
    if len(split) != SPLIT_DID_LENGTH:
        return did, public_key_id

    domain_did = f"{split[0]}:{split[1]}:{domain}:{split[3]}"
    LOGGER.debug("Rewrote %s to %s", did, domain_did)

    return domain_did, public_key_id.replace(did, domain_did)
