import logging
from collections.abc import Iterable

from storefront.core.errors import AuthorizationError

logger = logging.getLogger(__name__)


def authorize(required_roles: Iterable[str], caller_roles: Iterable[str], caller_id: str) -> None:
    """Allow when the caller holds at least one required role.

    Roles are matched as a plain set; no role implies another.
    """
    if set(required_roles) & set(caller_roles):
        return
    logger.warning("Denied user %s: requires one of %s", caller_id, sorted(set(required_roles)))
    raise AuthorizationError(
        f"User {caller_id} credentials for the current service do not fulfil the requirements"
    )
