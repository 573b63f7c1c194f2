"""Mutation entry points.

Each entry point authenticates the caller, validates input, delegates to the
``LinkRepository`` and signals listing views to refresh. None of them raise:
every outcome is reported as an ``ActionResult``.
"""

import logging
from typing import Any, Mapping, Optional, Union

from pydantic import ValidationError

from .auth import IdentityProvider
from .errors import CodeSpaceExhausted, LinkError, Unauthorized, ValidationFailed
from .links import LinkRepository
from .revalidation import Revalidator
from .schemas import ActionResult, CreateLinkInput, UpdateLinkInput, first_error_message

UNEXPECTED_ERROR = "An unexpected error occurred"

Payload = Union[Mapping[str, Any], None]


class LinkActions:
    """Authenticated, validated, non-throwing operations on links."""

    def __init__(
        self,
        repository: LinkRepository,
        identity_provider: IdentityProvider,
        revalidator: Optional[Revalidator] = None,
        logger: Optional[logging.Logger] = None,
    ):
        self.repository = repository
        self.identity_provider = identity_provider
        self.revalidator = revalidator or Revalidator()
        self.logger = logger or logging.getLogger(__name__)

    async def _authenticate(self, token: Optional[str]) -> str:
        owner_id = await self.identity_provider.resolve(token)
        if not owner_id:
            raise Unauthorized()
        return owner_id

    @staticmethod
    def _validate(model, payload: Payload):
        if payload is not None and not isinstance(payload, Mapping):
            raise ValidationFailed("Invalid request body")
        try:
            return model.model_validate(dict(payload or {}))
        except ValidationError as e:
            raise ValidationFailed(first_error_message(e)) from e

    def _failure(self, action: str, error: Exception) -> ActionResult:
        if isinstance(error, CodeSpaceExhausted):
            self.logger.error(f"{action} failed: {error}")
            return ActionResult.fail(UNEXPECTED_ERROR)
        if isinstance(error, LinkError):
            self.logger.info(f"{action} rejected: {error.message}")
            return ActionResult.fail(error.message)
        self.logger.exception(f"{action} failed unexpectedly")
        return ActionResult.fail(UNEXPECTED_ERROR)

    async def create_link(self, token: Optional[str], payload: Payload) -> ActionResult:
        """Create a link for the caller.

        Args:
            token: Caller credential issued by the identity provider
            payload: ``{"url": ..., "short_code": ...}``; short_code is optional

        Returns:
            ``ActionResult`` with ``data={"short_code": ...}`` on success
        """
        try:
            owner_id = await self._authenticate(token)
            validated = self._validate(CreateLinkInput, payload)

            link = await self.repository.create(
                owner_id,
                url=validated.url,
                short_code=validated.short_code,
            )

            await self.revalidator.revalidate(owner_id)
            return ActionResult.ok({"short_code": link.short_code})
        except Exception as e:
            return self._failure("create_link", e)

    async def update_link(self, token: Optional[str], link_id: int, payload: Payload) -> ActionResult:
        """Update url and/or short code of one of the caller's links.

        Returns:
            ``ActionResult`` with ``data={"short_code": ...}`` on success
        """
        try:
            owner_id = await self._authenticate(token)
            validated = self._validate(UpdateLinkInput, payload)

            link = await self.repository.update(
                link_id,
                owner_id,
                url=validated.url,
                short_code=validated.short_code,
            )

            await self.revalidator.revalidate(owner_id)
            return ActionResult.ok({"short_code": link.short_code})
        except Exception as e:
            return self._failure("update_link", e)

    async def delete_link(self, token: Optional[str], link_id: int) -> ActionResult:
        """Delete one of the caller's links."""
        try:
            owner_id = await self._authenticate(token)

            await self.repository.delete(link_id, owner_id)

            await self.revalidator.revalidate(owner_id)
            return ActionResult.ok()
        except Exception as e:
            return self._failure("delete_link", e)

    async def list_links(self, token: Optional[str]) -> ActionResult:
        """All of the caller's links, newest first, for the dashboard listing."""
        try:
            owner_id = await self._authenticate(token)
            links = await self.repository.list_by_owner(owner_id)
            return ActionResult.ok({"links": [link.to_dict() for link in links]})
        except Exception as e:
            return self._failure("list_links", e)
