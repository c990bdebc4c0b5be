"""Shallow post-construction checks for ERN 3.8 messages.

Validation is explicit: nothing in the builder or writer calls it. The first
problem found is raised; the caller decides whether to serialize anyway.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from ddex_ern.exceptions import MessageValidationError

if TYPE_CHECKING:
    from collections.abc import Iterator

    from .models import (
        CollectionDetailsByTerritory,
        NewReleaseMessage,
        ReleaseDetailsByTerritory,
        ResourceDetailsByTerritory,
    )


def validate_message(message: NewReleaseMessage) -> None:
    header = message.message_header
    if header is None:
        raise MessageValidationError("MessageHeader is required")
    if not header.message_id:
        raise MessageValidationError("MessageId is required")
    if not header.message_thread_id:
        raise MessageValidationError("MessageThreadId is required")
    if header.message_sender is None or not header.message_sender.party_ids:
        raise MessageValidationError("MessageSender is required")
    if not header.message_recipients:
        raise MessageValidationError("at least one MessageRecipient is required")

    releases = message.release_list.releases
    if not releases:
        raise MessageValidationError("at least one Release is required")

    release_deals = message.deal_list.release_deals
    if not release_deals:
        reference = releases[0].release_reference
        raise MessageValidationError(
            f"at least one Deal is required; no deal found for release reference: {reference}",
            reference=reference,
        )
    for release_deal in release_deals:
        if not release_deal.deals:
            raise MessageValidationError(
                f"release deal for {release_deal.deal_release_reference} has no Deal",
                reference=release_deal.deal_release_reference,
            )

    dealt = {release_deal.deal_release_reference for release_deal in release_deals}
    for release in releases:
        if release.release_reference not in dealt:
            raise MessageValidationError(
                f"no deal found for release reference: {release.release_reference}",
                reference=release.release_reference,
            )

    for owner, section in _territory_sections(message):
        has_codes = bool(section.territory_codes)
        has_excluded = bool(section.excluded_territory_codes)
        if has_codes == has_excluded:
            raise MessageValidationError(
                f"{owner}: territory section needs either TerritoryCode or "
                "ExcludedTerritoryCode, not both or neither",
                reference=owner,
            )

    known = message.resource_list.resource_references()
    for release in releases:
        for section in release.details_by_territory:
            for group in section.resource_groups:
                for item in group.content_items:
                    targets = [item.release_resource_reference]
                    targets.extend(
                        linked.value for linked in item.linked_release_resource_references
                    )
                    for target in targets:
                        if target not in known:
                            raise MessageValidationError(
                                f"{release.release_reference}: resource group refers to "
                                f"unknown resource reference: {target}",
                                reference=release.release_reference,
                            )


def _territory_sections(
    message: NewReleaseMessage,
) -> Iterator[
    tuple[
        str,
        ResourceDetailsByTerritory | ReleaseDetailsByTerritory | CollectionDetailsByTerritory,
    ]
]:
    resources = message.resource_list
    for resource in [
        *resources.sound_recordings,
        *resources.videos,
        *resources.images,
        *resources.texts,
    ]:
        for section in resource.details_by_territory:
            yield resource.resource_reference, section
    for release in message.release_list.releases:
        for release_section in release.details_by_territory:
            yield release.release_reference, release_section
    if message.collection_list is not None:
        for collection in message.collection_list.collections:
            for collection_section in collection.details_by_territory:
                yield collection.collection_reference, collection_section
