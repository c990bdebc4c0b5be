"""Shallow post-construction checks for ERN 4.3 messages.

Same header and release/deal checks as 3.8, plus resolution of party
references against the ``PartyList``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from ddex_ern.exceptions import MessageValidationError

if TYPE_CHECKING:
    from collections.abc import Iterator

    from .models import NewReleaseMessage


def validate_message(message: NewReleaseMessage) -> None:
    header = message.message_header
    if header is None:
        raise MessageValidationError("MessageHeader is required")
    if not header.message_id:
        raise MessageValidationError("MessageId is required")
    if not header.message_thread_id:
        raise MessageValidationError("MessageThreadId is required")
    if header.message_sender is None or not header.message_sender.party_id:
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

    known = message.resource_list.resource_references()
    for release in releases:
        for group in release.resource_groups:
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

    parties = message.party_list.references()
    for owner, party_ref in _party_references(message):
        if party_ref not in parties:
            raise MessageValidationError(
                f"{owner}: unknown party reference: {party_ref}",
                reference=owner,
            )


def _party_references(message: NewReleaseMessage) -> Iterator[tuple[str, str]]:
    resources = message.resource_list
    for resource in [*resources.sound_recordings, *resources.videos]:
        for artist in resource.display_artists:
            yield resource.resource_reference, artist.artist_party_reference
        for contributor in resource.contributors:
            yield resource.resource_reference, contributor.contributor_party_reference
        for controller in resource.resource_rights_controllers:
            yield resource.resource_reference, controller.rights_controller_party_reference
    for release in message.release_list.releases:
        for artist in release.display_artists:
            yield release.release_reference, artist.artist_party_reference
        for label in release.release_label_references:
            yield release.release_reference, label.value
