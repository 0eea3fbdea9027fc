"""Assemble reconciliation snapshots for a contact or a prisoner."""

from __future__ import annotations

import logging
from collections import defaultdict
from typing import TYPE_CHECKING

from relsync.domain.errors import NotFoundError
from relsync.domain.reconciliation.contracts import (
    AddressPhoneSnapshot,
    AddressSnapshot,
    ContactRelationshipSnapshot,
    ContactRestrictionSnapshot,
    ContactSnapshot,
    EmailSnapshot,
    EmploymentSnapshot,
    IdentitySnapshot,
    PhoneSnapshot,
    PrisonerRelationshipSnapshot,
    PrisonerSnapshot,
    RelationshipRestrictionSnapshot,
)

if TYPE_CHECKING:
    from collections.abc import Sequence

    from relsync.domain.model import (
        ContactAddress,
        ContactPhone,
        PrisonerContact,
    )
    from relsync.domain.ports.unit_of_work import SyncRepositories

log = logging.getLogger(__name__)


class SnapshotBuilder:
    """Pure reads over a repository collection; nothing is written."""

    def __init__(self, repositories: SyncRepositories) -> None:
        self._repositories = repositories

    def for_contact(self, contact_id: int) -> ContactSnapshot:
        repos = self._repositories
        contact = repos.contacts.get(contact_id)
        if contact is None:
            raise NotFoundError(f"Contact ({contact_id}) not found")

        phones = repos.contact_phones.find_by_contact_id(contact_id)
        addresses = repos.contact_addresses.find_by_contact_id(contact_id)
        relationships = [
            relationship
            for relationship in repos.relationships.find_by_contact_id(contact_id)
            if relationship.current_term
        ]
        restrictions = self._relationship_restrictions(relationships)

        global_phones, address_snapshots = self._phones_and_addresses(contact_id, phones, addresses)
        snapshot = ContactSnapshot(
            contact_id=contact.require_id(),
            title=contact.title,
            last_name=contact.last_name,
            first_name=contact.first_name,
            middle_names=contact.middle_names,
            date_of_birth=contact.date_of_birth,
            staff_flag=contact.staff_flag,
            phones=global_phones,
            addresses=address_snapshots,
            emails=tuple(
                EmailSnapshot(
                    contact_email_id=email.require_id(),
                    email_address=email.email_address,
                )
                for email in repos.contact_emails.find_by_contact_id(contact_id)
            ),
            identities=tuple(
                IdentitySnapshot(
                    contact_identity_id=identity.require_id(),
                    identity_type=identity.identity_type,
                    identity_value=identity.identity_value,
                    issuing_authority=identity.issuing_authority,
                )
                for identity in repos.contact_identities.find_by_contact_id(contact_id)
            ),
            employments=tuple(
                EmploymentSnapshot(
                    employment_id=employment.require_id(),
                    organisation_id=employment.organisation_id,
                    active=employment.active,
                )
                for employment in repos.contact_employments.find_by_contact_id(contact_id)
            ),
            restrictions=tuple(
                ContactRestrictionSnapshot(
                    contact_restriction_id=restriction.require_id(),
                    restriction_type=restriction.restriction_type,
                    start_date=restriction.start_date,
                    expiry_date=restriction.expiry_date,
                )
                for restriction in repos.contact_restrictions.find_by_contact_id(contact_id)
            ),
            relationships=tuple(
                ContactRelationshipSnapshot(
                    prisoner_contact_id=relationship.require_id(),
                    prisoner_number=relationship.prisoner_number,
                    relationship_type=relationship.relationship_type,
                    relationship_to_prisoner=relationship.relationship_to_prisoner,
                    next_of_kin=relationship.next_of_kin,
                    emergency_contact=relationship.emergency_contact,
                    approved_visitor=relationship.approved_visitor,
                    active=relationship.active,
                    current_term=relationship.current_term,
                    restrictions=restrictions[relationship.require_id()],
                )
                for relationship in relationships
            ),
        )
        log.debug("Built reconciliation snapshot for contact %s", contact_id)
        return snapshot

    def for_prisoner(self, prisoner_number: str) -> PrisonerSnapshot:
        repos = self._repositories
        relationships = [
            relationship
            for relationship in repos.relationships.find_by_prisoner_number(prisoner_number)
            if relationship.current_term
        ]
        contacts = repos.contacts.get_many(r.contact_id for r in relationships)
        restrictions = self._relationship_restrictions(relationships)

        items: list[PrisonerRelationshipSnapshot] = []
        for relationship in relationships:
            contact = contacts.get(relationship.contact_id)
            if contact is None:
                raise NotFoundError(
                    f"Contact ({relationship.contact_id}) of relationship "
                    f"{relationship.require_id()} not found"
                )
            items.append(
                PrisonerRelationshipSnapshot(
                    prisoner_contact_id=relationship.require_id(),
                    contact_id=relationship.contact_id,
                    last_name=contact.last_name,
                    first_name=contact.first_name,
                    middle_names=contact.middle_names,
                    relationship_type=relationship.relationship_type,
                    relationship_to_prisoner=relationship.relationship_to_prisoner,
                    next_of_kin=relationship.next_of_kin,
                    emergency_contact=relationship.emergency_contact,
                    approved_visitor=relationship.approved_visitor,
                    active=relationship.active,
                    current_term=relationship.current_term,
                    restrictions=restrictions[relationship.require_id()],
                )
            )
        return PrisonerSnapshot(prisoner_number=prisoner_number, relationships=tuple(items))

    def _phones_and_addresses(
        self,
        contact_id: int,
        phones: Sequence[ContactPhone],
        addresses: Sequence[ContactAddress],
    ) -> tuple[tuple[PhoneSnapshot, ...], tuple[AddressSnapshot, ...]]:
        phones_by_id = {phone.require_id(): phone for phone in phones}
        links_by_address: defaultdict[int, list[AddressPhoneSnapshot]] = defaultdict(list)
        scoped_phone_ids: set[int] = set()
        for link in self._repositories.contact_address_phones.find_by_contact_id(contact_id):
            phone = phones_by_id.get(link.contact_phone_id)
            scoped_phone_ids.add(link.contact_phone_id)
            if phone is None:
                # dangling links are reported with empty phone fields
                log.warning(
                    "Address phone %s of contact %s points at unknown phone %s",
                    link.require_id(),
                    contact_id,
                    link.contact_phone_id,
                )
            links_by_address[link.contact_address_id].append(
                AddressPhoneSnapshot(
                    contact_address_phone_id=link.require_id(),
                    contact_phone_id=link.contact_phone_id,
                    phone_type=phone.phone_type if phone else None,
                    phone_number=phone.phone_number if phone else None,
                    ext_number=phone.ext_number if phone else None,
                )
            )

        global_phones = tuple(
            PhoneSnapshot(
                contact_phone_id=phone_id,
                phone_type=phone.phone_type,
                phone_number=phone.phone_number,
                ext_number=phone.ext_number,
            )
            for phone_id, phone in phones_by_id.items()
            if phone_id not in scoped_phone_ids
        )
        address_snapshots = tuple(
            AddressSnapshot(
                contact_address_id=address.require_id(),
                address_type=address.address_type,
                primary_address=address.primary_address,
                property=address.property,
                street=address.street,
                area=address.area,
                postcode=address.postcode,
                phones=tuple(links_by_address[address.require_id()]),
            )
            for address in addresses
        )
        return global_phones, address_snapshots

    def _relationship_restrictions(
        self, relationships: Sequence[PrisonerContact]
    ) -> defaultdict[int, tuple[RelationshipRestrictionSnapshot, ...]]:
        grouped: defaultdict[int, list[RelationshipRestrictionSnapshot]] = defaultdict(list)
        relationship_ids = [relationship.require_id() for relationship in relationships]
        for restriction in self._repositories.relationship_restrictions.find_by_relationship_ids(
            relationship_ids
        ):
            grouped[restriction.prisoner_contact_id].append(
                RelationshipRestrictionSnapshot(
                    prisoner_contact_restriction_id=restriction.require_id(),
                    restriction_type=restriction.restriction_type,
                    start_date=restriction.start_date,
                    expiry_date=restriction.expiry_date,
                )
            )
        return defaultdict(tuple, {key: tuple(value) for key, value in grouped.items()})
