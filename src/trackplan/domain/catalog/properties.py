"""Direct CRUD services for properties."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from trackplan.domain.catalog.comparison import normalize_rules
from trackplan.domain.catalog.validation import validate_rules
from trackplan.domain.catalog.views import PropertyView
from trackplan.domain.errors import NotFoundError, UniqueConstraintError
from trackplan.domain.model import EntityType, NaturalKey, Property, utcnow

if TYPE_CHECKING:
    from uuid import UUID

    from trackplan.domain.catalog.definitions import PropertyChanges, PropertyDraft
    from trackplan.domain.ports.persistence import PropertyRepository
    from trackplan.domain.ports.unit_of_work import CatalogUnitOfWorkFactory

log = getLogger(__name__)


def create_property(
    draft: PropertyDraft,
    *,
    unit_of_work_factory: CatalogUnitOfWorkFactory,
) -> PropertyView:
    validate_rules(draft.validation_rules, draft.type)
    moment = draft.create_time or utcnow()
    with unit_of_work_factory() as uow:
        properties = uow.repositories.properties
        if properties.find_by_natural_key(draft.natural_key) is not None:
            raise UniqueConstraintError(EntityType.PROPERTY, str(draft.natural_key))
        prop = Property(
            name=draft.name,
            type=draft.type,
            description=draft.description,
            validation_rules=normalize_rules(draft.validation_rules),
            create_time=moment,
            update_time=moment,
        )
        properties.add(prop)
        view = PropertyView.from_entity(prop)
        uow.commit()

    log.info("Created property %s (%s)", view.id, draft.natural_key)
    return view


def get_property(
    property_id: UUID,
    *,
    unit_of_work_factory: CatalogUnitOfWorkFactory,
) -> PropertyView:
    with unit_of_work_factory() as uow:
        return PropertyView.from_entity(_require(uow.repositories.properties, property_id))


def list_properties(*, unit_of_work_factory: CatalogUnitOfWorkFactory) -> list[PropertyView]:
    with unit_of_work_factory() as uow:
        return [PropertyView.from_entity(prop) for prop in uow.repositories.properties.list_active()]


def update_property(
    property_id: UUID,
    changes: PropertyChanges,
    *,
    unit_of_work_factory: CatalogUnitOfWorkFactory,
) -> PropertyView:
    """Apply ``changes``; rules are checked against the resulting property type."""

    with unit_of_work_factory() as uow:
        properties = uow.repositories.properties
        prop = _require(properties, property_id)

        key = NaturalKey(
            changes.name if changes.name is not None else prop.name,
            changes.type if changes.type is not None else prop.type,
        )
        if key != prop.natural_key and properties.find_by_natural_key_excluding(key, prop.id):
            raise UniqueConstraintError(EntityType.PROPERTY, str(key))

        target_type = changes.type if changes.type is not None else prop.type
        if changes.validation_rules is not None:
            validate_rules(changes.validation_rules, target_type)
            prop.validation_rules = normalize_rules(changes.validation_rules)

        if changes.name is not None:
            prop.name = changes.name
        if changes.type is not None:
            prop.type = changes.type
        if changes.description is not None:
            prop.description = changes.description
        prop.touch()
        properties.update(prop)
        view = PropertyView.from_entity(prop)
        uow.commit()

    log.info("Updated property %s", property_id)
    return view


def delete_property(
    property_id: UUID,
    *,
    unit_of_work_factory: CatalogUnitOfWorkFactory,
) -> PropertyView:
    with unit_of_work_factory() as uow:
        properties = uow.repositories.properties
        prop = _require(properties, property_id)
        properties.soft_delete(prop, at=utcnow())
        view = PropertyView.from_entity(prop)
        uow.commit()

    log.info("Deleted property %s", property_id)
    return view


def _require(properties: PropertyRepository, property_id: UUID) -> Property:
    prop = properties.get(property_id)
    if prop is None:
        raise NotFoundError(EntityType.PROPERTY, property_id)
    return prop
