"""Unit tests for resource event handlers"""
import pytest

from resource_service.events.dispatcher import DispatchOutcome, EventDispatcher
from resource_service.events.envelope import CloudEvent, RESOURCE_CREATED, RESOURCE_DELETED
from resource_service.events.handlers import ResourceDirectory, ResourceEventHandlers
from resource_service.schemas.resource import ResourceEventPayload


@pytest.fixture
def directory():
    return ResourceDirectory()


@pytest.fixture
def dispatcher(directory):
    dispatcher = EventDispatcher()
    ResourceEventHandlers(directory).register(dispatcher)
    return dispatcher


def created(resource_id="r1", code="X1", name="N"):
    return CloudEvent.build(RESOURCE_CREATED, {"id": resource_id, "code": code, "name": name}, source="resource-service")


def deleted(resource_id="r1", code="X1", name="N"):
    return CloudEvent.build(RESOURCE_DELETED, {"id": resource_id, "code": code, "name": name}, source="resource-service")


class TestResourceEventHandlers:

    def test_registers_both_event_types(self, dispatcher):
        assert dispatcher.registered_types() == [RESOURCE_CREATED, RESOURCE_DELETED]

    @pytest.mark.asyncio
    async def test_created_adds_entry(self, dispatcher, directory):
        await dispatcher.on_envelope(created())

        assert directory.get("r1") == ResourceEventPayload(id="r1", code="X1", name="N")

    @pytest.mark.asyncio
    async def test_double_delivery_of_created_is_idempotent(self, dispatcher, directory):
        envelope = created()

        await dispatcher.on_envelope(envelope)
        await dispatcher.on_envelope(envelope)

        assert len(directory) == 1

    @pytest.mark.asyncio
    async def test_double_delivery_of_deleted_is_idempotent(self, dispatcher, directory):
        await dispatcher.on_envelope(created())
        envelope = deleted()

        await dispatcher.on_envelope(envelope)
        await dispatcher.on_envelope(envelope)

        assert directory.get("r1") is None
        assert len(directory) == 0

    @pytest.mark.asyncio
    async def test_deleted_for_unknown_resource_succeeds(self, dispatcher, directory):
        await dispatcher.on_envelope(deleted("never-seen"))

        assert len(directory) == 0


class TestResourceDirectory:

    def test_upsert_reports_change(self, directory):
        payload = ResourceEventPayload(id="r1", code="X1", name="N")

        assert directory.upsert(payload) is True
        assert directory.upsert(payload) is False
        assert directory.upsert(ResourceEventPayload(id="r1", code="X1", name="Renamed")) is True

    def test_snapshot_is_a_copy(self, directory):
        directory.upsert(ResourceEventPayload(id="r1", code="X1", name="N"))

        snapshot = directory.snapshot()
        snapshot.clear()

        assert len(directory) == 1


class TestRedelivery:

    @pytest.mark.asyncio
    async def test_redelivered_created_after_delete_is_ignored(self, dispatcher, directory):
        first_created = created()
        await dispatcher.on_envelope(first_created)
        await dispatcher.on_envelope(deleted())

        outcome = await dispatcher.on_envelope(first_created)

        assert outcome == DispatchOutcome.DUPLICATE
        assert directory.get("r1") is None

    @pytest.mark.asyncio
    async def test_new_created_after_delete_is_applied(self, dispatcher, directory):
        await dispatcher.on_envelope(created())
        await dispatcher.on_envelope(deleted())

        await dispatcher.on_envelope(created(name="Recreated"))

        assert directory.get("r1").name == "Recreated"
