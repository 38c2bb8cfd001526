import pytest
from unittest.mock import Mock, patch
from uuid import uuid4

from apps.realtime.backends import locmem
from apps.realtime.backends.base import BaseDelivery
from apps.realtime.backends.console import ConsoleDelivery
from apps.realtime.bus import EventBus, get_delivery_backend, get_event_bus
from apps.realtime.events import (
    InvitationReceived,
    InvitationStatusUpdated,
    ListCleared,
    ListItemAdded,
)


@pytest.fixture
def outbox():
    locmem.outbox.clear()
    yield locmem.outbox
    locmem.outbox.clear()


# =============================================================================
# Events
# =============================================================================

class TestEvents:

    def test_user_event_channel(self):
        user_id = uuid4()
        event = InvitationReceived(user_id=user_id, invitation={'id': 'abc'})

        assert event.channel == f'user:{user_id}'
        assert event.name == 'invitation_received'
        assert event.payload() == {'id': 'abc'}

    def test_group_event_channel(self):
        group_id = uuid4()
        event = ListItemAdded(group_id=group_id, item={'id': 'i'}, added_by={'id': 'u'})

        assert event.channel == f'group:{group_id}'
        assert event.payload() == {'item': {'id': 'i'}, 'addedBy': {'id': 'u'}}

    def test_status_update_payload(self):
        invitation_id = uuid4()
        event = InvitationStatusUpdated(
            user_id=uuid4(),
            invitation_id=invitation_id,
            status='DECLINED',
            invitation_type='GROUP_INVITE',
            recipient_name='Carol',
            group_name='Flatmates',
        )

        assert event.payload() == {
            'invitationId': str(invitation_id),
            'status': 'DECLINED',
            'invitationType': 'GROUP_INVITE',
            'recipientName': 'Carol',
            'groupName': 'Flatmates',
            'groupId': None,
        }


# =============================================================================
# EventBus
# =============================================================================

@pytest.mark.django_db
class TestEventBus:

    def test_publish_waits_for_commit(self, outbox, django_capture_on_commit_callbacks):
        group_id = uuid4()

        with django_capture_on_commit_callbacks(execute=False) as callbacks:
            get_event_bus().publish(ListCleared(group_id=group_id, list_id=uuid4(), cleared_by={}))

        assert outbox == []
        assert len(callbacks) == 1

        callbacks[0]()

        assert len(outbox) == 1
        assert outbox[0].channel == f'group:{group_id}'
        assert outbox[0].event == 'list_cleared'

    def test_deliver_routes_by_event_kind(self):
        backend = Mock(spec=BaseDelivery)
        bus = EventBus(backend=backend)
        user_id, group_id = uuid4(), uuid4()

        bus.deliver(InvitationReceived(user_id=user_id, invitation={}))
        bus.deliver(ListItemAdded(group_id=group_id))

        backend.emit_to_user.assert_called_once_with(user_id, 'invitation_received', {})
        backend.emit_to_group.assert_called_once_with(group_id, 'list_item_added', {'item': {}, 'addedBy': {}})

    def test_delivery_failure_is_logged_not_raised(self):
        backend = Mock(spec=BaseDelivery)
        backend.emit_to_user.side_effect = ConnectionError('socket closed')

        with patch('apps.realtime.bus.logger') as mock_logger:
            EventBus(backend=backend).deliver(InvitationReceived(user_id=uuid4()))

        mock_logger.warning.assert_called_once()

    def test_unknown_event_rejected_before_commit(self, django_capture_on_commit_callbacks):
        backend = Mock(spec=BaseDelivery)

        with django_capture_on_commit_callbacks(execute=True) as callbacks:
            with pytest.raises(TypeError):
                EventBus(backend=backend).publish({'event': 'nope'})

        assert callbacks == []
        backend.emit_to_user.assert_not_called()
        backend.emit_to_group.assert_not_called()


class TestBackends:

    def test_configured_backend_under_tests(self):
        assert isinstance(get_delivery_backend(), locmem.LocMemDelivery)

    def test_backend_by_path(self):
        backend = get_delivery_backend('apps.realtime.backends.console.ConsoleDelivery')

        assert isinstance(backend, ConsoleDelivery)

    def test_console_backend_logs(self):
        with patch('apps.realtime.backends.console.logger') as mock_logger:
            ConsoleDelivery().emit_to_user(uuid4(), 'invitation_received', {'id': uuid4()})

        mock_logger.info.assert_called_once()

    def test_base_backend_requires_send(self):
        with pytest.raises(NotImplementedError):
            BaseDelivery().emit_to_group(uuid4(), 'list_cleared', {})
