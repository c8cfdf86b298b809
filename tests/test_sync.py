import pytest

from netclocksync.messages import MessageType
from netclocksync.sync import SYNC_NONE, SYNC_START_TIMEOUT, SyncManager


@pytest.fixture
def manager():
    return SyncManager()


def test_initial_state(manager):
    assert manager.expected == MessageType.NONE
    assert manager.level == SYNC_NONE == 255


@pytest.mark.parametrize("kind", [MessageType.HELLO, MessageType.LEADER, 77])
def test_set_expected_rejects_other_kinds(manager, kind):
    with pytest.raises(ValueError):
        manager.set_expected(kind)


@pytest.mark.parametrize("kind", [
    MessageType.NONE, MessageType.SYNC_START,
    MessageType.DELAY_REQUEST, MessageType.DELAY_RESPONSE,
])
def test_set_expected_accepts_sync_steps(manager, kind):
    manager.set_expected(kind)
    assert manager.expected == kind


@pytest.mark.parametrize("kind", [MessageType.HELLO, MessageType.HELLO_REPLY])
def test_hello_without_peers_awaits_sync_start(manager, kind):
    manager.update_expected(kind, 0)
    assert manager.expected == MessageType.SYNC_START


@pytest.mark.parametrize("kind", [MessageType.HELLO, MessageType.HELLO_REPLY])
def test_hello_with_peers_keeps_expected(manager, kind):
    manager.update_expected(kind, 3)
    assert manager.expected == MessageType.NONE


def test_sync_start_then_delay_response(manager):
    manager.update_expected(MessageType.SYNC_START, 2)
    assert manager.expected == MessageType.DELAY_RESPONSE
    manager.update_expected(MessageType.DELAY_RESPONSE, 2)
    assert manager.expected == MessageType.SYNC_START


def test_delay_request_completes_sync(manager):
    manager.set_expected(MessageType.DELAY_REQUEST)
    manager.update_expected(MessageType.DELAY_REQUEST, 1)
    assert manager.expected == MessageType.SYNC_START


@pytest.mark.parametrize("kind", [
    MessageType.CONNECT, MessageType.ACK_CONNECT, MessageType.LEADER,
    MessageType.GET_TIME, MessageType.TIME,
])
def test_other_messages_do_not_change_expected(manager, kind):
    manager.set_expected(MessageType.DELAY_RESPONSE)
    manager.update_expected(kind, 0)
    assert manager.expected == MessageType.DELAY_RESPONSE


def test_cancel_resets_level(manager):
    manager.level = 1
    manager.cancel()
    assert manager.level == SYNC_NONE


def test_sync_start_timeout_cancels(manager):
    manager.level = 2
    manager.on_sync_start_timeout(("127.0.0.1", 4000))
    assert manager.level == SYNC_NONE


def test_delay_timeout_awaits_sync_start(manager):
    manager.set_expected(MessageType.DELAY_RESPONSE)
    manager.on_delay_timeout()
    assert manager.expected == MessageType.SYNC_START


def test_receive_timeout_depends_on_expected(manager):
    assert manager.receive_timeout() is None
    manager.set_expected(MessageType.SYNC_START)
    assert manager.receive_timeout() == SYNC_START_TIMEOUT
    manager.set_expected(MessageType.DELAY_RESPONSE)
    assert manager.receive_timeout() is None