import threading

from mazechase.actions import MessageType
from mazechase.comms import Messenger


def test_read_returns_messages_in_publish_order():
    m = Messenger()
    m.publish("pursuer_0", 10, tick=3)
    m.publish("pursuer_1", 11, tick=3)
    m.publish("pursuer_2", 12, tick=4)

    msgs = m.read("pursuer_3")
    assert [msg.position for msg in msgs] == [10, 11, 12]
    assert [msg.seq for msg in msgs] == [0, 1, 2]
    assert all(msg.message_type == MessageType.OPPONENT_SEEN for msg in msgs)


def test_messages_are_not_consumed_by_reading():
    m = Messenger()
    m.publish("pursuer_0", 10, tick=3)
    assert len(m.read("pursuer_1")) == 1
    assert len(m.read("pursuer_1")) == 1
    assert len(m) == 1


def test_sender_does_not_read_own_messages():
    m = Messenger()
    m.publish("pursuer_0", 10, tick=3)
    assert m.read("pursuer_0") == ()
    assert len(m.read("pursuer_1")) == 1


def test_directed_message_only_reaches_recipient():
    m = Messenger()
    m.publish("pursuer_0", 10, tick=3, recipient="pursuer_2")
    assert m.read("pursuer_1") == ()
    assert len(m.read("pursuer_2")) == 1


def test_concurrent_publish_keeps_unique_sequence_numbers():
    m = Messenger()

    def worker(sender: str) -> None:
        for tick in range(200):
            m.publish(sender, tick, tick)

    threads = [threading.Thread(target=worker, args=(f"pursuer_{i}",)) for i in range(4)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    msgs = m.read("observer")
    assert len(msgs) == 800
    assert [msg.seq for msg in msgs] == list(range(800))
