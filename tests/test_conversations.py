import threading
from datetime import timedelta

import pytest

from alumni_server.utils.time_utils import utc_now

from conftest import unread_count


@pytest.fixture
def messaging(services):
    return services['messaging']


def test_no_messages_means_empty_inbox(messaging, alice):
    assert messaging.conversations(str(alice['_id'])) == []


def test_hi_scenario(messaging, alice, bob):
    messaging.send_message(str(alice['_id']), str(bob['_id']), content='hi')

    inbox = messaging.conversations(str(bob['_id']))
    assert len(inbox) == 1
    entry = inbox[0]
    assert entry['userId'] == str(alice['_id'])
    assert entry['user'] == {
        'id': str(alice['_id']),
        'name': 'Alice Wanjiru',
        'username': 'alice',
        'profilePicture': None,
    }
    assert entry['lastMessage']['content'] == 'hi'
    assert entry['unreadCount'] == 1


def test_one_entry_per_counterpart_with_latest_message(messaging, alice, bob, carol):
    a, b, c = str(alice['_id']), str(bob['_id']), str(carol['_id'])
    messaging.send_message(a, b, content='b1')
    messaging.send_message(b, a, content='b2')
    messaging.send_message(c, a, content='c1')
    messaging.send_message(a, b, content='b3')

    inbox = messaging.conversations(a)
    assert [e['userId'] for e in inbox] == [b, c]
    assert inbox[0]['lastMessage']['content'] == 'b3'
    assert inbox[0]['lastMessage']['senderUsername'] == 'alice'
    assert inbox[1]['lastMessage']['content'] == 'c1'


def test_sorted_by_last_message_time(messaging, repos, alice, bob, carol):
    a, b, c = str(alice['_id']), str(bob['_id']), str(carol['_id'])
    base = utc_now()
    repos.message.create({'sender_id': b, 'receiver_id': a, 'content': 'old', 'media': None,
                          'created_at': base - timedelta(hours=2), 'read_at': None})
    repos.message.create({'sender_id': c, 'receiver_id': a, 'content': 'new', 'media': None,
                          'created_at': base - timedelta(hours=1), 'read_at': None})

    assert [e['userId'] for e in messaging.conversations(a)] == [c, b]


def test_unread_count_matches_unread_messages_from_counterpart(messaging, repos, alice, bob, carol):
    a, b, c = str(alice['_id']), str(bob['_id']), str(carol['_id'])
    for text in ('1', '2', '3'):
        messaging.send_message(b, a, content=text)
    messaging.send_message(c, a, content='x')
    messaging.send_message(a, b, content='reply')
    messaging.mark_read(a, c)

    counts = {e['userId']: e['unreadCount'] for e in messaging.conversations(a)}
    assert counts == {
        b: unread_count(repos, a, b),
        c: unread_count(repos, a, c),
    }
    assert counts == {b: 3, c: 0}


def test_aggregation_is_idempotent(messaging, alice, bob, carol):
    a, b, c = str(alice['_id']), str(bob['_id']), str(carol['_id'])
    messaging.send_message(a, b, content='1')
    messaging.send_message(c, a, content='2')
    messaging.send_message(b, a, content='3')

    assert messaging.conversations(a) == messaging.conversations(a)


def test_counterpart_without_user_record_is_skipped(messaging, repos, alice, bob):
    a, b = str(alice['_id']), str(bob['_id'])
    messaging.send_message(b, a, content='bye')
    repos.user.delete({'_id': bob['_id']})

    assert messaging.conversations(a) == []


def test_concurrent_sends_both_directions(messaging, alice, bob):
    a, b = str(alice['_id']), str(bob['_id'])
    errors = []

    def send(sender, receiver, text):
        try:
            messaging.send_message(sender, receiver, content=text)
        except Exception as e:  # surfaced through the assertion below
            errors.append(e)

    threads = [
        threading.Thread(target=send, args=(a, b, 'from alice')),
        threading.Thread(target=send, args=(b, a, 'from bob')),
    ]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    assert errors == []

    history = messaging.store.list_between(a, b)
    assert sorted(m.content for m in history) == ['from alice', 'from bob']
    stamps = [(m.created_at, str(m.message_id)) for m in history]
    assert stamps == sorted(stamps)

    alice_inbox = messaging.conversations(a)
    bob_inbox = messaging.conversations(b)
    assert [(e['userId'], e['unreadCount']) for e in alice_inbox] == [(b, 1)]
    assert [(e['userId'], e['unreadCount']) for e in bob_inbox] == [(a, 1)]
