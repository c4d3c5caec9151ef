import pytest

from flight_stats.auth.gmail_client import GmailClient, build_sender_query
from flight_stats.errors import ExtractionError, MailboxError
from gmail_fakes import FakeMessages, FakeService, encode, html_payload, text_payload


def _client(messages):
    service = FakeService(messages)
    return GmailClient(lambda: service)


def test_build_sender_query():
    query = build_sender_query(["noreply@lufthansa.com", "booking@easyjet.com"])

    assert query == "from:noreply@lufthansa.com OR from:booking@easyjet.com"


def test_search_messages_paginates():
    list_responses = {
        None: {"messages": [{"id": "msg-1"}], "nextPageToken": "page-2"},
        "page-2": {"messages": [{"id": "msg-2"}]},
    }
    messages = FakeMessages(list_responses, {})

    ids = _client(messages).search_messages("from:a@example.com", max_results=300)

    assert ids == ["msg-1", "msg-2"]
    assert len(messages.list_calls) == 2
    assert messages.list_calls[0]["q"] == "from:a@example.com"


def test_search_messages_stops_at_max_results():
    list_responses = {
        None: {"messages": [{"id": "msg-1"}, {"id": "msg-2"}], "nextPageToken": "page-2"},
    }
    messages = FakeMessages(list_responses, {})

    ids = _client(messages).search_messages("from:a@example.com", max_results=2)

    assert ids == ["msg-1", "msg-2"]
    assert len(messages.list_calls) == 1


def test_search_failure_is_mailbox_error():
    messages = FakeMessages({}, {}, errors={None: OSError("connection refused")})

    with pytest.raises(MailboxError):
        _client(messages).search_messages("from:a@example.com")


def test_get_message_body_strips_html():
    payloads = {
        "msg-1": html_payload("msg-1", "<html><body><p>Flight <b>AA123</b> on 5 Jan 24</p></body></html>"),
    }

    body = _client(FakeMessages({}, payloads)).get_message_body("msg-1")

    assert body == "Flight AA123 on 5 Jan 24"


def test_get_message_body_prefers_plain_text():
    payload = html_payload("msg-1", "<p>html version</p>")
    payload["payload"]["parts"].append({"mimeType": "text/plain", "body": {"data": encode("plain version")}})

    body = _client(FakeMessages({}, {"msg-1": payload})).get_message_body("msg-1")

    assert body == "plain version"


def test_get_message_body_single_part():
    body = _client(FakeMessages({}, {"msg-1": text_payload("msg-1", "BA456 on 10-Feb-2024")})).get_message_body("msg-1")

    assert body == "BA456 on 10-Feb-2024"


def test_get_message_body_without_text_part():
    payload = {"id": "msg-1", "payload": {"mimeType": "image/png", "body": {"attachmentId": "att"}}}

    assert _client(FakeMessages({}, {"msg-1": payload})).get_message_body("msg-1") is None


def test_malformed_encoding_is_extraction_error():
    payload = {"id": "msg-1", "payload": {"mimeType": "text/html", "body": {"data": "A"}}}

    with pytest.raises(ExtractionError):
        _client(FakeMessages({}, {"msg-1": payload})).get_message_body("msg-1")


def test_unavailable_message_is_mailbox_error():
    messages = FakeMessages({}, {}, errors={"msg-1": OSError("timed out")})

    with pytest.raises(MailboxError):
        _client(messages).get_message_body("msg-1")
