"""Tests for the high-level CouchAPI."""

import pytest

from couch_tools.client.actions import AttachmentContent, ReadDocument
from couch_tools.client.api import CouchAPI
from couch_tools.client.config import CouchConfig
from couch_tools.client.document import Document
from couch_tools.client.exceptions import CouchConflictError
from couch_tools.client.options import RequestOptions
from couch_tools.client.paths import DatabaseName, DocumentId, Revision
from couch_tools.client.testing import MockResponse, MockTransport
from couch_tools.client.transport import Method

REV_1 = "1-1234567890abcdef1234567890abcdef"
REV_2 = "2-fedcba0987654321fedcba0987654321"


@pytest.fixture
def transport():
    return MockTransport()


@pytest.fixture
def api(transport):
    return CouchAPI(CouchConfig(), transport=transport)


class TestCouchAPI:
    """Tests for CouchAPI operations over the mock transport."""

    def test_create_database(self, api, transport):
        """Test create_database sends PUT /db."""
        transport.queue_response(MockResponse(201).with_json_body({"ok": True}))

        assert api.create_database("baseball") is None
        assert transport.sent == [transport.put(["baseball"], RequestOptions().with_accept_json())]

    def test_delete_database(self, api, transport):
        """Test delete_database sends DELETE /db."""
        transport.queue_response(MockResponse(200).with_json_body({"ok": True}))

        api.delete_database("/baseball")
        assert transport.sent[0].method is Method.DELETE

    def test_create_document_with_id(self, api, transport):
        """Test create_document passes the id and returns id and revision."""
        transport.queue_response(MockResponse(201).with_json_body({"ok": True, "id": "babe", "rev": REV_1}))

        doc_id, rev = api.create_document("baseball", {"name": "Babe Ruth"}, document_id="babe")

        assert doc_id == DocumentId("babe")
        assert rev == Revision.parse(REV_1)
        assert transport.sent[0].body.value == {"name": "Babe Ruth", "_id": "babe"}

    def test_read_document(self, api, transport):
        """Test read_document applies revision and attachment options."""
        transport.queue_response(
            MockResponse(200).with_json_body({"_id": "babe", "_rev": REV_1, "name": "Babe Ruth"})
        )

        document = api.read_document(
            "/baseball/babe",
            revision=REV_1,
            attachment_content=AttachmentContent.ALL,
        )

        assert document == Document(
            database=DatabaseName("baseball"),
            id=DocumentId("babe"),
            revision=Revision.parse(REV_1),
            content={"name": "Babe Ruth"},
        )
        sent = transport.sent[0]
        assert sent.revision_query == Revision.parse(REV_1)
        assert sent.attachments_query is True

    def test_update_document(self, api, transport):
        """Test update_document returns the new revision."""
        transport.queue_response(MockResponse(201).with_json_body({"ok": True, "id": "babe", "rev": REV_2}))
        document = Document(DatabaseName("baseball"), DocumentId("babe"), Revision.parse(REV_1), {"a": 1})

        assert api.update_document(document) == Revision.parse(REV_2)
        assert transport.sent[0].path == ("baseball", "babe")

    def test_delete_document_conflict(self, api, transport):
        """Test server errors propagate from API methods."""
        transport.queue_response(
            MockResponse(409).with_json_body({"error": "conflict", "reason": "Document update conflict."})
        )

        with pytest.raises(CouchConflictError):
            api.delete_document(("baseball", "babe"), REV_1)

    def test_run_custom_action(self, api, transport):
        """Test run executes an action built by the caller."""
        transport.queue_response(MockResponse(200).with_json_body({"_id": "babe", "_rev": REV_1}))

        document = api.run(ReadDocument(("baseball", "babe")))
        assert document.content == {}

    def test_last_request_id(self, api, transport):
        """Test last_request_id comes from the transport."""
        transport.queue_response(MockResponse(201, request_id="req-42").with_json_body({"ok": True}))

        api.create_database("baseball")
        assert api.last_request_id == "req-42"

    def test_context_manager_closes_transport(self, transport):
        """Test leaving the context closes the transport."""
        with CouchAPI(CouchConfig(), transport=transport) as api:
            assert api.transport is transport
        assert transport.closed is True


class TestDocumentContent:
    """Tests for typed document content."""

    def test_get_content_as_dict(self):
        """Test content validates as a dict by default."""
        document = Document(DatabaseName("db"), DocumentId("doc"), Revision.parse(REV_1), {"a": 1})
        assert document.get_content() == {"a": 1}

    def test_get_content_as_model(self):
        """Test content validates into a pydantic model."""
        from pydantic import BaseModel

        class Player(BaseModel):
            name: str

        document = Document(DatabaseName("db"), DocumentId("doc"), Revision.parse(REV_1), {"name": "Babe Ruth"})
        assert document.get_content(Player) == Player(name="Babe Ruth")

    def test_to_json_body(self):
        """Test serialization adds _id, _rev, and attachments."""
        document = Document(
            DatabaseName("db"),
            DocumentId("doc"),
            Revision.parse(REV_1),
            {"a": 1},
            attachments={"x.txt": {"stub": True}},
        )
        assert document.to_json_body() == {
            "a": 1,
            "_id": "doc",
            "_rev": REV_1,
            "_attachments": {"x.txt": {"stub": True}},
        }
