"""Tests for RequestOptions."""

import json

import pytest
from pydantic import BaseModel

from couch_tools.client.exceptions import CouchJsonEncodeError
from couch_tools.client.options import Accept, JsonBody, RequestOptions


class Player(BaseModel):
    name: str
    nickname: str


class TestRequestOptionsBuilders:
    """Tests for the with_* setters."""

    def test_empty(self):
        """Test new options have nothing set."""
        options = RequestOptions()
        assert options.accept is None
        assert options.revision is None
        assert options.attachments is None
        assert options.body is None

    def test_setters_return_new_value(self, rev):
        """Test setters leave the original untouched."""
        original = RequestOptions()
        updated = original.with_accept_json().with_revision_query(rev)

        assert original == RequestOptions()
        assert updated.accept is Accept.JSON
        assert updated.revision == rev

    def test_order_independent(self, rev):
        """Test setter order does not matter."""
        a = RequestOptions().with_accept_json().with_revision_query(rev).with_attachments_query(True)
        b = RequestOptions().with_attachments_query(True).with_revision_query(rev).with_accept_json()
        assert a == b

    def test_json_body(self):
        """Test the body is wrapped."""
        options = RequestOptions().with_json_body({"a": 1})
        assert options.body == JsonBody({"a": 1})

    def test_options_are_frozen(self):
        """Test fields cannot be assigned."""
        options = RequestOptions()
        with pytest.raises(AttributeError):
            options.accept = Accept.JSON


class TestRequestOptionsRendering:
    """Tests for rendering options into HTTP artifacts."""

    def test_empty_renders_nothing(self):
        """Test no headers, query, or body without options."""
        options = RequestOptions()
        assert options.headers() == {}
        assert options.query_params() == {}
        assert options.encode_body() is None

    def test_accept_json(self):
        """Test accept renders only the Accept header."""
        options = RequestOptions().with_accept_json()
        assert options.headers() == {"Accept": "application/json"}
        assert options.query_params() == {}

    def test_revision(self, rev):
        """Test revision renders exactly one rev parameter."""
        options = RequestOptions().with_revision_query(rev)
        assert options.query_params() == {"rev": "1-1234567890abcdef1234567890abcdef"}
        assert options.headers() == {}

    @pytest.mark.parametrize("flag,expected", [(True, "true"), (False, "false")])
    def test_attachments(self, flag, expected):
        """Test the attachments flag renders as true/false."""
        options = RequestOptions().with_attachments_query(flag)
        assert options.query_params() == {"attachments": expected}

    def test_body(self):
        """Test a body renders JSON bytes and a Content-Type header."""
        options = RequestOptions().with_json_body({"name": "Babe Ruth", "number": 3})
        assert options.headers() == {"Content-Type": "application/json"}
        assert json.loads(options.encode_body()) == {"name": "Babe Ruth", "number": 3}

    def test_model_body(self):
        """Test a pydantic model body is serialized."""
        options = RequestOptions().with_json_body(Player(name="Babe Ruth", nickname="The Bambino"))
        assert json.loads(options.encode_body()) == {"name": "Babe Ruth", "nickname": "The Bambino"}
        assert options.jsonable_body() == {"name": "Babe Ruth", "nickname": "The Bambino"}

    def test_all_options(self, rev):
        """Test every option renders together."""
        options = (
            RequestOptions()
            .with_accept_json()
            .with_revision_query(rev)
            .with_attachments_query(True)
            .with_json_body([1, 2])
        )
        assert options.headers() == {"Accept": "application/json", "Content-Type": "application/json"}
        assert options.query_params() == {"rev": str(rev), "attachments": "true"}
        assert json.loads(options.encode_body()) == [1, 2]

    def test_unserializable_body(self):
        """Test an unserializable body raises CouchJsonEncodeError."""
        options = RequestOptions().with_json_body({"x": object()})
        with pytest.raises(CouchJsonEncodeError):
            options.encode_body()
        with pytest.raises(CouchJsonEncodeError):
            options.jsonable_body()
