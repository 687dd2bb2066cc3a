"""Create and delete databases."""

from http import HTTPStatus

from ..action import Action
from ..exceptions import (
    CouchAPIError,
    CouchDatabaseExistsError,
    CouchNotFoundError,
    CouchUnauthorizedError,
    error_from_response,
)
from ..options import RequestOptions
from ..paths import DatabaseName, into_database_name
from ..transport import CouchResponse, CouchTransport


class CreateDatabase(Action[None, None]):
    """Create a database with ``PUT /db``.

    Errors:
        CouchDatabaseExistsError: A database with that name already exists
        CouchUnauthorizedError: The client lacks permission to create databases
    """

    def __init__(self, db_name: "DatabaseName | str"):
        super().__init__()
        self._db_name = db_name

    def _build_request(self, transport: CouchTransport):
        db_name = into_database_name(self._db_name)
        options = RequestOptions().with_accept_json()
        return transport.put([str(db_name)], options), None

    @classmethod
    def take_response(cls, response: CouchResponse, state: None) -> None:
        status = response.status_code
        if status in (HTTPStatus.CREATED, HTTPStatus.ACCEPTED):
            return None
        if status == HTTPStatus.PRECONDITION_FAILED:
            raise error_from_response(CouchDatabaseExistsError, response)
        if status == HTTPStatus.UNAUTHORIZED:
            raise error_from_response(CouchUnauthorizedError, response)
        raise CouchAPIError.from_response(response)


class DeleteDatabase(Action[None, None]):
    """Delete a database and every document in it with ``DELETE /db``.

    Errors:
        CouchNotFoundError: The database does not exist
        CouchUnauthorizedError: The client lacks permission to delete databases
    """

    def __init__(self, db_name: "DatabaseName | str"):
        super().__init__()
        self._db_name = db_name

    def _build_request(self, transport: CouchTransport):
        db_name = into_database_name(self._db_name)
        options = RequestOptions().with_accept_json()
        return transport.delete([str(db_name)], options), None

    @classmethod
    def take_response(cls, response: CouchResponse, state: None) -> None:
        status = response.status_code
        if status in (HTTPStatus.OK, HTTPStatus.ACCEPTED):
            return None
        if status == HTTPStatus.NOT_FOUND:
            raise error_from_response(CouchNotFoundError, response)
        if status == HTTPStatus.UNAUTHORIZED:
            raise error_from_response(CouchUnauthorizedError, response)
        raise CouchAPIError.from_response(response)
