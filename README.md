# quotekeeper

A small HTTP server that keeps a collection of quotes in a SQLite database.
Each quote has a text, an author, a source and any number of tags. Over a
JSON API, quotes can be listed, fetched, created, updated, deleted and
searched.

## Installation

```
pip install .
```

To run the test suite as well:

```
pip install ".[test]"
pytest
```

## Running the server

```
quotekeeper
```

The same entry point can be started with `python -m quotekeeper.app`.

Options:

- `--host` is the address to bind (default `0.0.0.0`);
- `--port` is the port to listen on (default `3000`).

The database location comes from the `DATABASE_URL` environment variable.
It defaults to `sqlite://db/quotes.db`, which is the file `db/quotes.db`
relative to the working directory. The directory must already exist. Both
`sqlite://path` and `sqlite:path` are accepted, and anything after a `?` is
ignored. An empty path or `:memory:` gives an in-memory database. Any other
kind of URL is rejected with a `ValueError`. The tables are created on
start-up if they are not already there.

```
DATABASE_URL=sqlite://quotes.db quotekeeper --port 8080
```

The server logs at debug level.

## API

| Method   | Path             | Description                                   |
|----------|------------------|-----------------------------------------------|
| `GET`    | `/`              | HTML page listing all quotes                  |
| `GET`    | `/quotes`        | All quotes with their tags                    |
| `POST`   | `/quotes`        | Create a quote; answers `201 Created`         |
| `GET`    | `/quotes/search` | Search by `author`, `tag` and/or `search`     |
| `GET`    | `/quotes/{id}`   | A single quote                                |
| `PUT`    | `/quotes/{id}`   | Replace a quote's fields and tags             |
| `DELETE` | `/quotes/{id}`   | Delete a quote; answers `204 No Content`      |

Other paths served:

- `/swagger-ui` gives interactive API documentation.
- `/api-docs/openapi.json` gives the OpenAPI description.
- `/assets/...` gives static files from an `assets` directory in the working
  directory, when that directory exists.

CORS is open to any origin for `GET`, `POST`, `PUT` and `DELETE`.

A quote is returned as JSON, with its fields and its tags side by side:

```json
{
  "id": "1a2b3c4d",
  "text": "Simplicity is prerequisite for reliability.",
  "author": "Edsger W. Dijkstra",
  "source": "How do we tell truths that might hurt?",
  "tags": ["design", "software"]
}
```

Quote ids are eight lowercase hexadecimal digits, chosen at random when the
quote is created. Lists of quotes are ordered by author, then by text.

To create or update a quote, send `text`, `author` and `source`. You may
also send a list of `tags`; if the list is absent, the quote has no tags. An
update replaces all of the quote's tags.

```
curl -X POST http://localhost:3000/quotes \
     -H 'Content-Type: application/json' \
     -d '{"text": "Less is more.", "author": "Robert Browning", "source": "Andrea del Sarto", "tags": ["poetry"]}'
```

Searching:

- `author` matches any quote whose author contains the given text;
- `tag` matches quotes carrying exactly that tag;
- `search` matches quotes whose text, author or source contains the given text.

When several filters are given, a quote must match all of them.

```
curl 'http://localhost:3000/quotes/search?author=Browning&tag=poetry'
```

Errors from the service are answered with a JSON body of the form
`{"error": "<message>"}`:

- `404` when a quote does not exist;
- `500` for database failures.

A request body that lacks a required field, or has a field of the wrong
type, is rejected by request validation with `422`.

## Using it from Python

The storage layer, `quotekeeper.database.Database`, can be used on its own.
It can also be used as a context manager, which closes the connection on
exit.

```python
from quotekeeper.database import Database
from quotekeeper.models import QuoteInput

with Database("quotes.db") as db:
    db.migrate()
    created = db.create_quote(
        QuoteInput(text="Less is more.", author="Robert Browning", source="Andrea del Sarto"),
        ["poetry"],
    )
    print(db.get_quote_by_id(created.quote.id).to_dict())
```

Missing quotes raise `quotekeeper.errors.NotFoundError`, and SQLite failures
raise `quotekeeper.errors.DatabaseError`. Both are subclasses of `AppError`,
whose `to_response()` returns the HTTP status and the JSON body.

`quotekeeper.app.create_app(database)` builds the FastAPI application around
a `Database`, for serving with any ASGI server.

## What it does not do

There is no authentication: anyone who can reach the server can change or
delete quotes. The package has no tool for migrating an existing database
beyond creating the tables when they are missing.