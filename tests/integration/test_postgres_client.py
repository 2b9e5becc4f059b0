import os

import pytest

from api_project.database.client import DatabaseClient
from api_project.database.config import load_database_properties

if os.getenv("RUN_DB_INTEGRATION") != "1":
    pytest.skip("Set RUN_DB_INTEGRATION=1 to run database integration tests", allow_module_level=True)


@pytest.mark.integration
def test_round_trip_against_configured_database() -> None:
    client = DatabaseClient()
    client.initialize(load_database_properties())

    client.query_update("CREATE TABLE IF NOT EXISTS it_actors (id SERIAL PRIMARY KEY, name TEXT NOT NULL)")
    try:
        inserted = client.query_update("INSERT INTO it_actors (name) VALUES ('Carol') RETURNING id", True)
        rows = client.query_select(f"SELECT name FROM it_actors WHERE id = {inserted[0]['id']}")
    finally:
        client.query_update("DROP TABLE it_actors")

    assert rows == [{"name": "Carol"}]
    assert client.checked_out_connections == 0
