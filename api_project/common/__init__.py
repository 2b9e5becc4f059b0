"""Cross-cutting helpers shared by the database layer and the API."""
