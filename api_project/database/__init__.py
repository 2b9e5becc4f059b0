"""
Package marker for the database access layer in `api_project.database`.
It groups the client facade, its configuration, the error taxonomy, and row decoding.
Most functionality lives in the sibling modules; this file intentionally stays lightweight.
"""
