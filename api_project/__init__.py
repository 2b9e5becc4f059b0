"""
Package marker for the `api_project` source tree.
It groups the database access layer and the HTTP collaborators built on top of it.
Most functionality lives in the sibling packages; this file intentionally stays lightweight.
"""
