"""
Package marker for the HTTP collaborators in `api_project.api`.
It groups related modules under a stable import path and keeps package boundaries explicit.
"""
