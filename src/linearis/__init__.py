"""
linearis - a JSON-first command-line client for the Linear.app GraphQL API.

Human identifiers (team keys, project names, ``ABC-123`` issue identifiers,
label names, e-mails, cycle and milestone names) are resolved to Linear
UUIDs with one batched lookup per command.
"""

__version__ = "2025.11.2"
