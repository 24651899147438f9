"""
Service layer abstraction.

Each service encapsulates the business logic for one concern
(submissions, votes, favorites, moderation, sessions) and talks to
the SQLite store directly.  Services raise the errors defined in
``core.errors``; they never build HTTP responses.
"""
