"""
Taste-signal recording.

Responsibilities:
- Define the immutable taste-signal record and its per-type default strengths.
- Append signals for a user and list / delete them on request.
- Kick off a background rebuild of the user's taste embedding after each
  signal, without the caller waiting on it.
"""
