"""
Room persistence layer.

Responsibilities:
- Keep one document per voting room, keyed by room id.
- Store the latest recommendation result for a room, idempotently.
- Skip persistence when the caller did not supply a room id.
"""
