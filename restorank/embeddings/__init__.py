"""
Taste embeddings for users.

Responsibilities:
- Turn a user's taste signals into taste / chat / review texts.
- Encode those texts with a lightweight sentence-transformer model.
- Combine the component vectors into one weighted taste vector.
- Keep the latest embedding per user (last write wins).
"""
