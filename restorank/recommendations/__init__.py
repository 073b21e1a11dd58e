"""
Restaurant re-ranking engine.

Responsibilities:
- Score candidates from upstream retrieval with rating, popularity, distance,
  occasion and budget adjustments on top of their vector similarity.
- Sort and truncate, keeping per-signal contributions for debugging.
- Enforce cuisine diversity on the ranked list.
- Memoise results and hand the top picks to the LLM selection step.
"""
