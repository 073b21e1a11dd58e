"""
LLM integration layer.

Responsibilities:
- Manage Groq API configuration and credentials.
- Ask the LLM to pick the final few restaurants from the re-ranked list and
  write a short personal reason for each, in the user's language.
- Graceful fallback to the top of the ranking when the LLM is unavailable or
  returns invalid output.
"""
