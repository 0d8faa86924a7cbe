"""
Recommendation pipeline.

Responsibilities:
- Accept validated group votes and prompt options.
- Run vote analysis, prompt construction and the model call.
- Normalise the model reply into structured restaurant recommendations.
- Enrich recommendations with Places data and return them ready for API serialisation.
"""
