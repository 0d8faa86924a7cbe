"""
LLM integration layer.

Responsibilities:
- Manage Groq API configuration and credentials.
- Send the composed recommendation prompt to the model.
- Retry once with a stricter format reminder.
- Translate provider failures into typed timeout / rate-limit / service errors.
"""
