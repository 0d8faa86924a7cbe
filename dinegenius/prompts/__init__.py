"""
Prompt construction layer.

Responsibilities:
- Render a preference projection into a summary the model can act on.
- Spell out the exact JSON reply format expected from the model.
- Stay pure: identical inputs always produce identical prompt text.
"""
