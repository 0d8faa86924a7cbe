"""
Vote analysis layer.

Responsibilities:
- Aggregate raw participant votes into counts, averages and a ranked category list.
- Detect near-ties between leading categories (divergent preferences).
- Extract dietary restrictions mentioned in free-text comments.
- Project the analysis into the single- or multi-preference shape used for prompting.
"""
