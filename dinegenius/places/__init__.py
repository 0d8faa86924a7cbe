"""
Place lookup layer.

Responsibilities:
- Query the Google Places (New) text-search API for restaurants the model suggested.
- Overlay real photo URLs, map links and missing addresses on recommendations.
- Degrade to the unmodified recommendations when lookups fail or no key is set.
"""
