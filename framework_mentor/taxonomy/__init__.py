"""Fixed vocabularies: framework categories, difficulty levels, answer types."""
