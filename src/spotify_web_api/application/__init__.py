"""Application layer: query execution strategies."""
