"""Domain layer: data models and pure calculators."""
