"""api/ -- HTTP probe exposing the core checker through FastAPI."""
