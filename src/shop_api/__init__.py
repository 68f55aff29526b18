"""FastAPI back office for the shop."""
