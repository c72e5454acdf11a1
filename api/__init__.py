"""
HTTP API (FastAPI) nad sesją gry.
"""
