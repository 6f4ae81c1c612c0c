"""
koopos_service tests

Covers the FastAPI application (`main.py`), the registration and sign-in
workflows, the inventory and category workflows, the response envelope and
database initialization.
"""
