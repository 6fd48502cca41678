"""
identity_service package

This package contains the backend logic for account signup and signin.
It includes:

- FastAPI application factory (`main.py`)
- Auth orchestration returning explicit outcomes (`service.py`)
- Payload validation (`validation.py`, `schemas.py`)
- Account store and SQLAlchemy models (`store.py`, `models.py`, `db.py`)
- Password hashing and JWT issuance (`auth.py`)
- Environment-driven settings (`config.py`)
"""
