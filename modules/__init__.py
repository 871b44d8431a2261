"""
Feature modules for the Noteshare backend.

- users: local user records and lazy provisioning
- notes: note persistence and CRUD endpoints
- auth: token verification, identity resolution and access decisions

Each module keeps interfaces.py, models.py, exceptions.py and its
implementations side by side. Modules depend on each other's interfaces.
"""
