"""
Use cases for the App Registry API.

Routers call these services instead of reaching into the record store, so the
boundary rules (update field whitelist, search criteria echo) live in one place.
"""
