"""
Core utilities shared across the App Registry API.

This package hosts configuration (env vars, storage paths) and cross-cutting
concerns such as logging setup. Routers, services and repositories depend on
these primitives instead of reading the environment themselves.
"""
