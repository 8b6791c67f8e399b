"""Business modules for Gatekeeper.

Each module owns its schemas, services, repositories and routes.
"""
