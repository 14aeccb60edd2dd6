"""
Contracts (data models).

This folder defines the record shapes exchanged with the storefront backend:
- Users, categories, products
- Cart items and orders
- Client-side values: notifications, cart estimate, typed fetch results

Why this exists:
- Pages and the state store rely on stable models, not on ad-hoc dicts
- Parsing is lenient: unknown fields are ignored, malformed records are dropped and logged
"""
