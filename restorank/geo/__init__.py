"""
Geo and availability helpers for candidate restaurants.

Responsibilities:
- Great-circle distance between a user and a restaurant.
- Opening-hours checks against Google-style periods / weekday text.
- In-memory hard filters (radius, city, open at the requested time).
"""
