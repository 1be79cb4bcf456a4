"""
API route modules for the paint-line dashboard.

This package contains subrouters for:
- Auth and Users: login, current user, user administration
- Production: hourly production records and analytics
- Materials: material settings, per-model consumption, consumption configuration
- Requests: item requisitions
- Quality: 8D problem reports
- Reports: CSV/Excel/PDF exports

Routers are included from paintshop.api.main (under the /api prefix).
"""
