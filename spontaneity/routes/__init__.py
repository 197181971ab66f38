"""
FastAPI routers for all API endpoints.

- spontaneity: /engine/spontaneity and /demo/spontaneity
- admin: /admin/audit-logs
- feedback: /feedback, /abuse-signal, /ugc/submit, /save-result
- health: /health
"""
