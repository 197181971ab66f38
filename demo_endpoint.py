"""
Run the Spontaneity Engine API locally.

Starts a reloading uvicorn server and prints the endpoints to try.
"""

import uvicorn

if __name__ == "__main__":
    print("=" * 60)
    print("Starting Spontaneity Engine Backend")
    print("=" * 60)
    print()
    print("📌 API Endpoints:")
    print("   - Health Check:   GET  http://localhost:8000/health")
    print("   - Demo widget:    POST http://localhost:8000/demo/spontaneity")
    print("   - Engine:         POST http://localhost:8000/engine/spontaneity")
    print("   - Audit logs:     GET  http://localhost:8000/admin/audit-logs")
    print("   - API Docs:            http://localhost:8000/docs")
    print()
    print("🔐 Authentication:")
    print("   /engine/* and /admin/* require:")
    print("   Authorization: Bearer <supabase access token>")
    print()
    print("📝 Test with curl:")
    print('   curl -X POST "http://localhost:8000/demo/spontaneity" \\')
    print('     -H "Content-Type: application/json" \\')
    print('     -d \'{"userInput": "Vibe: Relaxed, Time: 2 hours, Location: Denver"}\'')
    print()
    print("=" * 60)
    print("Starting server on http://localhost:8000")
    print("Press Ctrl+C to stop")
    print("=" * 60)
    print()

    uvicorn.run(
        "spontaneity.main:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
        log_level="info"
    )
