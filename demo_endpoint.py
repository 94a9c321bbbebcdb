"""
Local development server for the Prompt Writer backend.

Starts uvicorn with reload and prints the main endpoints.
"""

import uvicorn

if __name__ == "__main__":
    print("=" * 60)
    print("Starting Prompt Writer Backend")
    print("=" * 60)
    print()
    print("📌 API Endpoints:")
    print("   - Health Check:     GET  http://localhost:8000/health")
    print("   - DB Ping:          GET  http://localhost:8000/ping")
    print("   - Recommend Models: POST http://localhost:8000/recommend/ai-models")
    print("   - Templates:        GET  http://localhost:8000/templates")
    print("   - API Docs:              http://localhost:8000/docs")
    print()
    print("🔐 Authentication:")
    print("   Write endpoints (create/update/delete/copy/favorite) require:")
    print("   Authorization: Bearer <token>")
    print()
    print("📝 Test with curl:")
    print('   curl -X POST "http://localhost:8000/recommend/ai-models" \\')
    print('     -H "Content-Type: application/json" \\')
    print('     -d \'{"keywords": ["coding", "complex", "performance"]}\'')
    print()
    print("=" * 60)
    print("Starting server on http://localhost:8000")
    print("Press Ctrl+C to stop")
    print("=" * 60)
    print()

    uvicorn.run(
        "prompt_writer.main:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
        log_level="info"
    )
