"""
Quick demo script for the ClubFit API.

This script starts a local server and shows how to make requests to the endpoints.
"""

import uvicorn

if __name__ == "__main__":
    print("=" * 60)
    print("Starting ClubFit Backend Demo")
    print("=" * 60)
    print()
    print("📌 API Endpoints:")
    print("   - Health Check:  GET  http://localhost:8000/health")
    print("   - Recommend:     POST http://localhost:8000/api/recommend")
    print("   - Image Proxy:   GET  http://localhost:8000/api/image-proxy?url=...")
    print("   - Catalog Setup: POST http://localhost:8000/api/setup")
    print("   - API Docs:           http://localhost:8000/docs")
    print()
    print("📝 Test with curl:")
    print('   curl -X POST "http://localhost:8000/api/setup"')
    print('   curl -X POST "http://localhost:8000/api/recommend" \\')
    print('     -H "Content-Type: application/json" \\')
    print('     -d \'{"handicap": 12, "goal": "Forgiveness", "budget": "Mid-range"}\'')
    print()
    print("=" * 60)
    print("Starting server on http://localhost:8000")
    print("Press Ctrl+C to stop")
    print("=" * 60)
    print()

    uvicorn.run(
        "clubfit.main:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
        log_level="info"
    )
