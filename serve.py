"""
Start the Movie Recommender API locally with auto-reload.
"""

import uvicorn

if __name__ == "__main__":
    print("=" * 60)
    print("Starting Movie Recommender Backend")
    print("=" * 60)
    print()
    print("API Endpoints:")
    print("   - Health Check:     GET  http://localhost:8000/health")
    print("   - Recommend:        POST http://localhost:8000/api/recommend")
    print("   - Save:             POST http://localhost:8000/api/save")
    print("   - API Docs:              http://localhost:8000/docs")
    print()
    print("Test with curl:")
    print('   curl -X POST "http://localhost:8000/api/recommend" \\')
    print('     -H "Content-Type: application/json" \\')
    print('     -d \'{"userInput": "sci-fi with time travel"}\'')
    print()
    print("=" * 60)
    print("Press Ctrl+C to stop")
    print("=" * 60)
    print()

    uvicorn.run(
        "movie_recommender.main:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
        log_level="info"
    )
