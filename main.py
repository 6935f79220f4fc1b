"""
Merch Studio API Server Entry Point

  uvicorn main:app --host 0.0.0.0 --port $PORT
"""

from merchstudio.server import app

# For local development
if __name__ == "__main__":
    import uvicorn
    uvicorn.run("main:app", host="0.0.0.0", port=8000, reload=True)
