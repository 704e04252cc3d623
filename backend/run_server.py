"""
Run the Stock Themes backend server.
"""
import os
import sys

# Set working directory and path
backend_dir = os.path.dirname(os.path.abspath(__file__))
os.chdir(backend_dir)
sys.path.insert(0, backend_dir)

# Load environment
from dotenv import load_dotenv
load_dotenv(os.path.join(backend_dir, ".env"))

# Run uvicorn
import uvicorn

from stockthemes.core.config import settings

if __name__ == "__main__":
    print("Starting Stock Themes Backend Server...")
    print(f"Working directory: {backend_dir}")
    print(f"API Docs: http://{settings.host}:{settings.port}/docs")
    print("-" * 50)

    uvicorn.run(
        "stockthemes.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
        log_level=settings.log_level.lower(),
    )
