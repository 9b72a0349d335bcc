#!/usr/bin/env python3
"""
Run the FastAPI backend server.

Usage:
    python run_api.py
"""

import uvicorn

from config.settings import APP_NAME

if __name__ == "__main__":
    print(f"🚀 Starting {APP_NAME} API server...")
    print("📡 API will be available at: http://localhost:8000")
    print("📚 Documentation at: http://localhost:8000/docs")
    print("🛑 Press CTRL+C to stop\n")

    try:
        # reload=True needs the app as an import string
        uvicorn.run(
            "api.main:app",
            host="0.0.0.0",
            port=8000,
            reload=True  # Enable auto-reload during development
        )
    except Exception as e:
        print(f"❌ Error starting server: {e}")
        import traceback
        traceback.print_exc()
