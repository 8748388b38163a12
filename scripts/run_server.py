"""
Standalone script to serve the TutorTracker backend locally with uvicorn.

Reads AIRTABLE_API_KEY, AIRTABLE_BASE_ID and the optional ADMIN_USERNAME /
ADMIN_PASSWORD from the environment or a .env file in the working directory.
"""
import argparse
import os
import sys

import uvicorn
from dotenv import load_dotenv

# --- Path Setup ---
# This allows the script to import the package from the 'src' directory
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..', 'src')))

def main():
    parser = argparse.ArgumentParser(description="Run the TutorTracker backend.")
    parser.add_argument("--host", default=os.environ.get("HOST", "127.0.0.1"))
    parser.add_argument("--port", type=int, default=int(os.environ.get("PORT", 8000)))
    parser.add_argument("--reload", action="store_true", help="Restart on code changes")
    args = parser.parse_args()

    # Loaded before the app import so Settings sees the values
    load_dotenv()

    uvicorn.run(
        "tutor_tracker_backend.main:app",
        host=args.host,
        port=args.port,
        reload=args.reload,
    )

if __name__ == '__main__':
    main()
