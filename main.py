"""Application entry point."""
# Load environment variables from .env file
from dotenv import load_dotenv
import os

load_dotenv()

import uvicorn
from api.app import create_app
from update_handler.version import get_version_string

ENVIRONMENT = os.getenv("ENVIRONMENT", "development")
HOST = os.getenv("HOST", "0.0.0.0")
PORT = int(os.getenv("PORT", "8000"))

# Create the application
app = create_app()

if __name__ == "__main__":
    print("\n" + "=" * 60)
    print(f"🚀 Dotless Bot {get_version_string()} Starting")
    print("=" * 60)
    print(f"Environment:     {ENVIRONMENT}")
    print(f"Listening on:    {HOST}:{PORT}")
    print(f"Webhook secret:  {'set' if os.getenv('WEBHOOK_SECRET') else 'NOT_SET'}")
    print("=" * 60 + "\n")

    uvicorn.run(
        "main:app",
        host=HOST,
        port=PORT,
        reload=ENVIRONMENT == "development",
        log_level="info"
    )
