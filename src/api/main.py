"""Application entry point."""

import os
import sys
from pathlib import Path
from dotenv import load_dotenv

# Load environment variables from .env file
# Must be called before Settings.from_env()
load_dotenv()

# Add src to path
# main.py is at /app/src/api/main.py, src is two levels up
_src_path = Path(__file__).parent.parent
sys.path.insert(0, str(_src_path))

from api.app import create_app
from api.config import Settings
from utils.logging import setup_structured_logging

# Set up structured JSON logging
setup_structured_logging()

app = create_app(Settings.from_env())


if __name__ == "__main__":
    import uvicorn
    port = int(os.getenv("PORT", 3000))
    # Application logs (via our structured logging) replace uvicorn's access log
    uvicorn.run(
        app,
        host="0.0.0.0",
        port=port,
        access_log=False,
    )
