import uvicorn
from kitchen.api.api_run import app
from kitchen.utilities.config import APP_HOST, APP_PORT
from kitchen.utilities.logging_setup import configure_logging


if __name__ == "__main__":
    configure_logging()
    # Print a friendly message that points to the URL you can open in a browser
    print(f"Uvicorn running on http://localhost:{APP_PORT} (Press CTRL+C to quit)")
    uvicorn.run(app, host=APP_HOST, port=APP_PORT)
