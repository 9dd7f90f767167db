from app.logging_config import setup_logging
from app.controller import create_app
from app.constants import APP_HOST, APP_PORT, DEBUG_MODE

setup_logging()
app = create_app()

if __name__ == '__main__':
    app.run(host=APP_HOST, port=APP_PORT, debug=DEBUG_MODE, use_reloader=False)
