"""
Mini CMS
Application Entry Point

This file serves as the entry point for the Flask application.
It uses the application factory pattern defined in the minicms package.
"""

import logging
import os

from dotenv import load_dotenv

load_dotenv()

from minicms import create_app  # noqa: E402
from minicms.config import Config, ProductionConfig  # noqa: E402

logging.basicConfig(
    level=os.environ.get('LOG_LEVEL') or Config.LOG_LEVEL,
    format='%(asctime)s %(levelname)s [%(name)s] %(message)s',
)

# Create the Flask application using the factory
app = create_app(ProductionConfig if os.environ.get('APP_ENV') == 'production' else Config)

if __name__ == '__main__':
    app.run(debug=app.config['APP_ENV'] == 'development', host='0.0.0.0', port=int(os.environ.get('PORT', 3000)))
