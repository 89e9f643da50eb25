import os
import argparse
from shining_star.main import create_app

# Module-level app for `gunicorn run:app`
app = create_app()

if __name__ == '__main__':
    parser = argparse.ArgumentParser(description='Shining Star Cleaning Services development server')
    parser.add_argument('--host', default=os.environ.get('HOST', '127.0.0.1'))
    parser.add_argument('--port', type=int, default=int(os.environ.get('PORT', '3000')))
    args = parser.parse_args()

    app.run(host=args.host, port=args.port, debug=app.config.get('DEBUG', False))
